"""Cache infrastructure implementations.

Store backends, serializers and default configuration.
"""
