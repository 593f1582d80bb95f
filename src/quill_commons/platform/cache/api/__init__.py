"""Cache API layer - FastAPI wiring, no routes."""
