"""Platform infrastructure shared by every quill service."""
