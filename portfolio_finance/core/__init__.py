"""Core configuration, container and security helpers."""
