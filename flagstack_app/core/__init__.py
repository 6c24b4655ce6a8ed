"""Core infrastructure: bootstrap, logging, error handling and module registry."""
