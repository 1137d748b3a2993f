"""Configuration, logging and sanitization."""
