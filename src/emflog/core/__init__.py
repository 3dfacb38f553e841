"""Core domain: models, contexts, the logger and wire encoding."""
