"""Core infrastructure: configuration, logging, errors, events and the task store."""
