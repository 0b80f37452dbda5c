"""taskboard - task management API with real-time notifications."""

__version__ = "0.1.0"
