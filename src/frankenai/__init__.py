"""FrankenAI: stack detection and guideline generation for AI coding assistants."""

__version__ = "0.3.0"
