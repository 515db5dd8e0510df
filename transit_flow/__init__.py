"""Transit information service for route status, obstructions and traffic comments."""

__version__ = "1.0.0"
