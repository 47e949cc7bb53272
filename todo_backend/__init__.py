"""Todo list REST backend with tag support."""

__version__ = "1.0.0"
