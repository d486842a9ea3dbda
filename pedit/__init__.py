"""A small modal terminal text editor: text buffer, modes and curses front end."""

__version__ = "0.0.3"
__all__ = ["buffer", "defs", "editor"]