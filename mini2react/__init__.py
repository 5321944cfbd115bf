"""mini2react: migrate mini-program components to React function components."""

__version__ = "0.1.0"
