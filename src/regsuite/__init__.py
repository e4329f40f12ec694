"""regsuite - end-to-end browser suite for the demo student registration form."""

__version__ = "0.1.0"
