"""powerdoc - static HTML documentation sites from doclet collections."""

__version__ = "0.1.0"
