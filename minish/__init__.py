"""A small command shell with pipelines, output redirection, history and completion."""

__version__ = "0.1.0"
__all__ = ["__version__"]