"""classprefix: namespace generated utility classes inside JS/TS sources."""

__version__ = "0.3.0"

__all__ = ["__version__"]
