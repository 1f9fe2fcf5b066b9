"""A space shooter arcade game built on pygame."""

__version__ = "1.0.0"
__all__ = ["__version__"]