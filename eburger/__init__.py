"""e-Burger: a single-storefront ordering app backed by local key-value storage."""

__version__ = "0.1.0"
