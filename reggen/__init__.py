"""Registry manifest generator for shadcn-style component registries."""

__version__ = "0.1.0"
