"""Configuration for smartspend."""

from smartspend.config.logging import configure_logging, use_stdlib_logging

__all__ = ["configure_logging", "use_stdlib_logging"]
