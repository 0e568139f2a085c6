"""Dependency injection."""

from trait_watch.DI.container import Container

__all__ = ["Container"]
