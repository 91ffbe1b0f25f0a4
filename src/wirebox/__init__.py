"""Minimal dependency injection container.

This package maps tokens (a type or a string) to factories with one of two
lifetimes, and resolves them on request.

Exports:
- `Container`: registry of factories and pre-built values.
- `Lifetime`: `PERMANENT` (built once, eagerly, at registration) or
  `TRANSIENT` (built on every resolve).
- `ResolutionError`: raised when a token cannot be resolved.
- `UnknownLifetimeError`: raised for a lifetime outside `Lifetime`.
- `global_container` / `global_resolve`: a process-wide container and its
  resolver, for applications that do not wire their own.
"""

from ._container import Container, Lifetime, ResolutionError, UnknownLifetimeError


global_container = Container()
global_resolve = global_container.get_resolver()

__all__ = [
    "Container",
    "Lifetime",
    "ResolutionError",
    "UnknownLifetimeError",
    "global_container",
    "global_resolve",
]
