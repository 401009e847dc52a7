"""monolink: dependency graph engine for polyglot monorepos."""

__version__ = "0.1.0"
