"""Core business logic layer.

Subpackages:
- scaling: serving-size scaling of ingredient quantities
- timers: per-ingredient cooking timer registry
"""
__all__ = ["scaling", "timers"]
