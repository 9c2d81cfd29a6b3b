"""I/O utilities for curvesketch."""

from .obj import format_obj, read_obj, write_obj

__all__ = ['format_obj', 'read_obj', 'write_obj']
