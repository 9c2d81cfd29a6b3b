# -*- coding: utf-8 -*-
"""Curve, revolution-surface and spiral-trajectory geometry for sketching tools."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("curvesketch")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"
