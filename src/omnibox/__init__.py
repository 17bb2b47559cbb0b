"""Resolve short typed fragments into repository destinations."""

from __future__ import annotations

__version__ = "0.1.0"
