from __future__ import annotations

from .Str import Str

__all__ = ['Str']
