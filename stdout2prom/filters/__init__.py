from __future__ import annotations

from .passthrough import PassThroughPolicy

__all__ = ["PassThroughPolicy"]
