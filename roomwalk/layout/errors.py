"""Layout generation error taxonomy.

Every error carries enough context (position, direction, category) to
diagnose a bad configuration; ``to_dict`` mirrors the ``{error, code}``
payload the HTTP layer returns.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class LayoutError(Exception):
    code = "layout_error"

    def __init__(self, message: str, *, position=None, direction=None, category=None):
        super().__init__(message)
        self.message = message
        self.position = position
        self.direction = direction
        self.category = category

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"error": self.message, "code": self.code}
        if self.position is not None:
            out["position"] = list(self.position)
        if self.direction is not None:
            out["direction"] = getattr(self.direction, "name", str(self.direction))
        if self.category is not None:
            out["category"] = getattr(self.category, "name", str(self.category))
        return out


class ConfigurationError(LayoutError):
    """Fatal before any stepping: generation must not start."""

    code = "configuration"


class NoAnchorsAvailable(ConfigurationError):
    code = "no_anchors"

    def __init__(self, message: str = "anchor provider returned no starting positions", **context):
        super().__init__(message, **context)


class EmptyCategory(ConfigurationError):
    code = "empty_category"

    def __init__(self, category, message: Optional[str] = None, **context):
        name = getattr(category, "name", str(category))
        super().__init__(message or f"room category {name} has no variants", category=category, **context)


class SpawnError(LayoutError):
    """Raised by a spawn sink that could not realize a placement."""

    code = "spawn_failed"


class GenerationAborted(LayoutError):
    """The in-flight run died on a spawn failure; no back-fill, no level-ready."""

    code = "generation_aborted"


__all__ = [
    "LayoutError",
    "ConfigurationError",
    "NoAnchorsAvailable",
    "EmptyCategory",
    "SpawnError",
    "GenerationAborted",
]
