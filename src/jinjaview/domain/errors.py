from __future__ import annotations

"""
Domain Error Taxonomy.

All failures raised by the scanner, the tree builder and the view layer
derive from JinjaViewError. Nothing here recovers: errors are raised at
the point of detection and surfaced to the caller unchanged.
"""

from typing import Any, Dict


class JinjaViewError(Exception):
    """
    Base error carrying a stable code and structured context.

    Usage:
        raise UnitNotFoundError(unit="Blog")
    """

    code: str = "JINJAVIEW_ERROR"

    def __init__(self, **context: Any) -> None:
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form for logs and JSON output."""
        return {"code": self.code, **self.context}


class InvalidInputError(JinjaViewError):
    """A path set entry is not a path string."""
    code = "INVALID_INPUT"


class UnitNotFoundError(JinjaViewError):
    """Neither the application nor a registered plugin carries this name."""
    code = "UNIT_NOT_FOUND"


class MissingTemplateError(JinjaViewError):
    """No template file exists for any of the configured extensions."""
    code = "MISSING_TEMPLATE"


class MissingLayoutError(MissingTemplateError):
    code = "MISSING_LAYOUT"
