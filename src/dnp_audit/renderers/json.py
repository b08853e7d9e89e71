"""JSON renderer for dnp-audit output."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from dnp_audit.models.policy import ValidationResult
from dnp_audit.renderers.base import BaseRenderer, OutputFormat, RenderContext


class JSONRenderer(BaseRenderer):
    """Renderer for JSON output.

    Validation results get a ``passed`` flag next to their violations so
    CI jobs can consume the report without re-deriving the verdict.
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.JSON

    def render(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, ValidationResult):
            dict_data = {"passed": data.passed, **data.model_dump(mode="json")}
        elif isinstance(data, BaseModel):
            dict_data = data.model_dump(mode="json")
        else:
            dict_data = data

        return json.dumps(
            dict_data,
            indent=context.indent if context.indent else None,
            default=self._json_serializer,
            ensure_ascii=False,
        )

    @staticmethod
    def _json_serializer(obj: Any) -> Any:
        """Serialize types the json module does not handle."""
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, (set, tuple)):
            return list(obj)
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
