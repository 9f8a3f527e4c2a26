from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class BarSeriesError(Exception):
    """Raised while loading chart params or defaults; rendering itself never raises."""

    code: str
    message: str
    hint: str
    context: dict[str, Any] | None = None

    def __str__(self) -> str:
        if self.context:
            where = ", ".join(f"{key}={value}" for key, value in sorted(self.context.items()))
            return f"{self.message} ({where})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        payload = {"code": self.code, "message": self.message, "hint": self.hint}
        if self.context:
            payload["context"] = self.context
        return payload
