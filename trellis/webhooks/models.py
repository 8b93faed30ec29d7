"""Webhook request model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class WebhookRequest:
    """Framework-neutral view of an inbound webhook HTTP request."""

    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    payload: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)

    def has_header(self, name: str) -> bool:
        lowered = name.lower()
        return any(key.lower() == lowered for key in self.headers)

    def get(self, name: str, default: Any = None) -> Any:
        """Look a parameter up in the body first, then the query string."""
        if name in self.payload:
            return self.payload[name]
        return self.query.get(name, default)
