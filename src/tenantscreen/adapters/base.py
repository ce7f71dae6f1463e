from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(slots=True, frozen=True)
class CheckOutcome:
    """Result of one provider check.

    A failed outcome carries no fields; the orchestrator substitutes the
    check's defaults for it.
    """

    check: str
    fields: dict[str, Any] = field(default_factory=dict)
    request_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, check: str, error: str) -> "CheckOutcome":
        return cls(check=check, error=error)


@runtime_checkable
class SandboxCheck(Protocol):
    """Check run against a pre-registered sandbox subject."""

    name: str

    def run(self, credential: str, identity: dict[str, Any]) -> CheckOutcome:
        """Call the provider and return the extracted report fields."""
