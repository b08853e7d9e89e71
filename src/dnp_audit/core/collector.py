"""Violation collector for a single validation run."""

from __future__ import annotations

from dnp_audit.models.policy import Violation, ViolationKind


class ViolationCollector:
    """Accumulates violations without stopping at the first one.

    A collector belongs to exactly one validation run. Create a new one per
    run instead of clearing and reusing an existing instance.
    """

    def __init__(self) -> None:
        self._violations: list[Violation] = []

    def add(self, kind: ViolationKind, message: str, service: str | None = None) -> None:
        """Record a violation."""
        self._violations.append(Violation(kind=kind, message=message, service=service))

    @property
    def violations(self) -> list[Violation]:
        """Violations in the order they were recorded."""
        return list(self._violations)

    def __len__(self) -> int:
        return len(self._violations)

    def __bool__(self) -> bool:
        return bool(self._violations)
