"""Linkage failure type.

Every way linkage resolution can fail is one ``LinkageError`` tagged with a
``LinkageErrorKind``. The error records the node indices involved so a
caller can render its own diagnostics, and carries a pre-rendered message
naming the packages, manifests, and addresses (see ``diagnostics``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from movelink.exceptions import MoveLinkError


class LinkageErrorKind(Enum):
    """Why a linkage table could not be produced."""

    CYCLIC_DEPENDENCIES = "cyclic_dependencies"
    INCONSISTENT_LINKAGE = "inconsistent_linkage"
    MULTIPLE_IMPLEMENTATIONS = "multiple_implementations"
    UNPUBLISHED_OVERRIDE = "unpublished_override"
    UNPUBLISHED_PACKAGE = "unpublished_package"
    MISSING_ENVIRONMENT = "missing_environment"


class LinkageError(MoveLinkError):
    """Raised (or returned in a failed ``Linkage``) when resolution fails.

    Attributes:
        kind: The failure tag.
        root: Node whose linkage table was being computed, if any.
        node1: First conflicting node (the one already in the table).
        node2: Second conflicting node (the one that collided with it).
        cycle: Node indices of the offending cycle for
            ``CYCLIC_DEPENDENCIES``, first node repeated at the end.
        original_id: The contested original ID for conflicts.
    """

    def __init__(
        self,
        kind: LinkageErrorKind,
        message: str,
        *,
        root: int | None = None,
        node1: int | None = None,
        node2: int | None = None,
        cycle: list[int] | None = None,
        original_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.root = root
        self.node1 = node1
        self.node2 = node2
        self.cycle = list(cycle or [])
        self.original_id = original_id

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict. Absent fields are omitted."""
        data: dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        for key in ("root", "node1", "node2", "original_id"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.cycle:
            data["cycle"] = list(self.cycle)
        return data

    def __repr__(self) -> str:
        return (
            f"LinkageError(kind={self.kind.name}, root={self.root}, "
            f"node1={self.node1}, node2={self.node2}, cycle={self.cycle})"
        )
