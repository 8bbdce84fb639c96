"""
Internal Movie Patch DTO

Carries a partial update from the API layer to the service layer with an
explicit record of which fields the client supplied.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping

from domain.entities import MUTABLE_FIELDS
from exceptions import ValidationError


@dataclass(frozen=True)
class MoviePatch:
    """
    Sparse set of field assignments.

    Presence decides what changes: a key in ``values`` is applied even when
    its value is None or empty; a missing key leaves the field untouched.
    """

    values: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Reject unknown or read-only fields."""
        invalid = {
            name: "Field is not patchable"
            for name in self.values
            if name not in MUTABLE_FIELDS
        }
        if invalid:
            raise ValidationError("Patch contains fields that cannot be changed", invalid)

    def __contains__(self, name: str) -> bool:
        return name in self.values

    @property
    def fields(self) -> frozenset:
        """Names of the fields this patch touches."""
        return frozenset(self.values)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "MoviePatch":
        """Build from a sparse JSON object: every key present is a change."""
        return cls(dict(document))

    @classmethod
    def from_operations(cls, operations: Iterable[Any]) -> "MoviePatch":
        """
        Build from field-level operations.

        Args:
            operations: Objects with ``op``, ``path`` and ``value`` attributes
                (PatchOperation). Later operations on a field win.

        Raises:
            ValidationError: If a path is not a single top-level field
        """
        values: Dict[str, Any] = {}
        invalid: Dict[str, str] = {}
        for operation in operations:
            name = operation.path[1:] if operation.path.startswith("/") else operation.path
            if not name or "/" in name:
                invalid[operation.path or "path"] = "Path must name a single top-level field"
                continue
            # remove resets the field to null
            values[name] = None if operation.op == "remove" else operation.value
        if invalid:
            raise ValidationError("Patch contains invalid paths", invalid)
        return cls(values)
