"""Tri-state field patches for partial updates.

A PUT body distinguishes three cases per optional field: the key is absent
(leave the column alone), the key is present as ``null`` (clear the column)
or the key carries a value (set the column). ``FieldPatch`` makes that
explicit instead of relying on ``None`` meaning two different things.
"""

import enum
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PatchOp(str, enum.Enum):
    """What a patch does to its column."""

    UNSET = "unset"
    CLEAR = "clear"
    SET = "set"


@dataclass(frozen=True)
class FieldPatch(Generic[T]):
    """A single field's update instruction."""

    op: PatchOp
    value: T | None = None

    @classmethod
    def unset(cls) -> "FieldPatch[T]":
        return cls(PatchOp.UNSET)

    @classmethod
    def clear(cls) -> "FieldPatch[T]":
        return cls(PatchOp.CLEAR)

    @classmethod
    def of(cls, value: T) -> "FieldPatch[T]":
        return cls(PatchOp.SET, value)


def field_patch(payload: BaseModel, field_name: str) -> FieldPatch:
    """
    Build the patch for one field of a parsed request body.

    Args:
        payload: Validated pydantic model
        field_name: Python attribute name of the field

    Returns:
        FieldPatch: UNSET if the client omitted the key, CLEAR if it sent null,
        SET with the parsed value otherwise
    """
    if field_name not in payload.model_fields_set:
        return FieldPatch.unset()

    value = getattr(payload, field_name)
    if value is None:
        return FieldPatch.clear()
    return FieldPatch.of(value)


def collect_changes(patches: dict[str, FieldPatch]) -> dict[str, Any]:
    """
    Turn a mapping of column name to patch into UPDATE values.

    Unset patches are dropped; cleared patches become NULL.
    """
    changes: dict[str, Any] = {}
    for column, patch in patches.items():
        if patch.op is PatchOp.SET:
            changes[column] = patch.value
        elif patch.op is PatchOp.CLEAR:
            changes[column] = None
    return changes
