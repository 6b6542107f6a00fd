"""Data model for dialect control documents."""

from paconvert.model.lib import (
    FORMULA_PREFIX,
    ControlDocument,
    ControlInfo,
    ControlNode,
    PropertyValue,
    ValueKind,
    join_type_token,
    split_type_token,
)

__all__ = [
    "ControlDocument",
    "ControlInfo",
    "ControlNode",
    "PropertyValue",
    "ValueKind",
    "FORMULA_PREFIX",
    "split_type_token",
    "join_type_token",
]
