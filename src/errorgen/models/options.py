"""Expansion options: the names and visibility of generated declarations."""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

DEFAULT_ENUM_NAME = "ErrorCode"


class Visibility(StrEnum):
    PUBLIC = "pub"
    CRATE = "pub(crate)"
    PRIVATE = "private"


class DuplicateIdPolicy(StrEnum):
    REJECT = "reject"  # any repeated id is a DuplicateDefinition
    MERGE = "merge"  # identical redeclarations collapse into the first


class ExpansionOptions(BaseModel):
    """Options recognized by one expansion."""

    model_config = ConfigDict(frozen=True)

    enum_name: str = DEFAULT_ENUM_NAME
    visibility: Visibility = Visibility.PUBLIC
    error_type: str = "Error"
    severity_type: str = "Severity"
    duplicate_ids: DuplicateIdPolicy = DuplicateIdPolicy.REJECT

    @field_validator("enum_name", "error_type", "severity_type")
    @classmethod
    def _check_identifier(cls, v: str) -> str:
        if not _IDENT_RE.match(v):
            raise ValueError(f"'{v}' is not a valid identifier")
        return v
