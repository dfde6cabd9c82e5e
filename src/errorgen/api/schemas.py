"""API request/response Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from errorgen.models.errors import DiagnosticKind, SourceSpan
from errorgen.models.options import DuplicateIdPolicy, Visibility


class OptionsOverride(BaseModel):
    """Per-request overrides of the server's expansion defaults."""

    enum_name: str | None = None
    visibility: Visibility | None = None
    error_type: str | None = None
    severity_type: str | None = None
    duplicate_ids: DuplicateIdPolicy | None = None


class ExpandRequest(BaseModel):
    """Request body for POST /expand."""

    source: str = Field(description="Declaration list, e.g. `Foo : E : \"bad {x}\"`")
    filename: str = Field(default="<input>", description="Name used in diagnostic spans")
    options: OptionsOverride | None = None


class DefinitionInfo(BaseModel):
    """One parsed declaration and the function generated for it."""

    id: str
    severity: str
    message_template: str
    placeholders: list[str] = []
    function_name: str


class DiagnosticDetail(BaseModel):
    """The diagnostic that stopped an expansion."""

    kind: DiagnosticKind
    message: str
    span: SourceSpan | None = None
    rendered: str


class ExpandResponse(BaseModel):
    """Response body for a successful POST /expand."""

    ok: bool = True
    output: str
    enum_name: str
    definitions: list[DefinitionInfo] = []


class ExpandErrorResponse(BaseModel):
    """Response body for a failed POST /expand (422)."""

    ok: bool = False
    diagnostic: DiagnosticDetail
    output: str = Field(description="Rendered compile_error! invocation")


class PlaceholdersRequest(BaseModel):
    """Request body for POST /placeholders."""

    template: str


class PlaceholdersResponse(BaseModel):
    """Response body for POST /placeholders."""

    placeholders: list[str] = []


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""
