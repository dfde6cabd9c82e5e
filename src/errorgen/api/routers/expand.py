"""Expansion endpoints: POST /expand, POST /placeholders."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from errorgen.api.deps import get_settings
from errorgen.api.schemas import (
    DefinitionInfo,
    DiagnosticDetail,
    ExpandErrorResponse,
    ExpandRequest,
    ExpandResponse,
    PlaceholdersRequest,
    PlaceholdersResponse,
)
from errorgen.compiler.naming import function_name
from errorgen.compiler.pipeline import ExpansionPipeline
from errorgen.compiler.report import report
from errorgen.models.errors import Diagnostic, DiagnosticError
from errorgen.models.options import ExpansionOptions
from errorgen.parser.placeholders import extract_placeholders
from errorgen.settings import Settings
from errorgen.tokens.render import render

logger = logging.getLogger("errorgen.api")

router = APIRouter()


# -- helpers -----------------------------------------------------------------


def _options(body: ExpandRequest, settings: Settings) -> ExpansionOptions:
    """Merge request overrides onto the server defaults; 422 on invalid names."""
    base = settings.expansion_options().model_dump()
    if body.options is not None:
        base.update(body.options.model_dump(exclude_none=True))
    try:
        return ExpansionOptions(**base)
    except ValidationError as exc:
        detail = exc.errors(include_url=False, include_context=False, include_input=False)
        raise HTTPException(status_code=422, detail=detail) from None


def _error_response(diagnostic: Diagnostic) -> JSONResponse:
    body = ExpandErrorResponse(
        diagnostic=DiagnosticDetail(
            kind=diagnostic.kind,
            message=diagnostic.message,
            span=diagnostic.span,
            rendered=diagnostic.render(),
        ),
        output=render(report(diagnostic)),
    )
    return JSONResponse(status_code=422, content=body.model_dump(mode="json"))


# -- endpoints ---------------------------------------------------------------


@router.post(
    "/expand",
    response_model=ExpandResponse,
    responses={422: {"model": ExpandErrorResponse}},
)
def expand(
    body: ExpandRequest,
    settings: Settings = Depends(get_settings),  # noqa: B008
) -> ExpandResponse | JSONResponse:
    """Expand a declaration list into the enum and constructor functions."""
    options = _options(body, settings)
    logger.info("expand called (source length=%d, enum=%s)", len(body.source), options.enum_name)
    result = ExpansionPipeline(options).expand_source(body.source, body.filename)
    if result.diagnostic is not None:
        return _error_response(result.diagnostic)
    return ExpandResponse(
        output=result.rendered,
        enum_name=options.enum_name,
        definitions=[
            DefinitionInfo(
                id=d.id,
                severity=d.severity,
                message_template=d.message_template,
                placeholders=list(d.placeholders),
                function_name=function_name(d.id),
            )
            for d in result.definitions
        ],
    )


@router.post(
    "/placeholders",
    response_model=PlaceholdersResponse,
    responses={422: {"model": ExpandErrorResponse}},
)
def placeholders(body: PlaceholdersRequest) -> PlaceholdersResponse | JSONResponse:
    """Extract the placeholder names of a single message template."""
    try:
        names = extract_placeholders(body.template)
    except DiagnosticError as exc:
        return _error_response(exc.diagnostic)
    return PlaceholdersResponse(placeholders=names)
