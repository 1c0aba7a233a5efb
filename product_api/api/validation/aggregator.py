"""Turn accumulated rule failures into a single 400 response."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from product_api.api.validation.rules import (
    FieldError,
    RequestData,
    Rule,
    ValidationResult,
    run_rules,
)

logger = logging.getLogger(__name__)


class InputValidationError(Exception):
    """Raised when a request fails one or more validation rules."""

    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


def handle_input_errors(result: ValidationResult) -> None:
    """Stop the request when ``result`` holds any error."""
    if not result.is_empty():
        raise InputValidationError(list(result.errors))


async def read_json_body(request: Request) -> dict[str, Any]:
    """JSON object body of the request; anything else reads as ``{}``.

    Only ``application/json`` bodies are parsed, other content types are
    ignored.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.split(";", 1)[0].strip().lower() != "application/json":
        return {}
    raw = await request.body()
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        logger.debug(f"Ignoring malformed JSON body on {request.method} {request.url.path}")
        return {}
    return payload if isinstance(payload, dict) else {}


def validate(rules: Iterable[Rule]) -> Callable[[Request], Awaitable[RequestData]]:
    """Build a dependency running ``rules`` then the aggregator.

    The dependency returns the inspected :class:`RequestData` so handlers
    read the same body the rules saw.
    """
    rules = tuple(rules)

    async def dependency(request: Request) -> RequestData:
        data = RequestData(
            path=dict(request.path_params),
            body=await read_json_body(request),
        )
        handle_input_errors(run_rules(rules, data))
        return data

    return dependency


async def input_validation_exception_handler(
    request: Request, exc: InputValidationError
) -> JSONResponse:
    logger.info(
        f"Rejected {request.method} {request.url.path} with {len(exc.errors)} validation error(s)"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": [error.to_dict() for error in exc.errors]},
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI's own validation failures in the same 400 shape."""
    errors = []
    for item in exc.errors():
        loc = list(item.get("loc", ()))
        location = "params" if loc and loc[0] == "path" else "body"
        path = ".".join(str(part) for part in loc[1:]) or str(loc[0] if loc else "")
        errors.append(
            FieldError(msg=item.get("msg", "Invalid value"), path=path, location=location)
        )
    return await input_validation_exception_handler(request, InputValidationError(errors))
