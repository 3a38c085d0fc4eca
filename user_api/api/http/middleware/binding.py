"""Request binding helpers used by the HTTP layer.

``bind_and_call`` turns a plain handler into a route endpoint: the request
models declared for the route are built from the JSON body or the query
string before the handler runs, and a failed bind short-circuits with a 400
envelope.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field, ValidationError, field_validator
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from user_api.api.http.response import error_response
from user_api.api.utils.app_startup import get_logger

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

MAX_PATH_ID = 2**32 - 1

Handler = Callable[..., Response | Awaitable[Response]]  # handler(request, *models)

Endpoint = Callable[[Request], Awaitable[Response]]

log = get_logger("binding")


def _query_values(request: Request) -> dict[str, str]:
    # A repeated key binds its first value
    values: dict[str, str] = {}
    for key, value in request.query_params.multi_items():
        values.setdefault(key, value)
    # Empty query values behave as if the parameter was not sent
    return {key: value for key, value in values.items() if value != ""}


def _bind(request: Request, model_type: type[BaseModel], body: bytes | None) -> Any:
    if body is not None:
        return model_type.model_validate_json(body)
    return model_type.model_validate(_query_values(request))


def _openapi_extra(bind_types: tuple[type[BaseModel], ...], has_body: bool) -> dict:
    """Describe the bound models so the generated API docs stay accurate."""
    extra: dict[str, Any] = {}
    parameters = []

    for index, model_type in enumerate(bind_types):
        schema = model_type.model_json_schema()
        if has_body and index == 0:
            extra["requestBody"] = {
                "required": True,
                "content": {"application/json": {"schema": schema}},
            }
            continue

        required = set(schema.get("required", []))
        for name, prop in schema.get("properties", {}).items():
            parameters.append(
                {
                    "name": name,
                    "in": "query",
                    "required": name in required,
                    "schema": prop,
                }
            )

    if parameters:
        extra["parameters"] = parameters
    return extra


def bind_and_call(handler: Handler, *bind_types: type[BaseModel]) -> Endpoint:
    """Build an endpoint that binds ``bind_types`` and then calls ``handler``.

    On ``POST``/``PUT``/``PATCH`` requests the first model is parsed from the
    JSON body and any further models from the query string; every other
    method binds all models from the query string. The handler is invoked as
    ``handler(request, *models)``. Sync handlers run in the threadpool.
    """

    async def endpoint(request: Request) -> Response:
        body = await request.body() if request.method in BODY_METHODS else None

        models = []
        for index, model_type in enumerate(bind_types):
            source = body if index == 0 else None
            try:
                models.append(_bind(request, model_type, source))
            except ValidationError as exc:
                log.bind(
                    source="query" if source is None else "body",
                    model=model_type.__name__,
                    path=request.url.path,
                ).error("Request binding failed: {}", exc)
                return error_response(400, str(exc))

        if inspect.iscoroutinefunction(handler):
            return await handler(request, *models)
        return await run_in_threadpool(handler, request, *models)

    # Not functools.wraps: FastAPI would read the handler's signature
    endpoint.__name__ = getattr(handler, "__name__", "endpoint")
    endpoint.__doc__ = handler.__doc__
    return endpoint


def add_bound_route(
    router: APIRouter,
    path: str,
    handler: Handler,
    *bind_types: type[BaseModel],
    methods: list[str],
    **kwargs: Any,
) -> None:
    """Register ``bind_and_call(handler, *bind_types)`` on ``router``."""
    has_body = any(method.upper() in BODY_METHODS for method in methods)
    router.add_api_route(
        path,
        bind_and_call(handler, *bind_types),
        methods=methods,
        response_model=None,
        openapi_extra=_openapi_extra(bind_types, has_body),
        **kwargs,
    )


class PathParam(BaseModel):
    """The ``{id}`` path segment; an unsigned 32-bit integer."""

    id: int = Field(ge=0, le=MAX_PATH_ID)

    @field_validator("id", mode="before")
    @classmethod
    def _decimal_digits_only(cls, value: Any) -> Any:
        # No sign, whitespace, decimal point or digit separators
        if not isinstance(value, str) or not (value.isascii() and value.isdigit()):
            raise ValueError("id must be an unsigned base-10 integer")
        return value


def get_path_id(request: Request) -> int:
    """Parse the ``id`` path parameter, raising ``ValidationError`` if invalid."""
    return PathParam.model_validate({"id": request.path_params.get("id")}).id
