"""Uniform JSON envelopes returned by every API endpoint."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from starlette.responses import JSONResponse


class Response(BaseModel):
    code: int
    message: str
    data: Any | None = None


def success_response(data: Any = None) -> JSONResponse:
    """Standard success envelope; ``data`` is left out when there is none."""
    body = Response(code=200, message="success", data=data)
    return JSONResponse(
        status_code=200,
        content=jsonable_encoder(body, exclude_none=data is None),
    )


def error_response(status_code: int, message: str) -> JSONResponse:
    """Standard error envelope."""
    body = Response(code=status_code, message=message)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude={"data"}),
    )
