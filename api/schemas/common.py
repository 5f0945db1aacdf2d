from __future__ import annotations

from pydantic import BaseModel


class ErrorBody(BaseModel):
    model_config = {"extra": "allow"}

    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorBody
