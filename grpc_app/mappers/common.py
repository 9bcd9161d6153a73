from __future__ import annotations

import uuid
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from domain.common.exceptions import DomainValidationException


DTOType = TypeVar("DTOType", bound=BaseModel)


def build_dto(dto_cls: Type[DTOType], **fields: Any) -> DTOType:
    """Validate RPC input with the same DTO the REST layer uses.

    A pydantic ValidationError becomes DomainValidationException so the caller
    sees INVALID_ARGUMENT, matching HTTP 400 on the REST side.
    """
    try:
        return dto_cls(**fields)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first.get("loc", ()))
        reason = first.get("msg", "invalid value")
        message = f"invalid {loc}: {reason}" if loc else f"invalid request: {reason}"
        raise DomainValidationException(message, field=loc or None)


def parse_user_id(raw: str) -> str:
    try:
        return str(uuid.UUID(raw))
    except (TypeError, ValueError):
        raise DomainValidationException("invalid id: must be a UUID", field="id")


def parse_order_id(raw: int) -> int:
    # int64 on the wire already bounds the upper end
    if raw < 1:
        raise DomainValidationException("invalid id: must be a positive integer", field="id")
    return int(raw)
