from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from pokersettle.domain import DomainValidationError, PlayerNotFoundError


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": message,
            "details": details,
        },
    )


def ledger_error(exc: DomainValidationError, **details: Any) -> HTTPException:
    message = str(exc)
    if isinstance(exc, PlayerNotFoundError):
        return api_error(
            code="player_not_found",
            message=message,
            details=details or None,
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return api_error(code="invalid_ledger", message=message, details=details or None)
