"""
Translation of store (SQLAlchemy / DBAPI) errors into HTTP responses.

Errors are identified by their SQLSTATE code, the standard code PostgreSQL
reports with every failure. SQLite has no SQLSTATE, so its messages are mapped
onto the same codes. The mapping itself is a pure function; the exception
handler at the bottom is the only place that calls it.
"""

import logging
from typing import NamedTuple, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DataError, DBAPIError, NoResultFound, SQLAlchemyError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
STRING_DATA_RIGHT_TRUNCATION = "22001"
NUMERIC_VALUE_OUT_OF_RANGE = "22003"
INVALID_TEXT_REPRESENTATION = "22P02"
NOT_NULL_VIOLATION = "23502"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"
NO_DATA = "02000"

STATUS_BY_CODE = {
    UNIQUE_VIOLATION: status.HTTP_409_CONFLICT,
    STRING_DATA_RIGHT_TRUNCATION: status.HTTP_400_BAD_REQUEST,
    NUMERIC_VALUE_OUT_OF_RANGE: status.HTTP_400_BAD_REQUEST,
    INVALID_TEXT_REPRESENTATION: status.HTTP_400_BAD_REQUEST,
    NOT_NULL_VIOLATION: status.HTTP_400_BAD_REQUEST,
    FOREIGN_KEY_VIOLATION: status.HTTP_400_BAD_REQUEST,
    CHECK_VIOLATION: status.HTTP_400_BAD_REQUEST,
    NO_DATA: status.HTTP_404_NOT_FOUND,
}

# SQLite reports constraint failures only through the message text
SQLITE_MESSAGE_CODES = (
    ("UNIQUE constraint failed", UNIQUE_VIOLATION),
    ("NOT NULL constraint failed", NOT_NULL_VIOLATION),
    ("FOREIGN KEY constraint failed", FOREIGN_KEY_VIOLATION),
    ("CHECK constraint failed", CHECK_VIOLATION),
)


class TranslatedError(NamedTuple):
    status_code: int
    message: str


def sanitize_message(message: str) -> str:
    """Keep responses single-line: drop line breaks, nothing else."""
    return message.replace("\r", "").replace("\n", "")


def translate_store_error(code: Optional[str], message: str) -> Optional[TranslatedError]:
    """
    Map a store error code to a response category.

    Returns None for codes outside the handled set, meaning the error must go
    down the default error path. Never raises.
    """
    status_code = STATUS_BY_CODE.get(code) if isinstance(code, str) else None
    if status_code is None:
        return None
    return TranslatedError(status_code, sanitize_message(str(message)))


def resolve_error_code(exc: BaseException) -> Optional[str]:
    """Find the SQLSTATE code of a SQLAlchemy exception, if it has one."""
    if isinstance(exc, NoResultFound):
        return NO_DATA

    if isinstance(exc, DBAPIError):
        orig = exc.orig
        # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
        code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
        if code:
            return code

        text = str(orig)
        for prefix, sqlite_code in SQLITE_MESSAGE_CODES:
            if text.startswith(prefix):
                return sqlite_code

        if isinstance(exc, DataError):
            return STRING_DATA_RIGHT_TRUNCATION

    return None


def error_message(exc: BaseException) -> str:
    """Driver message without the SQL statement SQLAlchemy appends to it."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    """
    Handler registered for SQLAlchemyError.

    Known codes become a JSON error response; anything else is re-raised so
    the default 500 handling applies.
    """
    translated = translate_store_error(resolve_error_code(exc), error_message(exc))
    if translated is None:
        logger.error(f"Unhandled store error on {request.method} {request.url.path}", exc_info=exc)
        raise exc

    logger.warning(
        f"Store error on {request.method} {request.url.path} -> "
        f"{translated.status_code}: {translated.message}"
    )
    return JSONResponse(
        status_code=translated.status_code,
        content={"detail": translated.message},
    )
