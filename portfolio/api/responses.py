from fastapi.responses import JSONResponse

from portfolio.schemas.common import FailureResponse


def failure(status_code: int, message: str, exc: Exception | None = None) -> JSONResponse:
    """``{message, error}`` body used by the content and upload endpoints."""
    return JSONResponse(
        status_code=status_code,
        content=FailureResponse(message=message, error=str(exc) if exc else None).model_dump(exclude_none=True),
    )
