from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Envelope for framework-level errors (auth, validation, unhandled)."""

    status: int
    message: str
    details: dict | list | None = None


class MessageResponse(BaseModel):
    message: str


class FailureResponse(BaseModel):
    """Body of a failed content, upload or contact call."""

    message: str
    error: str | None = None
