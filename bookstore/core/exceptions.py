"""
Exception classes for the application.
Every error is rendered as {"error": <detail>} by bookstore.core.error_handler.
"""

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=message
        )


class DatabaseError(HTTPException):
    """Raised when database operations fail."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message
        )


class AIConfigurationError(HTTPException):
    """Raised when the AI provider credentials are missing."""

    def __init__(self, message: str = "AI API key is not configured on the server."):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message
        )


class AIAnalysisError(HTTPException):
    """Raised when the AI provider call fails for a non-transient reason."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"AI analysis failed: {message}",
        )


class ProviderUnavailableError(HTTPException):
    """Raised when the AI provider is overloaded, times out or cannot be reached."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"AI provider is unavailable: {message}",
        )
