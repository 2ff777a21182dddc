"""Domain concept for mapping reminder-engine exceptions to HTTP responses."""
from dataclasses import dataclass

from agribooks.core.exceptions import AgribooksError


@dataclass(frozen=True)
class ErrorMapper:
    """Maps exceptions to HTTP (status_code, detail, code).

    Known ``AgribooksError`` subclasses keep their own message; anything else
    becomes a generic 500 so internal details never leak to clients.
    """

    fallback_detail: str = "Internal server error"

    def to_http(self, exc: Exception) -> tuple[int, str, str]:
        """Map an exception to (status_code, detail, code).

        Args:
            exc: The exception raised by a service.

        Returns:
            (status_code, detail, code) for an error response body.
        """
        if isinstance(exc, AgribooksError):
            return (exc.status_code, exc.message or self.fallback_detail, exc.code)
        return (500, self.fallback_detail, "INTERNAL_ERROR")
