"""Error taxonomy shared by the query pipeline and the HTTP layer."""

from typing import Any

NO_ANSWER_MESSAGE = (
    "No relevant context found. We couldn't find an answer for your question "
    "in the knowledge base, AI model, or external sources."
)


class BaseError(Exception):
    """Application error carrying a stable code and an HTTP status."""

    def __init__(self, message: str, code: str, status: int, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.data = data


class BadRequestError(BaseError):
    """Malformed caller input, such as an empty query."""

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message, "BAD_REQUEST", 400, data)


class NotFoundError(BaseError):
    """No source could produce an answer."""

    def __init__(self, message: str = NO_ANSWER_MESSAGE) -> None:
        super().__init__(message, "NOT_FOUND", 404)


class ProviderError(BaseError):
    """A collaborator (model, index, search API) call failed."""

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message, "PROVIDER_ERROR", 502, data)
