from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
)


class ReaderError(Exception):
    """
    Erreur affichée en ligne à l'endroit de l'action échouée.
    Aucune n'est fatale pour la session.
    """

    kind = "reader_error"
    status_code = HTTP_400_BAD_REQUEST
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, "retryable": self.retryable}


# ---------- appels API ----------

class MissingKey(ReaderError):
    kind = "missing_key"
    status_code = HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Please enter your API key in settings"):
        super().__init__(message)


class QuotaExceeded(ReaderError):
    kind = "quota_exceeded"
    status_code = HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, quota: int):
        super().__init__(
            f"You've reached the API call limit ({quota} calls). "
            "Increase the limit in settings or start a new session."
        )
        self.quota = quota


class NetworkFailure(ReaderError):
    kind = "network_failure"
    status_code = HTTP_502_BAD_GATEWAY
    retryable = True

    def __init__(
        self,
        message: str = (
            "Network error: Unable to connect to Anthropic API. "
            "Please check your internet connection and API key."
        ),
    ):
        super().__init__(message)


class AuthFailure(ReaderError):
    kind = "auth_failure"
    status_code = HTTP_502_BAD_GATEWAY

    def __init__(self, message: str = "Invalid API key. Please check your API key in settings."):
        super().__init__(message)


class RateLimited(ReaderError):
    kind = "rate_limited"
    status_code = HTTP_503_SERVICE_UNAVAILABLE
    retryable = True

    def __init__(self, message: str = "Rate limit exceeded. Please wait a moment and try again."):
        super().__init__(message)


class GenericAPIFailure(ReaderError):
    kind = "api_failure"
    status_code = HTTP_502_BAD_GATEWAY
    retryable = True

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


# ---------- lecture / réglages ----------

class PageOutOfRange(ReaderError):
    kind = "page_out_of_range"

    def __init__(self, total_pages: int):
        super().__init__(f"Please enter a page number between 1 and {total_pages}")
        self.total_pages = total_pages


class NoSelection(ReaderError):
    kind = "no_selection"

    def __init__(self, message: str = "Select some text first"):
        super().__init__(message)


class InvalidApiKeyFormat(ReaderError):
    kind = "invalid_api_key_format"

    def __init__(self, message: str = 'Invalid API key format. It should start with "sk-ant-"'):
        super().__init__(message)


class SourceUnavailable(ReaderError):
    kind = "source_unavailable"
    status_code = HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Error loading book content"):
        super().__init__(message)


class EmptyQuestion(ReaderError):
    kind = "empty_question"

    def __init__(self, message: str = "Please type a question first"):
        super().__init__(message)
