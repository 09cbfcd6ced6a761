from typing import List, Optional


class RelayError(Exception):
    """Base for failures that are answered as {ok: false, error}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OrderValidationError(RelayError):
    status_code = 400


class UpstreamUserError(RelayError):
    status_code = 400

    def __init__(self, user_errors: List[dict]):
        self.user_errors = user_errors
        super().__init__(", ".join(str(e.get("message", "")) for e in user_errors))


class ConfigurationError(RelayError):
    status_code = 500


class ShopifyAPIError(RelayError):
    status_code = 500

    def __init__(self, message: str, http_status: Optional[int] = None):
        super().__init__(message)
        self.http_status = http_status
