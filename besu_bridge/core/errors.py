"""
Errors raised by the reconciliation layer.

Each error carries a human summary (``message``) and the underlying detail
(``detail``); the API renders both into the ``{success, message, error}``
envelope with the class's HTTP status code.
"""


class BridgeError(Exception):
    status_code = 500

    def __init__(self, message: str, detail: str = ""):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class ValidationError(BridgeError):
    """Malformed client input."""
    status_code = 400


class UpstreamReadError(BridgeError):
    """A read against the chain or the store failed."""


class UpstreamWriteError(BridgeError):
    """Submitting a transaction to the chain failed."""


class PersistError(BridgeError):
    """Writing the record to the store failed."""
