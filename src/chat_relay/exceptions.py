"""Exception hierarchy for the dispatch layer and chat sessions."""


class DispatchError(Exception):
    """Base class for every failure of a single send operation."""


class CompletionError(DispatchError):
    """The completion request failed.

    Covers transport errors, non-2xx responses and payloads without a
    completion text.

    Attributes:
        status_code: HTTP status of the failed response, if one was received
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ClientTimeoutError(DispatchError):
    """The client-side timeout elapsed before the send settled."""


class SessionBusyError(Exception):
    """A message was submitted while a previous send is still outstanding."""
