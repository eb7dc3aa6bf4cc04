"""Error types raised inside the trivia bot.

Every error here ends as a user-facing response; none of them is meant to
escape the command dispatcher.
"""

from __future__ import annotations


class TriviaError(Exception):
    """Base class for trivia bot errors."""


class ConfigError(TriviaError):
    """Invalid or missing settings."""


class ActivationError(TriviaError):
    """Bot activation (bot account, command registration) failed."""


class ValidationError(TriviaError):
    """Malformed or missing command arguments."""


class ParseError(ValidationError):
    """Free text could not be parsed into the expected shape."""


class UnknownActionError(TriviaError):
    def __init__(self, action: str) -> None:
        super().__init__(f"Unknown action {action}")
        self.action = action


class ScopeUnsupportedError(TriviaError):
    def __init__(self, channel_id: str, channel_type: str) -> None:
        super().__init__(
            f"channel `{channel_id}` of type `{channel_type}` cannot host a quiz"
        )
        self.channel_id = channel_id
        self.channel_type = channel_type


class NotFoundError(TriviaError):
    def __init__(self, scope_id: str) -> None:
        super().__init__(f"nothing stored for `{scope_id}`")
        self.scope_id = scope_id


class StoreFailure(TriviaError):
    """A call to the key-value backend failed.

    Carries the operation and scope so the rendered message can say what was
    being attempted, and keeps the backend error as ``cause``.
    """

    def __init__(self, operation: str, scope_id: str, cause: BaseException) -> None:
        super().__init__(f"{operation} failed for `{scope_id}`: {cause}")
        self.operation = operation
        self.scope_id = scope_id
        self.cause = cause


class HostError(TriviaError):
    """A call to the hosting chat platform failed."""
