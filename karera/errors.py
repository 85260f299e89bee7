"""Exceptions for malformed engine input.

Expected betting conditions (incomplete or impossible selections, bad board
cells, scratched horses) are return values and never raise. These are only for
callers handing the engine something it cannot interpret.
"""


class KareraError(Exception):
    """Base class for engine errors."""


class UnknownBetType(KareraError, ValueError):
    """Bet type string is not one the engine knows."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown bet type: {value!r}")


class SelectionShapeError(KareraError, ValueError):
    """Selection does not fit the slot/leg layout of its bet type."""


class BetBlockedError(KareraError):
    """A quote that cannot be confirmed was passed to ticket confirmation."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class BetRejectedError(KareraError):
    """The settlement service answered without accepting the bet."""
