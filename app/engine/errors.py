from __future__ import annotations


class EngineError(ValueError):
    pass


class InvalidDateFormat(EngineError):
    """A month string did not parse as MM-YYYY (or a stored date was unreadable)."""


class SubscriptionNotFound(EngineError):
    pass
