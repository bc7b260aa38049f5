"""Domain errors raised by the lifecycle and notification services."""


class InvalidTransition(Exception):
    """Trigger is not legal for the bid's current status."""

    def __init__(self, status, trigger, message: str | None = None):
        self.status = status
        self.trigger = trigger
        super().__init__(message or f"{trigger} is not allowed from status '{status.value}'")


class StaleState(InvalidTransition):
    """Conditional write matched no row: the bid moved since it was read."""


class DispatchError(Exception):
    """Message could not be delivered."""

    reason = "dispatch-error"


class ConfigError(DispatchError):
    """Tenant mail configuration is missing or incomplete. Not retried."""

    reason = "config-error"


class TransportError(DispatchError):
    """Mail server or network failure at send time. Retryable."""

    reason = "transport-error"


class DecisionError(Exception):
    """Client decision was rejected."""


class InvalidDecision(DecisionError):
    """Decision value is not Participate or Discard."""


class BidNotFound(DecisionError):
    """Bid does not exist or does not belong to the caller."""


class StaleDecision(DecisionError):
    """Bid is no longer waiting for the client's decision."""


class TokenInvalid(DecisionError):
    """Portal access token does not resolve to a client."""
