"""Domain errors."""


class CounterStoreError(Exception):
    """Raised when the counter store returns a payload that fails validation."""


class AdjustmentRejected(Exception):
    """Raised by the backend store when an adjustment request is invalid."""
