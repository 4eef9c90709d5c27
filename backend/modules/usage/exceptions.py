"""
Usage tracking module exceptions.
"""

from shared.exceptions import ValidationError


class InvalidUsageAmountError(ValidationError):
    """Raised when a usage increment is zero or negative."""

    def __init__(self, amount: int):
        super().__init__(
            f"Usage increment must be positive, got {amount}",
            code="INVALID_USAGE_AMOUNT",
            details={"amount": amount},
        )
