"""
Subscription enums.
"""

from enum import Enum


class PaymentStatus(str, Enum):
    """
    Payment state of a subscription.

    Flow: pending -> paid, or pending -> failed; any -> cancelled
    """

    PENDING = "pending"  # Checkout started, not confirmed yet
    PAID = "paid"  # Grants access while active and unexpired
    FAILED = "failed"
    CANCELLED = "cancelled"

    def grants_access(self) -> bool:
        return self == PaymentStatus.PAID
