from enum import Enum


class PaymentMethod(str, Enum):
    CARD = "card"
    PAYPAL = "paypal"

    @property
    def requires_card_details(self) -> bool:
        return self is PaymentMethod.CARD

    def __str__(self):
        return self.value


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def __str__(self):
        return self.value


class SettlementState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    def __str__(self):
        return self.value


class FailureReason(str, Enum):
    VALIDATION = "validation"
    PERSISTENCE = "persistence"

    def __str__(self):
        return self.value


class BookingStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def __str__(self):
        return self.value
