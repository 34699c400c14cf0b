"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidPaymentError(DomainException):
    """Payment amount is zero or negative"""

    pass


class DebtItemUpdateError(DomainException):
    """Storing a new balance for one debt item failed"""

    def __init__(self, debt_id: str, message: str = "Failed to update debt item"):
        super().__init__(f"{message}: {debt_id}")
        self.debt_id = debt_id


class EnvelopeNotFoundError(DomainException):
    """Envelope does not exist"""

    pass


class NotADebtEnvelopeError(DomainException):
    """Payment targeted an envelope that does not hold debts"""

    pass


class DuplicatePaymentError(DomainException):
    """A payment with the same idempotency key is already being applied"""

    pass
