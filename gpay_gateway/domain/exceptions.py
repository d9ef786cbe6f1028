"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ProcessorAPIError(DomainException):
    """Payment processor rejected a call or is unavailable"""

    def __init__(self, message: str, code: str | None = None, step: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.step = step


class InvalidRequestError(DomainException):
    """Subscription request body is malformed"""

    pass


class WalletResponseError(DomainException):
    """Wallet provider returned payment data without a usable token"""

    pass


class SubscriptionBackendError(DomainException):
    """Subscription backend could not be reached or answered garbage"""

    pass
