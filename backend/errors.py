class StoreError(Exception):
    """Raised by the data facade when a table operation fails."""


class BookingValidationError(ValueError):
    pass


class BookingSubmissionError(Exception):
    pass


class AuthError(Exception):
    pass


class AccessDenied(Exception):
    pass
