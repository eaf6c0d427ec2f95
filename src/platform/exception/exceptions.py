class CustomBaseError(Exception):
    """
    Base class for all custom exceptions - controls logging behavior in @Logger.io.

    `code` goes into the error body next to `detail`, so clients can tell errors that share
    a status apart (a lost race is retryable, a broken stored invariant is not).
    """

    code = 'error'

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    code = 'domain_error'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    """Malformed or capacity-violating input, raised before any write"""

    code = 'validation_error'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InvalidTicketTokenError(DomainError):
    code = 'invalid_ticket_token'

    def __init__(self, message: str = 'Invalid ticket token') -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    code = 'forbidden'

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    code = 'not_found'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    """The unit is no longer in the state the caller expected; re-query and retry"""

    code = 'conflict'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class IntegrityError(CustomBaseError):
    """A write would break a stored invariant (e.g. section capacities vs venue capacity)"""

    code = 'integrity_violation'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class ExpiredTicketError(CustomBaseError):
    code = 'ticket_expired'

    def __init__(self, message: str = 'Ticket has expired') -> None:
        super().__init__(message, 410)


class AuthenticationError(CustomBaseError):
    code = 'authentication_failed'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class LoginError(CustomBaseError):
    code = 'login_failed'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)
