"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class Unauthenticated(DomainException):
    """No caller identity was supplied by the identity provider"""

    pass


class ProfileNotFound(DomainException):
    """Target user record does not exist"""

    pass


class FinancialProfileMissing(DomainException):
    """User exists but has never submitted a financial profile"""

    pass


class GroupNotFound(DomainException):
    """Cooperative record does not exist"""

    pass


class InvalidInput(DomainException):
    """Request is malformed (e.g. empty member list for group scoring)"""

    pass


class StoreUnavailable(DomainException):
    """Profile store failed on read or write"""

    pass
