class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthError(DomainError):
    """Raised when authentication or registration is refused."""


class InvalidCredentials(AuthError):
    """Raised when an e-mail/password pair does not match."""


class PendingApproval(AuthError):
    """Raised when a manager account has not been approved by the owner yet."""


class Unauthorized(AuthError):
    """Raised when an identity record is missing or in no recognised state."""


class EmailInUse(AuthError):
    """Raised when registering an e-mail that already has a credential."""


class WeakCredential(AuthError):
    """Raised when the credential store rejects a password."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced factory, worker or identity does not exist."""


class PersistenceError(DomainError):
    """Raised when the document store or blob store fails."""
