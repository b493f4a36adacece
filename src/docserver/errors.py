from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Unknown login or wrong password. The two cases are deliberately not distinguished."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Token is malformed, has a bad signature, or its expiry claim has passed."""

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class TokenMismatchError(AuthenticationError):
    """Token verifies but is no longer the user's current session token."""

    def __init__(self, message: str = "Token mismatch") -> None:
        super().__init__(message)


class TokenExpiredError(AuthenticationError):
    """Session stored on the user record has expired."""

    def __init__(self, message: str = "Token expired") -> None:
        super().__init__(message)


class UserNotFoundError(AuthenticationError):
    """Token refers to a user that no longer exists."""

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a user tries to access a resource they do not have permission for."""

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message)


class InvalidAdminTokenError(AccessDeniedError):
    """Raised when registration is attempted without the administrative secret."""

    def __init__(self, message: str = "Invalid admin token") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when user input fails validation."""


class InvalidLoginError(ValidationError):
    """Login does not satisfy the login policy or is already taken."""


class WeakPasswordError(ValidationError):
    """Password does not satisfy the password policy."""
