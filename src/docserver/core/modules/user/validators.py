from docserver.errors import InvalidLoginError, WeakPasswordError
from docserver.utils import is_login

MIN_LOGIN_LENGTH = 8
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72  # bcrypt input limit


def validate_login(login: str) -> None:
    """Validate login meets requirements.

    Requirements:
    - Minimum length of 8 characters
    - Latin letters and digits only

    Raises:
        InvalidLoginError: If login doesn't meet requirements
    """
    if len(login) < MIN_LOGIN_LENGTH:
        raise InvalidLoginError(f"Login must be at least {MIN_LOGIN_LENGTH} characters long")

    if not is_login(login):
        raise InvalidLoginError("Login must contain only latin letters and digits")


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - Minimum length of 8 characters, at most 72 bytes in UTF-8
    - At least one uppercase and one lowercase letter
    - At least one digit
    - At least one character that is neither a letter nor a digit

    Raises:
        WeakPasswordError: If password doesn't meet requirements
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise WeakPasswordError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise WeakPasswordError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

    if not any(char.isupper() for char in password) or not any(char.islower() for char in password):
        raise WeakPasswordError("Password must contain both uppercase and lowercase letters")

    if not any(char.isdigit() for char in password):
        raise WeakPasswordError("Password must contain at least one digit")

    if all(char.isalnum() for char in password):
        raise WeakPasswordError("Password must contain at least one special character")
