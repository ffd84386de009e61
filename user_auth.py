"""Prototype login/signup: form checks only, no credential store."""

from typing import Optional

from journal_models import DEFAULT_WELCOME_MESSAGE, SIGNUP_WELCOME_MESSAGE, User

MIN_PASSWORD_LENGTH = 6


def validate_credentials(email: str, password: str, name: str = '',
                         is_login: bool = True) -> Optional[str]:
    """Return the first form error, or None when the form is acceptable."""
    email = str(email or '').strip()
    if not email or '@' not in email:
        return "Please enter a valid email address."
    if len(str(password or '')) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
    if not is_login and not str(name or '').strip():
        return "Please enter your name."
    return None


def build_user(email: str, name: str = '', is_login: bool = True) -> User:
    email = str(email or '').strip()
    name = str(name or '').strip()
    if is_login:
        return User(
            email=email,
            name=name or email.split('@')[0],
            welcome_message=DEFAULT_WELCOME_MESSAGE,
        )
    return User(email=email, name=name, welcome_message=SIGNUP_WELCOME_MESSAGE)


def authenticate(email: str, password: str, name: str = '',
                 is_login: bool = True):
    """Returns (user, None) on success or (None, error_message)."""
    error = validate_credentials(email, password, name, is_login)
    if error:
        return None, error
    return build_user(email, name, is_login), None
