from journal_models import DEFAULT_WELCOME_MESSAGE, SIGNUP_WELCOME_MESSAGE
from user_auth import authenticate, validate_credentials


def test_validation_errors_in_order():
    assert validate_credentials("", "secret1") == "Please enter a valid email address."
    assert validate_credentials("nobody", "secret1") == "Please enter a valid email address."
    assert validate_credentials("a@b.com", "12345") == "Password must be at least 6 characters."
    assert validate_credentials("a@b.com", "123456", name=" ", is_login=False) == "Please enter your name."
    assert validate_credentials("a@b.com", "123456") is None


def test_login_derives_name_from_email():
    user, error = authenticate(" trader@desk.io ", "hunter22")
    assert error is None
    assert user.email == "trader@desk.io"
    assert user.name == "trader"
    assert user.welcome_message == DEFAULT_WELCOME_MESSAGE


def test_signup_uses_given_name():
    user, error = authenticate("a@b.com", "hunter22", name="Ada", is_login=False)
    assert error is None
    assert user.name == "Ada"
    assert user.welcome_message == SIGNUP_WELCOME_MESSAGE


def test_failed_authentication_returns_error_only():
    user, error = authenticate("a@b.com", "short")
    assert user is None
    assert "at least" in error
