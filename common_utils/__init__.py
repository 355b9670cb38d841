"""
Common utilities for the Sigap admin application
"""
import secrets
import string


def generate_numeric_uid(length: int = 9) -> str:
    """
    Random external member identifier made of `length` digits.

    Collisions are not checked; with 9 digits they are rare enough for
    the member counts this service handles.
    """
    return "".join(secrets.choice(string.digits) for _ in range(length))


def generate_temporary_password(length: int = 12) -> str:
    """Random password handed to members created on someone else's behalf."""
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))
