"""Authentication module for API access control."""

from .passwords import hash_password, verify_password
from .tokens import create_access_token, decode_access_token, user_id_from_token

__all__ = [
    "create_access_token",
    "decode_access_token",
    "user_id_from_token",
    "hash_password",
    "verify_password",
]
