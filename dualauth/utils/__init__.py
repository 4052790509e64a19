"""Shared utilities for the auth backend."""

from dualauth.utils.auth import token_required, get_account_service
from dualauth.utils.clock import utcnow

__all__ = [
    'token_required',
    'get_account_service',
    'utcnow',
]
