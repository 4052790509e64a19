"""Database models for the auth service."""

from .account import Account, new_account_id

__all__ = ['Account', 'new_account_id']
