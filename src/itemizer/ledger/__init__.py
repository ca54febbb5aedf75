"""
Ledger Package

Financial-account side of reconciliation.

This package provides:
- Domain models for ledger entries and their existing itemization
- A requests-based API client for fetching entries and pushing itemizations
- File-backed credential caching with interactive refresh
"""

from .client import LedgerClient
from .credentials import Credentials, CredentialsProvider, LedgerAuthError
from .models import ChildTransaction, LedgerTransaction

__all__ = [
    "ChildTransaction",
    "Credentials",
    "CredentialsProvider",
    "LedgerAuthError",
    "LedgerClient",
    "LedgerTransaction",
]
