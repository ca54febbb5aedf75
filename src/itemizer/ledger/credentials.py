#!/usr/bin/env python3
"""
Ledger API Credentials

Caches the ledger API key and session cookie on disk and obtains new ones
interactively when the cache is empty or rejected by the API.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import click

logger = logging.getLogger(__name__)

API_KEY_FILE = "apiKey.txt"
COOKIE_FILE = "cookie.txt"


class LedgerAuthError(Exception):
    """Raised when ledger API credentials cannot be obtained."""

    pass


@dataclass(frozen=True)
class Credentials:
    """API key and session cookie for the ledger API."""

    api_key: str
    cookie: str


def prompt_for_credentials() -> Credentials:
    """Ask the user to paste credentials copied from a logged-in browser session."""
    click.echo("Ledger login required. Sign in with a browser and copy the session values.")
    api_key = click.prompt("API key", hide_input=True).strip()
    cookie = click.prompt("Cookie header", hide_input=True).strip()
    return Credentials(api_key=api_key, cookie=cookie)


class CredentialsProvider:
    """
    File-backed credential cache.

    Credentials are read lazily from ``credentials_dir`` and held in memory
    after the first successful read.
    """

    def __init__(self, credentials_dir: str | Path, prompt: Callable[[], Credentials] | None = None):
        """
        Initialize the provider.

        Args:
            credentials_dir: Directory holding apiKey.txt and cookie.txt
            prompt: Callable returning fresh credentials (defaults to an interactive prompt)
        """
        self.credentials_dir = Path(credentials_dir)
        self.prompt = prompt or prompt_for_credentials
        self._credentials: Credentials | None = None

    @property
    def api_key_file(self) -> Path:
        return self.credentials_dir / API_KEY_FILE

    @property
    def cookie_file(self) -> Path:
        return self.credentials_dir / COOKIE_FILE

    def get_credentials(self) -> Credentials | None:
        """Return cached credentials, or None when none are stored."""
        if self._credentials is None:
            try:
                api_key = self.api_key_file.read_text(encoding="utf-8")
                cookie = self.cookie_file.read_text(encoding="utf-8")
            except OSError:
                return None
            self._credentials = Credentials(api_key=api_key, cookie=cookie)
        return self._credentials

    def save_credentials(self, credentials: Credentials) -> None:
        """Persist credentials to the cache directory."""
        self._credentials = credentials
        self.credentials_dir.mkdir(parents=True, exist_ok=True)
        self.api_key_file.write_text(credentials.api_key, encoding="utf-8")
        self.cookie_file.write_text(credentials.cookie, encoding="utf-8")

    def refresh_credentials(self) -> Credentials:
        """
        Obtain new credentials and store them.

        Raises:
            LedgerAuthError: If the prompt returns empty values
        """
        self._credentials = None
        credentials = self.prompt()
        if not credentials.api_key or not credentials.cookie:
            raise LedgerAuthError("Ledger credentials were not provided")
        self.save_credentials(credentials)
        logger.info("Stored refreshed ledger credentials in %s", self.credentials_dir)
        return credentials

    def clear_credentials(self) -> None:
        """Remove stored credentials (missing files are ignored)."""
        self.api_key_file.unlink(missing_ok=True)
        self.cookie_file.unlink(missing_ok=True)
        self._credentials = None
