#!/usr/bin/env python3
"""
Ledger API Client

Fetches ledger entries that look like order charges/refunds and pushes
itemized descriptions back to the ledger service.

Authorization failures trigger exactly one credential refresh and retry
before the error is surfaced to the caller.
"""

import logging
from collections.abc import Callable
from typing import Any

import requests

from ..core.config import LedgerConfig, get_config
from ..core.dates import FinancialDate
from ..matching.models import JoinedRecord
from .credentials import CredentialsProvider
from .models import LedgerTransaction

logger = logging.getLogger(__name__)

TRANSACTION_TYPE = "CashAndCreditTransaction"


class LedgerClient:
    """HTTP client for the ledger service."""

    def __init__(
        self,
        config: LedgerConfig | None = None,
        credentials: CredentialsProvider | None = None,
        session: requests.Session | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Ledger settings (defaults to the global configuration)
            credentials: Credential provider (defaults to one backed by config.credentials_dir)
            session: HTTP session, injectable for tests
        """
        self.config = config or get_config().ledger
        self.credentials = credentials or CredentialsProvider(self.config.credentials_dir)
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self.config.base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        credentials = self.credentials.get_credentials()
        if credentials is None:
            return {}
        return {
            "cookie": credentials.cookie,
            "authorization": (
                f"Intuit_APIKey intuit_apikey={credentials.api_key}, intuit_apikey_version=1.0"
            ),
            "accept": "application/json",
        }

    @staticmethod
    def _checked(call: Callable[[], requests.Response]) -> requests.Response:
        response = call()
        response.raise_for_status()
        return response

    def ensure_authorized(self, call: Callable[[], requests.Response]) -> requests.Response:
        """
        Run an API call, refreshing credentials when needed.

        Without stored credentials the provider is refreshed first. With
        stored credentials, a 401 response causes one refresh and one retry.

        Args:
            call: Zero-argument callable issuing the request (headers are
                  rebuilt on every invocation)

        Returns:
            The successful response

        Raises:
            requests.HTTPError: For non-authorization failures, or if the retry fails
        """
        if self.credentials.get_credentials() is None:
            self.credentials.refresh_credentials()
            return self._checked(call)

        try:
            return self._checked(call)
        except requests.HTTPError as e:
            if e.response is None or e.response.status_code != 401:
                raise
            logger.info("Ledger API rejected credentials; refreshing and retrying once")
            self.credentials.refresh_credentials()
            return self._checked(call)

    def _is_order_entry(self, raw: dict[str, Any]) -> bool:
        """Check the original bank description against the configured keywords."""
        fi_data = raw.get("fiData")
        if not fi_data:
            return False
        description = str(fi_data.get("description", "")).lower()
        if not any(keyword.lower() in description for keyword in self.config.description_keywords):
            return False
        return not any(anti.lower() in description for anti in self.config.description_anti_keywords)

    def get_transactions(self, since: FinancialDate) -> list[LedgerTransaction]:
        """
        Fetch ledger entries on or after a date that look like order charges or refunds.

        Split lines sharing a parent are merged into one transaction whose
        amount is their sum and whose children are the lines in API order.

        Args:
            since: Earliest entry date to request

        Returns:
            Transactions sorted by date
        """
        url = f"{self.base_url}/transactions"
        params = {"limit": self.config.fetch_limit, "fromDate": since.to_iso_string()}

        response = self.ensure_authorized(
            lambda: self.session.get(url, params=params, headers=self._headers(), timeout=self.config.timeout)
        )
        raw_transactions = response.json().get("Transaction", [])

        merged: dict[str, LedgerTransaction] = {}
        for raw in raw_transactions:
            if not self._is_order_entry(raw):
                continue
            transaction = LedgerTransaction.from_api_dict(raw)
            existing = merged.get(transaction.id)
            if existing is None:
                merged[transaction.id] = transaction
            else:
                existing.merge(transaction)

        transactions = sorted(merged.values(), key=lambda tx: tx.date)
        logger.info("Fetched %d order-related ledger entries since %s", len(transactions), since)
        return transactions

    @staticmethod
    def build_update_payload(record: JoinedRecord) -> dict[str, Any]:
        """
        Build the update body for a joined record.

        A single item replaces the entry's description; several items replace
        its split children. Child amounts are negated for credit entries.
        """
        if len(record.items) == 1:
            return {
                "type": TRANSACTION_TYPE,
                "description": record.items[0].description,
                "splitData": {"children": []},
            }

        sign = -1 if record.amount.to_cents() > 0 else 1
        return {
            "type": TRANSACTION_TYPE,
            "splitData": {
                "children": [
                    {
                        "amount": (item.amount * sign).to_float(),
                        "description": item.description,
                    }
                    for item in record.items
                ]
            },
        }

    def update_transaction(self, record: JoinedRecord) -> None:
        """Push a joined record's itemization to its ledger entry."""
        url = f"{self.base_url}/transactions/{record.ledger_transaction_id}"
        payload = self.build_update_payload(record)

        self.ensure_authorized(
            lambda: self.session.put(url, json=payload, headers=self._headers(), timeout=self.config.timeout)
        )
        logger.debug("Updated ledger entry %s with %d items", record.ledger_transaction_id, len(record.items))

    def clear_credentials(self) -> None:
        """Forget stored credentials so the next call re-authenticates."""
        self.credentials.clear_credentials()
