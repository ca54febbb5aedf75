"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from itemizer.core.dates import FinancialDate
from itemizer.core.money import Money
from itemizer.ledger.models import ChildTransaction, LedgerTransaction


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sample_ledger_transaction() -> LedgerTransaction:
    """Sample unsplit ledger charge for testing."""
    amount = Money.from_cents(-4599)  # -$45.99
    return LedgerTransaction(
        id="ledger-tx-123",
        amount=amount,
        date=FinancialDate.from_string("2024-08-15"),
        children=[ChildTransaction(description="AMZN Mktp US*TEST123", amount=amount)],
    )


@pytest.fixture
def sample_api_transaction() -> dict:
    """Sample raw ledger API entry for testing."""
    return {
        "id": "ledger-tx-123",
        "date": "2024-08-15T00:00:00Z",
        "amount": -45.99,
        "description": "AMZN Mktp US*TEST123",
        "fiData": {"description": "AMZN Mktp US*TEST123"},
    }


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real data or credentials
    monkeypatch.setenv("ITEMIZER_ENV", "test")
    monkeypatch.setenv("ITEMIZER_DATA_DIR", str(tmp_path / "itemizer_data"))
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.delenv("ITEMIZER_START_DATE", raising=False)
    monkeypatch.delenv("EXCLUDED_ORDER_IDS", raising=False)
    monkeypatch.delenv("LEDGER_API_URL", raising=False)
    monkeypatch.delenv("LEDGER_CREDENTIALS_DIR", raising=False)

    # Drop any configuration cached by an earlier test
    monkeypatch.setattr("itemizer.core.config._config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "matching: Tests for order/ledger matching")
    config.addinivalue_line("markers", "orders: Tests for order history loading")
    config.addinivalue_line("markers", "ledger: Tests for ledger API integration")
    config.addinivalue_line("markers", "cli: Tests for the command-line interface")
