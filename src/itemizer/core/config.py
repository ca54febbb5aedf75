#!/usr/bin/env python3
"""
Configuration Management for Ledger Itemizer

Handles environment-based configuration with secure defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

from .dates import FinancialDate

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class LedgerConfig:
    """Ledger API configuration."""

    credentials_dir: Path
    base_url: str = "https://mint.intuit.com/pfm/v1"
    timeout: int = 30
    fetch_limit: int = 100000
    description_keywords: list = field(default_factory=lambda: ["amazon", "amzn"])
    description_anti_keywords: list = field(default_factory=lambda: ["web services", "clinic"])


@dataclass
class OrdersConfig:
    """Order history extract configuration."""

    data_dir: Path
    excluded_order_ids: list = field(default_factory=list)


@dataclass
class ReconcileConfig:
    """Reconciliation run settings."""

    start_date: FinancialDate | None = None


@dataclass
class Config:
    """
    Main configuration class for the itemizer.

    Loads configuration from environment variables with secure defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    output_dir: Path

    # Component configurations
    ledger: LedgerConfig
    orders: OrdersConfig
    reconcile: ReconcileConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("ITEMIZER_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_itemizer"
            base_dir = Path(os.getenv("ITEMIZER_DATA_DIR", str(default_test_dir)))
        else:
            base_dir = Path(os.getenv("ITEMIZER_DATA_DIR", "./data")).expanduser().resolve()

        data_dir = base_dir
        output_dir = data_dir / "joined"

        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        ledger = LedgerConfig(
            credentials_dir=Path(os.getenv("LEDGER_CREDENTIALS_DIR", str(data_dir / "credentials"))),
            base_url=os.getenv("LEDGER_API_URL", "https://mint.intuit.com/pfm/v1"),
            timeout=int(os.getenv("LEDGER_TIMEOUT", "30")),
            fetch_limit=int(os.getenv("LEDGER_FETCH_LIMIT", "100000")),
            description_keywords=_parse_list(os.getenv("LEDGER_DESCRIPTION_KEYWORDS", "amazon,amzn")),
            description_anti_keywords=_parse_list(
                os.getenv("LEDGER_DESCRIPTION_ANTI_KEYWORDS", "web services,clinic")
            ),
        )

        orders = OrdersConfig(
            data_dir=data_dir / "orders",
            excluded_order_ids=_parse_list(os.getenv("EXCLUDED_ORDER_IDS", "")),
        )

        start_date_str = os.getenv("ITEMIZER_START_DATE")
        reconcile = ReconcileConfig(
            start_date=FinancialDate.from_string(start_date_str) if start_date_str else None,
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            ledger=ledger,
            orders=orders,
            reconcile=reconcile,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [
            ("data_dir", self.data_dir),
            ("output_dir", self.output_dir),
        ]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if not self.ledger.base_url.startswith(("http://", "https://")):
            errors.append(f"LEDGER_API_URL must be an http(s) URL: {self.ledger.base_url}")

        if self.ledger.timeout <= 0:
            errors.append("Ledger timeout must be positive")
        if self.ledger.fetch_limit <= 0:
            errors.append("Ledger fetch limit must be positive")
        if not self.ledger.description_keywords:
            errors.append("At least one ledger description keyword is required")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from the HTTP stack in production
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("urllib3").setLevel(logging.WARNING)
            logging.getLogger("requests").setLevel(logging.WARNING)


def _parse_list(value: str, delimiter: str = ",") -> list:
    """Parse comma-separated string into list, handling empty values."""
    if not value:
        return []
    return [item.strip() for item in value.split(delimiter) if item.strip()]


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
