"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from datetime import timedelta
import os

import dotenv

from steady.domain.models import AccountFilter
from steady.infrastructure.logging.logger import get_app_logger


DEFAULT_PROFILE_CACHE_TTL_HOURS = 24


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger adapters.

    Attributes:
        account_filter: Account selection used by the command-line summary.
        profile_cache_ttl: Time a cached profile stays valid.
    """

    account_filter: AccountFilter = AccountFilter.ALL
    profile_cache_ttl: timedelta = timedelta(
        hours=DEFAULT_PROFILE_CACHE_TTL_HOURS
    )

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        account_filter = cls._parse_account_filter(
            os.getenv("LEDGER_ACCOUNT_FILTER", "all"),
            logger=logger,
        )
        ttl_hours = cls._parse_ttl_hours(
            os.getenv("PROFILE_CACHE_TTL_HOURS"),
            logger=logger,
        )
        return cls(
            account_filter=account_filter,
            profile_cache_ttl=timedelta(hours=ttl_hours),
        )

    @staticmethod
    def _parse_account_filter(raw: str, logger) -> AccountFilter:
        """Normalize the account filter value.

        Args:
            raw: Raw filter value.
            logger: Logger used for warnings.

        Returns:
            AccountFilter: Parsed filter, ``all`` when the value is unknown.
        """
        cleaned = raw.strip().lower()
        try:
            return AccountFilter(cleaned)
        except ValueError:
            logger.warning(
                f"Unknown LEDGER_ACCOUNT_FILTER '{raw}'. Falling back to 'all'."
            )
            return AccountFilter.ALL

    @staticmethod
    def _parse_ttl_hours(raw: str | None, logger) -> float:
        """Normalize the profile cache TTL.

        Args:
            raw: Raw TTL in hours.
            logger: Logger used for warnings.

        Returns:
            float: Positive TTL in hours.
        """
        if not raw:
            return DEFAULT_PROFILE_CACHE_TTL_HOURS
        try:
            hours = float(raw)
        except ValueError:
            hours = -1
        if not 0 < hours < float("inf"):
            logger.warning(
                f"Invalid PROFILE_CACHE_TTL_HOURS '{raw}'. "
                f"Using {DEFAULT_PROFILE_CACHE_TTL_HOURS}."
            )
            return DEFAULT_PROFILE_CACHE_TTL_HOURS
        return hours


__all__ = ["LedgerSettings"]
