"""Configuration management for the payments engine."""
import logging
import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Runtime settings, overridable through environment variables.

    PAYMENTS_LOG_LEVEL: logging level name for stderr diagnostics.
    PAYMENTS_NUM_CONSUMERS: number of consumer threads (one queue partition each).
    """

    log_level: str = 'WARNING'
    num_consumers: int = 4

    @classmethod
    def load(cls) -> 'Settings':
        """Load settings from environment variables.

        Returns:
            Settings: A Settings instance with values from environment variables.

        Raises:
            ValueError: If an environment variable holds an invalid value.
        """
        log_level = os.getenv('PAYMENTS_LOG_LEVEL', cls.log_level).strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"PAYMENTS_LOG_LEVEL has unknown level {log_level!r}")

        raw_consumers = os.getenv('PAYMENTS_NUM_CONSUMERS')
        num_consumers = cls.num_consumers
        if raw_consumers:
            try:
                num_consumers = int(raw_consumers)
            except ValueError:
                raise ValueError("PAYMENTS_NUM_CONSUMERS must be an integer") from None
            if num_consumers < 1:
                raise ValueError("PAYMENTS_NUM_CONSUMERS must be at least 1")

        return cls(
            log_level=log_level,
            num_consumers=num_consumers,
        )
