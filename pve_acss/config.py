"""
Configuration
=============

Defaults are read from the environment once at import time; the module-level
``config`` instance is what the rest of the package consults.
"""

import logging
import os

# Defaults
DEFAULT_PAIRING_CURVE = os.getenv('PVE_PAIRING_CURVE', 'MNT224')
DEFAULT_HASH_NAME = os.getenv('PVE_HASH_NAME', 'sha256')

# Share indices and the threshold travel as a single byte
DEFAULT_MAX_COMMITTEE_SIZE = int(os.getenv('PVE_MAX_COMMITTEE_SIZE', 255))

DEFAULT_RECOVERY_WORKERS = int(os.getenv('PVE_RECOVERY_WORKERS', os.cpu_count() or 1))

DEFAULT_LOG_LEVEL = os.getenv('PVE_LOG_LEVEL', 'WARNING')


class Config:
    """Runtime configuration."""

    def __init__(self):
        self.pairing_curve = DEFAULT_PAIRING_CURVE
        self.hash_name = DEFAULT_HASH_NAME
        self.max_committee_size = DEFAULT_MAX_COMMITTEE_SIZE
        self.recovery_workers = DEFAULT_RECOVERY_WORKERS
        self.log_level = DEFAULT_LOG_LEVEL

    @property
    def numeric_log_level(self) -> int:
        return getattr(logging, str(self.log_level).upper(), logging.WARNING)


def configure_logging(level=None):
    """
    Install a basic stream handler for scripts and demos.

    The library modules only create loggers; they never touch the root
    logger themselves.
    """
    if level is None:
        level = config.numeric_log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Global configuration instance
config = Config()
