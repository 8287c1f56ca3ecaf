"""
PNGme Configuration
===================

Settings for the ``pngchunk`` command-line tool. Configuration can come
from:
- Default values (defined here)
- Environment variables
- Command-line flags (applied by the CLI on top of the result)

Environment Variables
---------------------
    PNGME_LOG_LEVEL: Logging level name (DEBUG, INFO, WARNING, ERROR)
    PNGME_OUTPUT: Default output format of ``encode`` ("hex" or "raw")
"""

from dataclasses import dataclass
import logging
import os

# Accepted values for output_format
OUTPUT_FORMATS = ("hex", "raw")


@dataclass
class CliConfig:
    """
    Configuration for the pngchunk command-line tool.

    Attributes:
        log_level: Logging level used when not in verbose mode
        output_format: "hex" prints encoded chunks as hex text,
            "raw" writes the bytes straight to stdout
    """
    log_level: int = logging.WARNING
    output_format: str = "hex"

    @classmethod
    def from_env(cls) -> "CliConfig":
        """
        Create CliConfig from environment variables.

        Unknown or malformed values are ignored and the default is kept.
        """
        config = cls()

        if level_name := os.environ.get("PNGME_LOG_LEVEL"):
            level = logging.getLevelName(level_name.strip().upper())
            if isinstance(level, int):
                config.log_level = level

        if output_format := os.environ.get("PNGME_OUTPUT"):
            output_format = output_format.strip().lower()
            if output_format in OUTPUT_FORMATS:
                config.output_format = output_format

        return config

    def setup_logging(self, verbose: bool = False) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if verbose else self.log_level
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if verbose else "%(message)s",
        )
