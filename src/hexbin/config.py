"""
hexbin - Configuration
======================

Runtime settings for the converter. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)
"""

from dataclasses import dataclass
import os


# Values accepted as "true" for boolean environment variables
TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class HexBinConfig:
    """
    Configuration for a conversion run.

    Attributes:
        encoding: Text encoding used to decode byte input (default: "ascii")
        verbose: Enable debug logging and summaries (default: False)
    """

    encoding: str = "ascii"
    verbose: bool = False

    @classmethod
    def from_env(cls) -> "HexBinConfig":
        """
        Create HexBinConfig from environment variables.

        Environment variables (all optional):
            HEXBIN_ENCODING: Input text encoding (e.g., "ascii", "latin-1")
            HEXBIN_VERBOSE: Enable verbose output (1, true, yes, on)

        Returns:
            HexBinConfig with values from environment variables
        """
        config = cls()

        if encoding := os.environ.get("HEXBIN_ENCODING"):
            config.encoding = encoding

        if verbose := os.environ.get("HEXBIN_VERBOSE"):
            config.verbose = verbose.strip().lower() in TRUE_VALUES

        return config
