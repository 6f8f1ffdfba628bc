"""
veo - command-line client for Veo sports camera recordings
"""

try:
    from importlib.metadata import version

    __version__ = version("veo-cli")
except Exception:
    # Fallback for editable/uninstalled checkouts
    __version__ = "0.dev0"
__author__ = "veo"
__description__ = "CLI tool to list and inspect Veo sports camera recordings"

from .client import ListRecordingsOptions, ListRecordingsResult, VeoClient, has_next_page
from .config import Config
from .exceptions import APIError, ConfigError, DecodeError, TransportError, VeoError
from .logger import setup_logging
from .models import Period, Recording, RecordingDetails
from .output import OutputFormatter

__all__ = [
    "VeoClient",
    "ListRecordingsOptions",
    "ListRecordingsResult",
    "has_next_page",
    "Config",
    "VeoError",
    "TransportError",
    "APIError",
    "DecodeError",
    "ConfigError",
    "Recording",
    "RecordingDetails",
    "Period",
    "OutputFormatter",
    "setup_logging",
    "__version__",
]
