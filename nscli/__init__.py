"""
nscli - command-line viewer for a Nightscout site.

Fetches recent glucose entries, treatments and device statuses in parallel
and prints them as aligned text columns.
"""

from __future__ import annotations

from .cli import main
from .client import NightscoutClient, RemoteDataClient
from .exceptions import FetchError, NightscoutCliError, OptionError, UserError
from .fetch import DisplayData, fetch_display_data
from .options import FetchPlan, parse_options

__all__ = [
    "DisplayData",
    "FetchError",
    "FetchPlan",
    "NightscoutCliError",
    "NightscoutClient",
    "OptionError",
    "RemoteDataClient",
    "UserError",
    "fetch_display_data",
    "main",
    "parse_options",
]
