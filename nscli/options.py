"""Command-line option parsing.

The grammar is small and fixed, so it is parsed by hand instead of through
Click's option machinery:

- an optional site URL as the first argument (falls back to NS_SITE)
- --entries/-e [count], --treatments/-t [count], --devices/-d, --help
- combined short flags such as -etd, which cannot carry a count
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .constants import (
    DEFAULT_ENTRY_COUNT,
    DEFAULT_ENTRY_COUNT_WITH_FLAG,
    DEFAULT_TREATMENT_COUNT_WITH_FLAG,
    ENV_SITE,
)
from .exceptions import InvalidCountError, NoSiteSpecifiedError, UnexpectedArgumentError
from .formatting import left_aligned, max_width
from .utils import is_absolute_url, parse_int

logger = logging.getLogger(__name__)


class OptionFlag(Enum):
    """Flags understood by the `ns` command."""

    ENTRIES = "entries"
    TREATMENTS = "treatments"
    DEVICES = "devices"
    HELP = "help"

    @property
    def long_form(self) -> str:
        return f"--{self.value}"

    @property
    def short_form(self) -> str | None:
        if self is OptionFlag.HELP:
            return None
        return f"-{self.value[0]}"

    @property
    def takes_count(self) -> bool:
        return self in (OptionFlag.ENTRIES, OptionFlag.TREATMENTS)

    @property
    def effect_description(self) -> str:
        return _EFFECT_DESCRIPTIONS[self]

    @classmethod
    def matching(cls, token: str) -> OptionFlag | None:
        """Return the flag whose short or long form equals token exactly."""
        for flag in cls:
            if token == flag.long_form or token == flag.short_form:
                return flag
        return None


_EFFECT_DESCRIPTIONS = {
    OptionFlag.ENTRIES: (
        f"Display blood glucose entries [default: {DEFAULT_ENTRY_COUNT_WITH_FLAG}]"
    ),
    OptionFlag.TREATMENTS: f"Display treatments [default: {DEFAULT_TREATMENT_COUNT_WITH_FLAG}]",
    OptionFlag.DEVICES: "Display device statuses",
    OptionFlag.HELP: "Display available options",
}


@dataclass(frozen=True)
class FetchPlan:
    """What to fetch and from where, built once per invocation."""

    site_url: str
    entry_count: int | None = DEFAULT_ENTRY_COUNT
    treatment_count: int | None = None
    include_device_statuses: bool = False
    show_help: bool = False

    @classmethod
    def default(cls, site_url: str) -> FetchPlan:
        """Plan used when no options follow the site URL."""
        return cls(site_url=site_url)


def _resolve_site(tokens: list[str], environment_site_url: str | None) -> str:
    if tokens and not tokens[0].startswith("-") and is_absolute_url(tokens[0]):
        return tokens.pop(0)
    if is_absolute_url(environment_site_url):
        logger.debug("Using site from %s: %s", ENV_SITE, environment_site_url)
        return environment_site_url  # type: ignore[return-value]
    raise NoSiteSpecifiedError()


def _expand_combined(token: str) -> list[str]:
    """Split -etd into [-e, -t, -d], or fail if any character is unknown."""
    flags = [f"-{char}" for char in token[1:]]
    if not flags or any(OptionFlag.matching(flag) is None for flag in flags):
        raise UnexpectedArgumentError(token)
    return flags


def parse_options(tokens: Sequence[str], environment_site_url: str | None = None) -> FetchPlan:
    """Parse command-line tokens (excluding the program name) into a FetchPlan.

    Args:
        tokens: Raw argument tokens
        environment_site_url: Fallback site URL, normally the NS_SITE value

    Returns:
        The resolved FetchPlan

    Raises:
        NoSiteSpecifiedError: If no valid site URL is available
        UnexpectedArgumentError: If a token is not a known flag or count
        InvalidCountError: If a count argument is zero or negative
    """
    remaining = list(tokens)
    site_url = _resolve_site(remaining, environment_site_url)

    if not remaining:
        plan = FetchPlan.default(site_url)
        logger.debug("No options given, using default plan: %s", plan)
        return plan

    entry_count: int | None = None
    treatment_count: int | None = None
    include_device_statuses = False
    show_help = False

    # Expanded combined flags are queued after the explicit tokens and are
    # processed without count lookahead.
    queue: list[tuple[str, bool]] = [(token, True) for token in remaining]
    index = 0
    while index < len(queue):
        token, allow_count = queue[index]
        flag = OptionFlag.matching(token)
        if flag is None:
            if not token.startswith("-"):
                raise UnexpectedArgumentError(token)
            queue.extend((expanded, False) for expanded in _expand_combined(token))
        elif flag.takes_count:
            count = None
            if allow_count and index + 1 < len(queue) and queue[index + 1][1]:
                count = parse_int(queue[index + 1][0])
            if count is not None:
                if count <= 0:
                    raise InvalidCountError(count)
                index += 1
            if flag is OptionFlag.ENTRIES:
                entry_count = count if count is not None else DEFAULT_ENTRY_COUNT_WITH_FLAG
            else:
                treatment_count = (
                    count if count is not None else DEFAULT_TREATMENT_COUNT_WITH_FLAG
                )
        elif flag is OptionFlag.DEVICES:
            include_device_statuses = True
        else:
            show_help = True
        index += 1

    plan = FetchPlan(
        site_url=site_url,
        entry_count=entry_count,
        treatment_count=treatment_count,
        include_device_statuses=include_device_statuses,
        show_help=show_help,
    )
    logger.debug("Parsed options into plan: %s", plan)
    return plan


def usage_text(prog: str = "ns") -> str:
    """Return the --help text."""
    flag_forms = {
        flag: f"  {flag.long_form}" + (f", {flag.short_form}" if flag.short_form else "")
        for flag in OptionFlag
    }
    flag_width = (max_width(flag_forms.values(), lambda form: form) or 0) + 2
    option_lines = "\n".join(
        left_aligned(form, flag_width) + flag.effect_description
        for flag, form in flag_forms.items()
    )
    return (
        "OVERVIEW: Display recent Nightscout entries, treatments, and device statuses\n"
        "\n"
        f"USAGE: {prog} [url] [options]\n"
        f"  If no url is specified, the environment variable {ENV_SITE}\n"
        "  will be checked for the Nightscout URL.\n"
        f"  If no options are specified, {DEFAULT_ENTRY_COUNT} blood glucose entries "
        "will be displayed.\n"
        "\n"
        "OPTIONS:\n"
        f"{option_lines}"
    )
