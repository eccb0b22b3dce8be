"""nscli exception classes."""

from __future__ import annotations

from .constants import ENV_SITE, ISSUES_URL


class NightscoutCliError(RuntimeError):
    """Base exception for nscli errors."""


class UserError(NightscoutCliError):
    """Errors that should be shown to user without traceback."""

    def __init__(self, message: str, rc: int = 2):
        super().__init__(message)
        self.rc = rc


class OptionError(UserError):
    """Command-line arguments could not be turned into a fetch plan."""

    def __init__(self, message: str):
        super().__init__(message, rc=1)


class NoSiteSpecifiedError(OptionError):
    """Neither the arguments nor the environment name a Nightscout site."""

    def __init__(self) -> None:
        super().__init__(
            "no URL specified; pass a URL as the first argument "
            f"or set the {ENV_SITE} environment variable"
        )


class UnexpectedArgumentError(OptionError):
    """An argument is not a known flag, combined flag or count."""

    def __init__(self, argument: str):
        super().__init__(f"unexpected argument {argument}; use --help to list available arguments")
        self.argument = argument


class InvalidCountError(OptionError):
    """A count argument was zero or negative."""

    def __init__(self, count: int):
        super().__init__(f"invalid count argument {count}; count must be a positive integer")
        self.count = count


FETCH_ERROR_MESSAGES = {
    "invalid_url": "invalid Nightscout URL",
    "missing_api_secret": "missing API secret",
    "fetch_error": "fetch error: {detail}",
    "missing_data": "missing data in URL response",
    "unauthorized": "unauthorized",
    "http_error": "unexpected HTTP response: {detail}",
    "json_parsing_error": "JSON parsing error: {detail}",
    "data_parsing_failure": (
        f"data parsing failure; see {ISSUES_URL} to submit a bug report"
    ),
}


class FetchError(NightscoutCliError):
    """A remote fetch failed.

    `kind` is one of the keys of FETCH_ERROR_MESSAGES; `resource` names the
    fetch that failed ("entries", "treatments" or "devicestatus") once the
    orchestrator has attributed it.
    """

    def __init__(self, kind: str, detail: str = "", *, resource: str | None = None):
        template = FETCH_ERROR_MESSAGES.get(kind, "{detail}")
        super().__init__(template.format(detail=detail))
        self.kind = kind
        self.detail = detail
        self.resource = resource
        self.rc = 1
