"""
Error kinds raised while resolving a boot configuration.

Only these are fatal. Out-of-order or unknown directives are never errors;
the parser treats them as no-ops.
"""


class MalformedReference(ValueError):
    """A path or URL string that cannot be parsed as a URL at all."""

    def __init__(self, reference: str, reason: str):
        self.reference = reference
        self.reason = reason
        super().__init__(f"could not parse URL {reference!r}: {reason}")


class FetchError(Exception):
    """Base for failures reported by a fetcher."""

    def __init__(self, url: str, detail: str = ""):
        self.url = url
        self.detail = detail
        msg = f"{url}: {detail}" if detail else url
        super().__init__(msg)


class NotFound(FetchError):
    """The resource does not exist. `include` tolerates this one."""


class TransportError(FetchError):
    """Any fetch failure other than a missing resource."""


class UnsupportedScheme(TransportError):
    """No fetcher is registered for the URL's scheme."""


class ConfigNotFound(Exception):
    """No probe candidate under a local root held a usable config."""
