"""Error taxonomy shared by the generator core and the HTTP boundary."""


class InitializrError(Exception):
    """Base class for every domain error raised by the initializr."""


class ConfigInvalid(InitializrError):
    """The submitted configuration cannot produce a project."""


class CatalogUnavailable(InitializrError):
    """The option catalog could not be loaded."""


class CatalogMissing(CatalogUnavailable):
    pass


class CatalogMalformed(CatalogUnavailable):
    pass


class TemplateMissing(InitializrError):
    """A template role could not be resolved or rendered."""

    def __init__(self, role: str, detail: str = ""):
        self.role = role
        message = f"template for role '{role}' is not available"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UpstreamUnavailable(InitializrError):
    """A package registry failed or timed out."""


class StatsUnavailable(InitializrError):
    """The counters backend could not be reached."""


class SelectionRejected(InitializrError):
    """A package could not be added to the current selection."""


class ClientDisconnected(InitializrError):
    """The client closed the response stream mid-archive."""
