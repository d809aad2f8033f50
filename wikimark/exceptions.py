class WikimarkError(Exception):
    """Base exception for the wikimark resolver."""


class ConfigurationError(WikimarkError):
    """Raised when a configuration value is missing or invalid."""


class QueryFailedError(WikimarkError):
    """Raised when the SPARQL endpoint cannot answer a query.

    Covers transport errors, non-success HTTP statuses and payloads that do
    not look like SPARQL JSON results.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class MalformedEntityURIError(WikimarkError, ValueError):
    """Raised when an entity URI does not end in ``/entity/Q<digits>``."""
