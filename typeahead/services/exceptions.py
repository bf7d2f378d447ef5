"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class ProviderError(ServiceError):
    """Raised when the remote catalog cannot answer a search."""

    def __init__(self, message: str, *, term: str | None = None) -> None:
        super().__init__(message)
        self.term = term
