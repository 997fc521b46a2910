"""
Domain error taxonomy.

Services raise these exceptions; the HTTP layer maps each kind to a
status code in ``main.create_app``.  Every error carries a human
readable ``message`` that is returned to the client verbatim.
"""


class SchedulingError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingField(SchedulingError):
    """A required input was absent."""


class ValidationError(SchedulingError):
    """An input was present but malformed (bad date, negative price...)."""


class NotFound(SchedulingError):
    """The target record does not exist."""


class ReferenceNotFound(NotFound):
    """A record referenced by the request (customer, service) does not exist."""


class SlotConflict(SchedulingError):
    """Another appointment already occupies the requested slot."""


class StorageFailure(SchedulingError):
    """A collection could not be read or durably written."""


class StorageUnavailable(StorageFailure):
    """The backing file of a collection is missing or unreadable."""


class CascadeFailure(StorageFailure):
    """Dependent appointments could not be removed after an entity delete."""
