"""Application domain specific exceptions."""

from admissions.core.errors import BackendPersistenceError


class ApplicationNotFoundError(BackendPersistenceError):
    """Raised when no application with the given id belongs to the caller."""

    code = "application_not_found"

    def __init__(self, application_id: str) -> None:
        super().__init__(f"Application not found: {application_id}", status=404)
        self.application_id = application_id
