"""Operational errors raised by the service layer.

Each carries the HTTP status it maps to. The app-level error handler in
create_app() turns them into ``{success: false, error: {message}}``
responses; anything that is not an OperationalError is treated as an
internal fault and surfaced as a generic 500.
"""


class OperationalError(Exception):
    """Expected, caller-correctable error."""

    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(OperationalError):
    """Malformed website name, title or content."""

    status_code = 400


class ConflictError(OperationalError):
    status_code = 409


class DuplicateNameError(ConflictError):
    """The store rejected an insert because the website name is taken."""

    def __init__(self, website_name):
        super().__init__(f'Website with name "{website_name}" already exists')
        self.website_name = website_name


class NotFoundError(OperationalError):
    status_code = 404

    def __init__(self, message="Website not found"):
        super().__init__(message)


class InvalidStatusError(OperationalError):
    status_code = 400


class MissingFieldError(OperationalError):
    """A status transition is missing the field its target state requires."""

    status_code = 400

    def __init__(self, field, status):
        super().__init__(f"{field} is required when status is {status}")
        self.field = field
        self.status = status
