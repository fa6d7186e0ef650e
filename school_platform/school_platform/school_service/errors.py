"""
Error taxonomy shared by the services and the HTTP layer.

Each error carries the HTTP status it maps to and the JSON key its message is
returned under.
"""


class SchoolAPIError(Exception):
    status_code = 500
    body_key = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {self.body_key: self.message}


class ValidationError(SchoolAPIError):
    """A required field is missing or empty."""
    status_code = 400


class InvalidCredentialsError(SchoolAPIError):
    status_code = 400
    body_key = "message"


class InvalidTokenError(SchoolAPIError):
    status_code = 401


class NotFoundError(SchoolAPIError):
    status_code = 404
    body_key = "message"


class ConflictError(SchoolAPIError):
    status_code = 409


class ServerError(SchoolAPIError):
    status_code = 500


class ConfigurationError(Exception):
    """Raised at startup when a required setting is absent."""
