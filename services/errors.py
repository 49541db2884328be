"""
Exceptions raised by the waitlist services.

Request-path errors carry the HTTP status and the message shown to the
client; handlers render them as ``{"success": false, "error": message}``.
"""


class WaitlistError(Exception):
    status_code = 500
    message = 'Server error. Please try again later.'

    def __init__(self, message=None):
        if message:
            self.message = message
        super().__init__(self.message)


class ValidationError(WaitlistError):
    status_code = 400
    message = 'Invalid request'


class DuplicateEmailError(WaitlistError):
    status_code = 409
    message = 'This email is already registered'


class ForbiddenError(WaitlistError):
    status_code = 403
    message = 'Forbidden'


class DatabaseUnavailableError(RuntimeError):
    """The store never answered during the startup probe."""


class SchemaBootstrapError(RuntimeError):
    """Required tables could not be created or verified."""
