"""
Error taxonomy — every error the service can surface to a client carries
an HTTP status and a machine-readable code.
"""


class ServiceAutomationError(Exception):
    """Base class for service errors rendered as JSON by the app."""
    status_code = 500
    code = 'INTERNAL_ERROR'

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        body = {"error": self.message, "code": self.code}
        body.update(self.details)
        return body


class ValidationError(ServiceAutomationError):
    """A required input field is missing or could not be extracted."""
    status_code = 400
    code = 'VALIDATION_ERROR'

    def __init__(self, message, code=None, **details):
        super().__init__(message, **details)
        if code:
            self.code = code


class MissingCustomerEmail(ValidationError):
    """A customer reply carried no resolvable email address."""
    code = 'MISSING_CUSTOMER_EMAIL'


class NotFoundError(ServiceAutomationError):
    status_code = 404
    code = 'NOT_FOUND'


class PersistenceError(ServiceAutomationError):
    status_code = 500
    code = 'DB_ERROR'


class ExternalLookupError(ServiceAutomationError):
    """The service options sheet could not be fetched or parsed.

    Recovered by the option matcher; never rendered to a client.
    """
    status_code = 502
    code = 'EXTERNAL_LOOKUP_FAILED'


class MalformedInput(ValueError):
    """CSV text whose header line is empty."""
