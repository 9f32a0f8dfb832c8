"""
Domain errors raised by services and translated to HTTP at the endpoints
"""


class ConsoleError(Exception):
    """Base for console domain errors"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AccessDeniedError(ConsoleError):
    """
    The authenticated identity is neither a super-admin nor a user of any
    verified company.
    """

    def __init__(self, message: str = "Access denied. User not authorized.", email: str = None):
        self.email = email
        super().__init__(message)


class TenantSchemaError(ConsoleError):
    """A company schema name is invalid or the schema could not be provisioned"""


class EntitlementError(ConsoleError):
    """The company's package does not allow the requested operation"""
