"""
Campus API Custom Exceptions
Every error a resolver can raise on purpose derives from CampusError
"""


class CampusError(Exception):
    """Base exception for the campus API"""
    def __init__(self, message: str, code: int = 400):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(CampusError):
    """Malformed input or a duplicate unique field"""
    pass


class NotFoundError(CampusError):
    """An id or email does not resolve to a record"""
    def __init__(self, message: str = "Not found"):
        super().__init__(message, 404)


class UnauthenticatedError(CampusError):
    """No valid caller identity on a guarded mutation"""
    def __init__(self, message: str = "UNAUTHENTICATED"):
        super().__init__(message, 401)


class InvalidCredentialsError(CampusError):
    """Password did not match on login"""
    def __init__(self, message: str = "Invalid password"):
        super().__init__(message, 401)


class DatabaseError(CampusError):
    """Database operation errors"""
    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message, 500)
