"""
Centralized custom exception definitions for the Country Registry API.

Each exception inherits from BaseAppError, which itself extends Werkzeug's
HTTPException, allowing clean integration with Flask's error system and
JSON-formatted API responses.

Domain Groups:
--------------
1. Validation Errors (400)
2. Database Errors (400–503)
3. System Errors (500)
"""

from werkzeug.exceptions import HTTPException


class BaseAppError(HTTPException):
    """Root application error, base for all custom exceptions."""
    code = 500
    description = "Application error"

    def __init__(self, message=None, details=None, code=None):
        super().__init__(description=message or self.description)
        self.message = message or self.description
        self.details = details or {}
        if code:
            self.code = code

    def to_dict(self):
        """Serialize error info into a JSON-safe dictionary."""
        return {
            "status": "error",
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


# ==============================================================================
# 1. VALIDATION ERRORS (HTTP 400)
# ==============================================================================

class ValidationError(BaseAppError):
    code = 400
    description = "Validation error"


# ==============================================================================
# 2. DATABASE ERRORS (HTTP 400–503)
# ==============================================================================

class DuplicateKeyError(BaseAppError):
    """Unique index violation. Reported as a client error."""
    code = 400
    description = "Duplicate record detected"


class RecordNotFoundError(BaseAppError):
    code = 404
    description = "Requested record not found"


class DatabaseOperationError(BaseAppError):
    code = 500
    description = "Database operation failed"


class DatabaseConnectionError(BaseAppError):
    code = 503
    description = "Database connection failed"


# ==============================================================================
# 3. SYSTEM ERRORS (HTTP 500)
# ==============================================================================

class ConfigurationError(BaseAppError):
    code = 500
    description = "Configuration missing or invalid"
