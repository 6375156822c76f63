"""
================================================================================
FILE: hpcadmin/core/exceptions.py
================================================================================

PURPOSE:
    Custom exception hierarchy for the HPC admin server. Every failure the
    server knows how to name is raised as one of these types, so startup can
    abort with a precise log line and the HTTP layer can map errors to JSON.

EXCEPTION CATEGORIES:
    - FATAL (startup aborts, process exits 1):
        * ConfigReadError: configuration file could not be opened/read
        * ConfigParseError: configuration document malformed or mistyped
        * ConfigValidationError: first missing required field
        * DatabaseConnectionError: database unreachable or rejected us
        * MissingDependencyError: context lookup without a binding
        * DocumentationError: route docs could not be written

    - RESOURCE (raised by the data layer, mapped to HTTP status codes):
        * ResourceNotFoundError: 404
        * ResourceConflictError: 409

KEY FACTS:
    - NO imports from hpcadmin modules (prevents circular dependencies)
    - All exceptions inherit from HPCAdminException
    - Each exception has error_code for categorization
    - Low-level causes are chained with `raise ... from exc`

TESTING ENVIRONMENT:
    - Assert on exception type and error_code, not on message wording
    - ConfigValidationError.field names the violated field
"""

# ================================================================================
# IMPORTS
# ================================================================================

from typing import Optional, Dict, Any

# ================================================================================
# SECTION 1: BASE EXCEPTIONS
# ================================================================================

class HPCAdminException(Exception):
    """
    Root exception for all HPC admin server errors.

    Attributes:
        message (str): Human-readable error message
        error_code (str): Machine-readable error code for categorization
        context (dict): Additional context (optional)
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        context: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dict for JSON response"""
        return {
            "error": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context
        }


class FatalException(HPCAdminException):
    """
    Exception that cannot be recovered.

    Raised during startup; the process logs it and exits before accepting
    any traffic.
    """
    pass

# ================================================================================
# SECTION 2: STARTUP EXCEPTIONS
# ================================================================================

class ConfigurationError(FatalException):
    """Invalid configuration (fatal)"""

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIG_ERROR",
        context: Optional[Dict] = None
    ):
        super().__init__(message, error_code=error_code, context=context)


class ConfigReadError(ConfigurationError):
    """Configuration file could not be read"""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="CONFIG_READ_ERROR", context=context)


class ConfigParseError(ConfigurationError):
    """Configuration document is malformed or has incompatible types"""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="CONFIG_PARSE_ERROR", context=context)


class ConfigValidationError(ConfigurationError):
    """A required configuration field is empty or zero"""

    def __init__(self, field: str, context: Optional[Dict] = None):
        self.field = field
        super().__init__(
            f"missing {field}",
            error_code="CONFIG_VALIDATION_ERROR",
            context={"field": field, **(context or {})},
        )


class DatabaseConnectionError(FatalException):
    """Database unreachable, credentials rejected or database missing"""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="DB_CONNECTION_ERROR", context=context)


class MissingDependencyError(FatalException):
    """A context lookup found no binding for the requested key"""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="MISSING_DEPENDENCY", context=context)


class DocumentationError(FatalException):
    """Route documentation could not be written"""

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="DOCS_ERROR", context=context)

# ================================================================================
# SECTION 3: RESOURCE EXCEPTIONS
# ================================================================================

class ResourceNotFoundError(HPCAdminException):
    """Requested user or pirg does not exist"""

    status_code = 404

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="NOT_FOUND", context=context)


class ResourceConflictError(HPCAdminException):
    """Write rejected by a uniqueness or reference constraint"""

    status_code = 409

    def __init__(self, message: str, context: Optional[Dict] = None):
        super().__init__(message, error_code="CONFLICT", context=context)
