"""
EasyBuild Content API - Custom Exception Hierarchy
====================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a user-safe message and an optional context
       dict. Global handlers registered in main.py translate them into the
       response envelope with the matching HTTP status.
Who:   Raised by the connection cache, the services and the middleware.

Exception Hierarchy:
    EasyBuildError (base)
    ├── ValidationError             → 400 Bad Request
    ├── NotFoundError               → 404 Not Found
    ├── OperationNotSupportedError  → 405 Method Not Allowed
    ├── RateLimitExceededError      → 429 Too Many Requests
    ├── ConfigurationError          → 500 (missing environment configuration)
    └── StorageError                → 500 (any database failure)
        ├── DatabaseConnectionError     (connect timed out or was refused)
        └── SiblingDeactivationError    (write kept, siblings still active)
"""

from typing import Any, Dict, List, Optional


class EasyBuildError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged, never returned to the client)
    """

    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(EasyBuildError):
    """
    Raised when client input fails validation.

    When:  A localized field misses a locale, a media field is empty, or a
           document identifier is not a well-formed ObjectId.
    HTTP:  400 Bad Request

    Example envelope:
        {
            "success": false,
            "message": "title: missing text for locale(s): de",
            "error": "validation_error"
        }
    """

    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if errors:
            ctx["errors"] = errors
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = errors or []


class NotFoundError(EasyBuildError):
    """
    Raised when a requested resource does not exist.

    When:  Unknown content type slug, no active document of a single-active
           type, or no document with the given id.
    HTTP:  404 Not Found
    """

    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class OperationNotSupportedError(EasyBuildError):
    """
    Raised when a content type does not offer the requested operation.

    When:  DELETE on a single-active type such as the banner.
    HTTP:  405 Method Not Allowed
    """

    error_code = "method_not_allowed"


class RateLimitExceededError(EasyBuildError):
    """
    Raised when a client exceeds the per-IP write rate limit.

    HTTP:  429 Too Many Requests, with a Retry-After header
    """

    error_code = "rate_limit_exceeded"

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class ConfigurationError(EasyBuildError):
    """
    Raised when required environment configuration is absent.

    When:  The first database access finds no MONGODB_URI.
    HTTP:  500 Internal Server Error
    """

    error_code = "configuration_error"

    def __init__(
        self,
        message: str = "The server is missing required configuration",
        setting: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if setting:
            ctx["setting"] = setting
        super().__init__(message=message, context=ctx)
        self.setting = setting


class StorageError(EasyBuildError):
    """
    Raised when a database operation fails.

    HTTP:  500 Internal Server Error

    Security Note:
        The message is always generic. Driver details go into `context`,
        which is logged after connection strings have been redacted.
    """

    error_code = "storage_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseConnectionError(StorageError):
    """
    Raised when the database connection attempt times out or is refused.

    The connection cache clears its pending attempt before this propagates,
    so the next request starts a fresh attempt. Retry policy belongs to the
    caller.
    """

    def __init__(
        self,
        message: str = "Could not connect to the database. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SiblingDeactivationError(StorageError):
    """
    Raised when a single-active document was written but the previously
    active documents of the same type could not be deactivated.

    The written document is kept, so more than one document may be active
    until the next successful write of that type. Repeating the write
    reconciles the collection.
    """

    error_code = "activation_inconsistent"

    def __init__(
        self,
        collection: str,
        document_id: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            "The document was saved, but the previously active entry could not "
            "be deactivated. Please repeat the request."
        )
        ctx = context or {}
        ctx["collection"] = collection
        ctx["document_id"] = document_id
        super().__init__(message=message, context=ctx)
        self.collection = collection
        self.document_id = document_id
