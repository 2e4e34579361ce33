"""
Cheese Shop API — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the error scenarios the API knows.
How:   Each exception carries a message and an optional context dict.
       The error table in main.py maps each class to a status code and a
       machine-readable error body.
Who:   Raised by services and the path-parameter parser; caught by the
       global handlers.

Exception Hierarchy:
    CheeseShopError (base)
    ├── NotFoundError   → 404 Not Found
    └── DatabaseError   → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class CheeseShopError(Exception):
    """
    Base exception for all Cheese Shop application errors.

    Attributes:
        message:  Human-readable error description
        context:  Additional debug info (logged, NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(CheeseShopError):
    """
    Raised when a requested resource does not exist.

    When:    GET /cheeses/{id} with an id that has no record, or with a path
             segment that is not a valid identifier at all.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; the service layer turns
    that None into this exception so the route never sees an empty result.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = dict(context or {})
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(CheeseShopError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, missing table, driver failure.
    HTTP:    500 Internal Server Error

    The response body is always generic. Query details stay in the
    server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
