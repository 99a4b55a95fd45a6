import logging
from fastapi import status
from fastapi.responses import JSONResponse
from fastapi.requests import Request

logger = logging.getLogger(__name__)

# ---------------------------
# CRUD (Database abstraction)
# ---------------------------

class DatabaseError(Exception):
    """Base class for all database-related errors."""
    pass

class DatabaseConflictError(DatabaseError):
    """Raised when a unique constraint is violated (e.g., one daily entry per user and date)."""
    pass

# ---------------------------
# Service (Business logic)
# ---------------------------

class BusinessError(Exception):
    """Base class for all business logic errors."""
    pass

class NotFoundError(BusinessError):
    """Raised when a resource does not exist or belongs to another user."""
    pass

class PermissionError(BusinessError):
    """Raised when an action is not allowed on an existing resource (e.g., editing an old journal entry)."""
    pass

class ValidationError(BusinessError):
    """Raised when a business rule rejects the input (archived activity, bad upload, ...)."""
    pass

class UnauthorizedError(BusinessError):
    """Raised when the bearer token or a signed media link is missing or invalid."""
    pass


# ---------------------------
# FastAPI Exception Handlers
# ---------------------------

def _detail(status_code: int, exc: Exception, **kwargs) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)}, **kwargs)


def register_exception_handlers(app):
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _detail(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(PermissionError)
    async def permission_handler(request: Request, exc: PermissionError):
        return _detail(status.HTTP_403_FORBIDDEN, exc)

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(request: Request, exc: UnauthorizedError):
        return _detail(
            status.HTTP_401_UNAUTHORIZED, exc, headers={"WWW-Authenticate": "Bearer"}
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _detail(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError):
        logger.error(f"Database error on {request.url.path}: {exc}", exc_info=exc)
        if isinstance(exc, DatabaseConflictError):
            return _detail(status.HTTP_409_CONFLICT, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
