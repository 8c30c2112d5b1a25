"""
Service layer decorators for common functionality.

This module provides the error handling and logging decorator applied to
service methods.
"""

import functools
import inspect
import structlog
from typing import Any, Awaitable, Callable, Dict, ParamSpec, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import (
    DatabaseError,
    ServiceException,
    ValidationError,
)

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def _build_context(
    func: Callable[..., Any],
    service_name: str,
    include_context: bool,
    args: tuple,
    kwargs: dict,
) -> Dict[str, Any]:
    context: Dict[str, Any] = {
        "service": service_name,
        "operation": func.__name__,
    }
    if not include_context:
        return context

    bound_args = inspect.signature(func).bind(*args, **kwargs)
    bound_args.apply_defaults()
    for name, value in bound_args.arguments.items():
        if name in ("self", "db", "session"):
            continue
        # Limit values to avoid huge log entries
        context[name] = str(value)[:200] if value is not None else None
    return context


def service_error_handler(
    service_name: str,
    reraise: bool = True,
    include_context: bool = True,
    default_error_type: Type[ServiceException] = ServiceException,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Decorator for handling service method errors with structured logging.

    Domain exceptions pass through untouched. ``ValueError`` becomes a
    ``ValidationError``, SQLAlchemy failures become ``DatabaseError`` and
    anything else is wrapped in ``default_error_type``.

    :param service_name: Name of the service (e.g., "MatchService")
    :param reraise: Whether to re-raise exceptions after logging
    :param include_context: Whether to include method parameters in error context
    :param default_error_type: Exception type used to wrap unexpected errors
    :returns: Decorated coroutine function

    :example:
        @service_error_handler("MatchService")
        async def submit_score(self, match_id: str, actor_id: str, ...) -> ...:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        operation_name = func.__name__

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            context = _build_context(
                func, service_name, include_context, args, kwargs
            )

            try:
                logger.debug("Service method called", **context)
                result = await func(*args, **kwargs)
                logger.debug("Service method completed successfully", **context)
                return result

            except ServiceException as e:
                # Domain rejections are expected; keep them at info level
                log = logger.error if e.status_code >= 500 else logger.info
                log(
                    "Service operation rejected",
                    error_type=e.__class__.__name__,
                    error_message=e.message,
                    error_context=e.context,
                    **context,
                )
                if reraise:
                    raise
                return None  # type: ignore[return-value]

            except ValueError as e:
                logger.info(
                    "Validation error in service operation",
                    error_message=str(e),
                    **context,
                )
                if reraise:
                    raise ValidationError(
                        message=str(e),
                        service=service_name,
                        operation=operation_name,
                        context=context,
                    ) from e
                return None  # type: ignore[return-value]

            except SQLAlchemyError as e:
                logger.error(
                    "Database error in service operation",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    **context,
                )
                if reraise:
                    raise DatabaseError(
                        message=str(e),
                        service=service_name,
                        operation=operation_name,
                        context=context,
                        original_error=e,
                    ) from e
                return None  # type: ignore[return-value]

            except Exception as e:
                logger.error(
                    "Unexpected error in service operation",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    **context,
                )
                if reraise:
                    raise default_error_type(
                        message=f"Unexpected error in {service_name}.{operation_name}: {e}",
                        service=service_name,
                        operation=operation_name,
                        context=context,
                        original_error=e,
                    ) from e
                return None  # type: ignore[return-value]

        return wrapper

    return decorator
