"""
Error Utility Functions
====================

This module contains the exception hierarchy and the error handling helpers
shared by the accessibility modules.

Classes:
    AppError: Base class for all custom exceptions.
    DataError: Base class for raster and grid data errors.
    DataValidationError: Exception raised when input rasters fail validation.
    DataProcessingError: Exception raised when aggregation fails mid-computation.
    ConfigError: Exception raised for configuration errors.
    ConfigMissingError: Exception raised when required configuration is missing.
    ConfigValueError: Exception raised when a configuration value is malformed.

Functions:
    handle_exception: Decorator to handle exceptions in functions.
    ExceptionContext: Context manager for handling exceptions.
    convert_exception: Convert an exception instance to an application error.

Example:
    >>> from src.utils.error_utils import handle_exception, DataProcessingError
    >>> @handle_exception(custom_mapping={IndexError: DataProcessingError})
    >>> def sum_pixels():
    ...     # Function that might raise exceptions
    ...     pass
"""

# Standard library imports
import functools
import logging
import traceback
from typing import Type, Callable, TypeVar, Optional


# Base exception class
class AppError(Exception):
    """Base exception for all application errors"""

    pass


# Data-related exceptions
class DataError(AppError):
    """Base error related to raster and grid data"""

    pass


class DataValidationError(DataError):
    """Error when a surface, grid or cutoff fails validation"""

    pass


class DataProcessingError(DataError):
    """Error when aggregating raster values"""

    pass


# Configuration-related exceptions
class ConfigError(AppError):
    """Base error related to configuration"""

    pass


class ConfigMissingError(ConfigError):
    """Error when required configuration is missing"""

    pass


class ConfigValueError(ConfigError):
    """Error when a configuration value cannot be used"""

    pass


# Type variable for function return
T = TypeVar("T")


def _mapped_error(exc: Exception, custom_mapping) -> Optional[Type[AppError]]:
    """Exact type first, then the first listed base class the exception derives from."""
    if not custom_mapping:
        return None
    if type(exc) in custom_mapping:
        return custom_mapping[type(exc)]
    for exc_type, error_cls in custom_mapping.items():
        if isinstance(exc, exc_type):
            return error_cls
    return None


def handle_exception(
    func: Callable[..., T] = None,
    custom_mapping: dict[Type[Exception], Type[AppError]] = None,
) -> Callable[..., T]:
    """
    Decorator to standardize exception handling.

    Args:
        func: The function to decorate
        custom_mapping: Optional dictionary mapping exceptions to custom app exceptions

    Returns:
        Decorated function with standardized exception handling
    """

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs) -> T:
            try:
                return fn(*args, **kwargs)
            except AppError as e:
                # Already a custom exception, just log and re-raise
                logging.error(f"{e.__class__.__name__}: {str(e)}")
                raise
            except Exception as e:
                error_cls = _mapped_error(e, custom_mapping)
                if error_cls is not None:
                    logging.error(f"Mapped error in {fn.__name__}: {str(e)}")
                    logging.debug(f"Exception details: {traceback.format_exc()}")
                    raise error_cls(str(e)) from e
                else:
                    logging.error(f"Unexpected error in {fn.__name__}: {str(e)}")
                    logging.debug(f"Exception details: {traceback.format_exc()}")
                    raise AppError(f"Unexpected error: {str(e)}") from e

        return wrapper

    if func is None:
        return decorator
    return decorator(func)


class ExceptionContext:
    """
    Context manager for standardized exception handling.

    Example:
        with ExceptionContext("Summing grid", error_cls=DataProcessingError):
            # code that might raise exceptions
    """

    def __init__(self, operation_name: str, error_cls: Type[AppError] = AppError):
        self.operation_name = operation_name
        self.error_cls = error_cls

    def __enter__(self):
        return self

    def __exit__(self, _exc_type, exc_val, _exc_tb):
        if exc_val is None:
            return False

        if isinstance(exc_val, AppError):
            logging.error(
                f"{exc_val.__class__.__name__} in {self.operation_name}: {str(exc_val)}"
            )
            return False

        logging.error(f"Error in {self.operation_name}: {str(exc_val)}")
        logging.debug(f"Exception details: {traceback.format_exc()}")
        raise self.error_cls(
            f"Error in {self.operation_name}: {str(exc_val)}"
        ) from exc_val


def convert_exception(
    exception: Exception, error_cls: Type[AppError] = AppError, message: str = None
) -> AppError:
    """
    Convert a regular exception to an application-specific exception.

    Args:
        exception: The original exception
        error_cls: The custom exception class to convert to
        message: Optional custom message (uses str(exception) if None)

    Returns:
        An instance of the specified AppError subclass
    """
    msg = message or str(exception)
    return error_cls(msg)
