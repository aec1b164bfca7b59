import unittest
from unittest.mock import patch

from src.utils.error_utils import (
    ExceptionContext,
    AppError,
    DataError,
    DataValidationError,
    DataProcessingError,
    ConfigError,
    ConfigValueError,
    handle_exception,
    convert_exception,
)


class TestErrorUtils(unittest.TestCase):
    def test_hierarchy(self):
        self.assertTrue(issubclass(DataValidationError, DataError))
        self.assertTrue(issubclass(DataProcessingError, DataError))
        self.assertTrue(issubclass(ConfigValueError, ConfigError))
        self.assertTrue(issubclass(DataError, AppError))
        self.assertTrue(issubclass(ConfigError, AppError))

    def test_exception_context_manager(self):
        """ExceptionContext wraps foreign exceptions with the operation name."""
        with self.assertRaises(AppError) as cm:
            with ExceptionContext("Summing grid"):
                raise ValueError("Original error")

        error_msg = str(cm.exception)
        self.assertIn("Summing grid", error_msg)
        self.assertIn("Original error", error_msg)

    def test_exception_context_with_custom_error(self):
        with self.assertRaises(DataProcessingError) as cm:
            with ExceptionContext("Summing grid", error_cls=DataProcessingError):
                raise IndexError("list index out of range")

        self.assertIsInstance(cm.exception.__cause__, IndexError)

    def test_exception_context_passes_app_errors_through(self):
        with self.assertRaises(DataValidationError) as cm:
            with ExceptionContext("Summing grid", error_cls=DataProcessingError):
                raise DataValidationError("bad cutoff")

        self.assertEqual(str(cm.exception), "bad cutoff")

    def test_exception_context_no_exception(self):
        with ExceptionContext("Summing grid"):
            result = 1 + 1
        self.assertEqual(result, 2)

    def test_convert_exception(self):
        original = ValueError("Original error")
        converted = convert_exception(original, DataError)

        self.assertIsInstance(converted, DataError)
        self.assertEqual(str(converted), "Original error")

        converted_with_msg = convert_exception(original, ConfigError, "Custom message")
        self.assertIsInstance(converted_with_msg, ConfigError)
        self.assertEqual(str(converted_with_msg), "Custom message")

    @patch("src.utils.error_utils.logging")
    def test_handle_exception_decorator(self, mock_logging):
        @handle_exception
        def failing_function():
            raise ValueError("Original error")

        with self.assertRaises(AppError) as cm:
            failing_function()

        error_msg = str(cm.exception)
        self.assertIn("Unexpected error", error_msg)
        self.assertIn("Original error", error_msg)
        mock_logging.error.assert_called()

    @patch("src.utils.error_utils.logging")
    def test_handle_exception_with_mapping(self, mock_logging):
        @handle_exception(custom_mapping={IndexError: DataProcessingError})
        def failing_function():
            return [][0]

        with self.assertRaises(DataProcessingError) as cm:
            failing_function()

        self.assertEqual(str(cm.exception), "list index out of range")

    @patch("src.utils.error_utils.logging")
    def test_handle_exception_maps_subclasses(self, mock_logging):
        """A base class key catches derived exceptions the exact key list misses."""

        @handle_exception(custom_mapping={LookupError: DataProcessingError})
        def failing_function():
            return {}["jobs"]

        with self.assertRaises(DataProcessingError) as cm:
            failing_function()

        self.assertIsInstance(cm.exception.__cause__, KeyError)

    @patch("src.utils.error_utils.logging")
    def test_handle_exception_prefers_exact_type(self, mock_logging):
        mapping = {Exception: ConfigError, ValueError: DataValidationError}

        @handle_exception(custom_mapping=mapping)
        def failing_function():
            raise ValueError("bad cutoff")

        with self.assertRaises(DataValidationError):
            failing_function()

    @patch("src.utils.error_utils.logging")
    def test_handle_exception_reraises_app_errors(self, mock_logging):
        @handle_exception(custom_mapping={Exception: DataProcessingError})
        def failing_function():
            raise DataValidationError("short grid")

        with self.assertRaises(DataValidationError):
            failing_function()
        mock_logging.error.assert_called_once_with("DataValidationError: short grid")

    def test_handle_exception_returns_value(self):
        @handle_exception
        def working_function(x):
            return x * 2

        self.assertEqual(working_function(21), 42)


if __name__ == "__main__":
    unittest.main()
