"""Error classification and reporting for the command line tool."""

import logging
import time
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .exhaustive import SequenceTooLongError
from .matcher import EmptyCollectionError


class ErrorType(Enum):
    """Types of errors that can occur."""
    EMPTY_COLLECTION = "empty_collection"
    INPUT_TOO_LONG = "input_too_long"
    FILE_IO_ERROR = "file_io_error"
    PARSE_ERROR = "parse_error"
    CONFIG_ERROR = "config_error"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context information for an error."""
    error_type: ErrorType
    severity: ErrorSeverity
    message: str
    timestamp: float
    operation: str
    item_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    exception: Optional[Exception] = None
    traceback: Optional[str] = None
    suggestion: Optional[str] = None


class ErrorHandler:
    """Classifies errors, logs them and keeps a history for the run summary."""

    SUGGESTIONS = {
        ErrorType.EMPTY_COLLECTION: "The input file contains no records. Check that each '>' description line is followed by a sequence line.",
        ErrorType.INPUT_TOO_LONG: "Exhaustive search is exponential in sequence length. Use the dp engine or raise --max-exhaustive-length.",
        ErrorType.FILE_IO_ERROR: "Check that the file exists and is readable.",
        ErrorType.PARSE_ERROR: "Check the input file format (FASTA, CSV/TSV, JSON or Excel).",
        ErrorType.CONFIG_ERROR: "Check the configuration file and environment variables.",
        ErrorType.UNKNOWN: None,
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize error handler.

        Args:
            logger: Logger to report through (defaults to the error logger)
        """
        self.logger = logger or logging.getLogger('protein_match.error')
        self.error_history: List[ErrorContext] = []

    def handle_error(self,
                     error: Exception,
                     operation: str,
                     item_id: Optional[str] = None,
                     **kwargs) -> ErrorContext:
        """
        Handle an error with appropriate logging.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            item_id: Optional item identifier
            **kwargs: Additional context data

        Returns:
            ErrorContext with error details and suggestions
        """
        error_type = self._classify_error(error)
        severity = self._determine_severity(error_type)

        context = ErrorContext(
            error_type=error_type,
            severity=severity,
            message=str(error),
            timestamp=time.time(),
            operation=operation,
            item_id=item_id,
            details=kwargs or None,
            exception=error,
            traceback=traceback.format_exc() if severity == ErrorSeverity.CRITICAL else None,
            suggestion=self.SUGGESTIONS.get(error_type)
        )

        self._log_error(context)
        self.error_history.append(context)

        return context

    def _classify_error(self, error: Exception) -> ErrorType:
        """Classify the error type based on exception."""
        if isinstance(error, EmptyCollectionError):
            return ErrorType.EMPTY_COLLECTION

        if isinstance(error, SequenceTooLongError):
            return ErrorType.INPUT_TOO_LONG

        if isinstance(error, (FileNotFoundError, PermissionError, IsADirectoryError)):
            return ErrorType.FILE_IO_ERROR

        if isinstance(error, (UnicodeDecodeError, KeyError)):
            return ErrorType.PARSE_ERROR

        error_str = str(error).lower()

        if any(term in error_str for term in ['json', 'column', 'header', 'record', 'parse']):
            return ErrorType.PARSE_ERROR

        if any(term in error_str for term in ['config', 'unknown engine']):
            return ErrorType.CONFIG_ERROR

        if isinstance(error, OSError):
            return ErrorType.FILE_IO_ERROR

        return ErrorType.UNKNOWN

    def _determine_severity(self, error_type: ErrorType) -> ErrorSeverity:
        """Determine error severity based on type."""
        if error_type == ErrorType.UNKNOWN:
            return ErrorSeverity.CRITICAL

        return ErrorSeverity.ERROR

    def _log_error(self, context: ErrorContext):
        """Log error with appropriate level and details."""
        log_message = f"{context.operation} - {context.error_type.value}: {context.message}"

        if context.item_id:
            log_message += f" (item: {context.item_id})"

        if context.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(log_message)
            if context.traceback:
                self.logger.critical(f"Traceback:\n{context.traceback}")
        else:
            self.logger.error(log_message)

        if context.suggestion:
            self.logger.info(f"Suggestion: {context.suggestion}")

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of errors handled so far."""
        by_type: Dict[str, int] = {}
        for context in self.error_history:
            by_type[context.error_type.value] = by_type.get(context.error_type.value, 0) + 1

        return {
            'total_errors': len(self.error_history),
            'by_type': by_type,
            'last_error': self.error_history[-1].message if self.error_history else None
        }
