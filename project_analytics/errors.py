# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Error handling for the project analytics engine.

The statistical code never raises for degenerate numeric input; these
exceptions cover a malformed snapshot and a broken threshold configuration.
"""

import traceback
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Error codes for different types of errors"""
    INVALID_INPUT = "INPUT_001"
    CONFIGURATION_ERROR = "CONFIG_001"
    UNKNOWN_ERROR = "UNKNOWN_001"


class AnalyticsError(Exception):
    """Base exception for the analytics engine"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary"""
        return {
            'error_code': self.error_code.value,
            'message': self.message,
            'details': self.details
        }


class InvalidInputError(AnalyticsError):
    """Missing or malformed project snapshot"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.INVALID_INPUT, details)


class ConfigurationError(AnalyticsError):
    """Unreadable or invalid threshold configuration"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


def error_handler(error: Exception) -> Dict[str, Any]:
    """
    Convert an exception to the standardized error payload.

    Args:
        error: Exception to handle

    Returns:
        Dictionary with error information
    """
    if isinstance(error, AnalyticsError):
        return {
            'error': True,
            'error_code': error.error_code.value,
            'message': error.message,
            'details': error.details,
            'type': error.__class__.__name__
        }
    return {
        'error': True,
        'error_code': ErrorCode.UNKNOWN_ERROR.value,
        'message': str(error),
        'details': {
            'traceback': traceback.format_exc()
        },
        'type': error.__class__.__name__
    }
