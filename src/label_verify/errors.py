"""
Label Verify Exceptions
=======================

Exception hierarchy for the outer surfaces of the package (configuration,
product-file loading, CLI). The matching engine itself never raises for
well-typed input.
"""

from typing import Any, Dict, Optional


class LabelVerifyError(Exception):
    """
    Base exception for label verification errors.
    
    Provides structured error information with error codes for programmatic handling.
    """
    
    def __init__(self, message: str, error_code: str = "LABEL_VERIFY_ERROR", context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self.message)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(LabelVerifyError):
    """Raised when the verifier is misconfigured."""
    
    def __init__(self, message: str, config_key: Optional[str] = None, expected: Optional[str] = None):
        super().__init__(
            message=f"Configuration error: {message}",
            error_code="CONFIG_ERROR",
            context={"config_key": config_key, "expected": expected}
        )
        self.config_key = config_key
        self.expected = expected


class CatalogLoadError(LabelVerifyError):
    """Raised when a product file cannot be read or parsed."""
    
    def __init__(self, file_path: str, reason: str = "Unknown error"):
        super().__init__(
            message=f"Failed to load products: {file_path}. Reason: {reason}",
            error_code="CATALOG_LOAD_ERROR",
            context={"file_path": file_path, "reason": reason}
        )
        self.file_path = file_path
        self.reason = reason
