"""Custom exceptions for the customer analysis application"""

from typing import Any, Dict, Optional


class AppError(Exception):
    """
    Base exception for all application errors

    Attributes:
        message: Human-readable error message
        code: Short error code for identification
    """

    code: str = "GENERAL_ERROR"
    message: str = "An application error occurred"

    def __init__(
        self,
        code: Optional[str] = None,
        message: Optional[str] = None,
        **kwargs: Any
    ):
        self.code = code or self.code
        self.message = message or self.message
        self.extra = kwargs
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for response"""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                **self.extra,
            }
        }

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

class InvalidInputError(AppError):
    """Raised when input data is invalid (out-of-range score, unknown label, etc.)"""
    code = "INVALID_INPUT"
    message = "The provided input is invalid or malformed"

class AnalysisFailedError(AppError):
    """Raised when classifier inference fails"""
    code = "ANALYSIS_FAILED"
    message = "The analysis process failed. Please try again later"

class ModelNotLoadedError(AppError):
    """Raised when the classifiers fail to load or were marked as failed earlier"""
    code = "MODEL_NOT_LOADED"
    message = "The AI model is not available or failed to initialize"

class StorageError(AppError):
    """Raised when a record cannot be written to storage"""
    code = "STORAGE_ERROR"
    message = "The record could not be saved"
