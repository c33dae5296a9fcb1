"""Quality checks for generated emission zone data"""
from .data_validator import DataValidator, ValidationResult

__all__ = ["DataValidator", "ValidationResult"]
