"""Validation rules."""

from .rules import (
    ErrorCodes,
    Messages,
    RuleError,
    Rule,
    NumericBetween,
    NumericLessThan,
    NumericMoreThan,
    StringLengthBetween,
    IsNumeric,
    to_number,
)

__all__ = [
    "ErrorCodes",
    "Messages",
    "RuleError",
    "Rule",
    "NumericBetween",
    "NumericLessThan",
    "NumericMoreThan",
    "StringLengthBetween",
    "IsNumeric",
    "to_number",
]
