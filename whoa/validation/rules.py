"""Comparison validation rules."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from numbers import Number
from typing import Any, Optional, Tuple


class ErrorCodes:
    NUMERIC_BETWEEN = 1
    NUMERIC_LESS_THAN = 2
    NUMERIC_MORE_THAN = 3
    STRING_LENGTH_BETWEEN = 4
    IS_NUMERIC = 5
    IS_STRING = 6


class Messages:
    NUMERIC_BETWEEN = "The value should be between {0} and {1}."
    NUMERIC_LESS_THAN = "The value should be less than {0}."
    NUMERIC_MORE_THAN = "The value should be more than {0}."
    STRING_LENGTH_BETWEEN = "The value should be between {0} and {1} characters."
    IS_NUMERIC = "The value should be a number."
    IS_STRING = "The value should be a string."


@dataclass
class RuleError:
    """Validation failure for a single value."""
    value: Any
    code: int
    message_template: str
    message_parameters: Tuple = field(default_factory=tuple)

    @property
    def message(self) -> str:
        return self.message_template.format(*self.message_parameters)


def is_numeric(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


class Rule(ABC):
    """Validation rule checking a single value."""

    def __init__(self, error_code: int, message_template: str, message_parameters: Tuple = ()):
        self.error_code = error_code
        self.message_template = message_template
        self.message_parameters = tuple(message_parameters)

    @abstractmethod
    def check(self, value) -> bool:
        pass

    def validate(self, value) -> Optional[RuleError]:
        """Return an error for an invalid value, None otherwise."""
        if self.check(value):
            return None

        return RuleError(value, self.error_code, self.message_template, self.message_parameters)


class BaseTwoValueComparison(Rule):
    def __init__(self, lower_value, upper_value, error_code: int, message_template: str):
        super().__init__(error_code, message_template, (lower_value, upper_value))
        self.lower_value = lower_value
        self.upper_value = upper_value


class BaseOneValueComparison(Rule):
    def __init__(self, value, error_code: int, message_template: str):
        super().__init__(error_code, message_template, (value,))
        self.value = value


class NumericBetween(BaseTwoValueComparison):
    def __init__(self, lower_value, upper_value):
        if not (is_numeric(lower_value) and is_numeric(upper_value)) or lower_value > upper_value:
            raise ValueError(f"Invalid bounds {lower_value!r} and {upper_value!r}")
        super().__init__(lower_value, upper_value, ErrorCodes.NUMERIC_BETWEEN, Messages.NUMERIC_BETWEEN)

    def check(self, value) -> bool:
        return is_numeric(value) and self.lower_value <= value <= self.upper_value


class NumericLessThan(BaseOneValueComparison):
    def __init__(self, value):
        if not is_numeric(value):
            raise ValueError(f"Invalid bound {value!r}")
        super().__init__(value, ErrorCodes.NUMERIC_LESS_THAN, Messages.NUMERIC_LESS_THAN)

    def check(self, value) -> bool:
        return is_numeric(value) and value < self.value


class NumericMoreThan(BaseOneValueComparison):
    def __init__(self, value):
        if not is_numeric(value):
            raise ValueError(f"Invalid bound {value!r}")
        super().__init__(value, ErrorCodes.NUMERIC_MORE_THAN, Messages.NUMERIC_MORE_THAN)

    def check(self, value) -> bool:
        return is_numeric(value) and value > self.value


class StringLengthBetween(BaseTwoValueComparison):
    def __init__(self, min_length: int, max_length: int = None):
        if min_length < 0 or (max_length is not None and max_length < min_length):
            raise ValueError(f"Invalid lengths {min_length!r} and {max_length!r}")
        super().__init__(min_length, max_length, ErrorCodes.STRING_LENGTH_BETWEEN, Messages.STRING_LENGTH_BETWEEN)

    def check(self, value) -> bool:
        if not isinstance(value, str):
            return False
        if len(value) < self.lower_value:
            return False
        return self.upper_value is None or len(value) <= self.upper_value


class IsNumeric(Rule):
    """Accepts numbers and strings holding an integer or a float."""

    def __init__(self):
        super().__init__(ErrorCodes.IS_NUMERIC, Messages.IS_NUMERIC)

    def check(self, value) -> bool:
        return to_number(value) is not None


def to_number(value):
    """Number from a number or a numeric string, None otherwise."""
    if is_numeric(value):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None
