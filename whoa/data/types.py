"""Attribute type names and their SQLAlchemy column types."""

from sqlalchemy import BigInteger, Boolean, Date, DateTime, Float, Integer, JSON, String, Text


class Types:
    INTEGER = "integer"
    BIG_INTEGER = "bigint"
    STRING = "string"
    TEXT = "text"
    BOOLEAN = "boolean"
    FLOAT = "float"
    DATE = "date"
    DATETIME = "datetime"
    JSON = "json"


_COLUMN_TYPES = {
    Types.INTEGER: Integer,
    Types.BIG_INTEGER: BigInteger,
    Types.STRING: String,
    Types.TEXT: Text,
    Types.BOOLEAN: Boolean,
    Types.FLOAT: Float,
    Types.DATE: Date,
    Types.DATETIME: DateTime,
    Types.JSON: JSON,
}


def column_type(type_name: str, length: int = None):
    """SQLAlchemy type instance for an attribute type name."""
    try:
        type_class = _COLUMN_TYPES[type_name]
    except KeyError:
        raise ValueError(f"Unknown attribute type `{type_name}`") from None

    if type_class is String:
        return String(length or 255)
    return type_class()
