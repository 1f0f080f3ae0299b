"""Base class for data models described by class-level metadata."""

from typing import Dict, List, Optional


class Model:
    """
    Model metadata holder.

    Subclasses set ``TABLE_NAME`` and ``FIELD_ID`` and describe their columns
    and relationships. Relationships are returned keyed by
    :class:`~whoa.data.relationship_types.RelationshipTypes`:

    * ``BELONGS_TO`` / ``HAS_MANY``: ``{name: (reverse_class, foreign_key, reverse_name)}``
    * ``BELONGS_TO_MANY``: ``{name: (reverse_class, intermediate_table,
      foreign_key, reverse_foreign_key, reverse_name)}``
    """

    TABLE_NAME: Optional[str] = None
    FIELD_ID: Optional[str] = None

    FIELD_CREATED_AT = "created_at"
    FIELD_UPDATED_AT = "updated_at"
    FIELD_DELETED_AT = "deleted_at"

    @classmethod
    def get_table_name(cls) -> str:
        return cls.TABLE_NAME

    @classmethod
    def get_primary_key_name(cls) -> str:
        return cls.FIELD_ID

    @classmethod
    def get_attribute_types(cls) -> Dict[str, str]:
        return {}

    @classmethod
    def get_attribute_lengths(cls) -> Dict[str, int]:
        return {}

    @classmethod
    def get_relationships(cls) -> Dict[int, Dict[str, tuple]]:
        return {}

    @classmethod
    def get_raw_attributes(cls) -> List[str]:
        return []

    @classmethod
    def get_virtual_attributes(cls) -> List[str]:
        return []

    @classmethod
    def is_model(cls) -> bool:
        """Abstract intermediate classes have no table."""
        return bool(cls.TABLE_NAME) and bool(cls.FIELD_ID)
