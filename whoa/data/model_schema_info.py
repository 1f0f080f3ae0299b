"""Registry of model tables, attributes and relationships."""

from typing import Dict, List, Tuple, Type

from whoa.exceptions import ModelSchemaError
from .relationship_types import RelationshipTypes


class ModelSchemaInfo:
    """
    In-memory schema of all application models.

    Relationships are registered in pairs so that both sides can be navigated:
    a belongs-to on one class is a has-many on the reverse class, a
    belongs-to-many is a belongs-to-many on both classes. A relationship name
    can be registered only once per class.
    """

    def __init__(self):
        self._relationship_types: Dict[Type, Dict[str, RelationshipTypes]] = {}
        self._reversed_relationships: Dict[Type, Dict[str, Tuple[Type, str]]] = {}
        self._reversed_classes: Dict[Type, Dict[str, Type]] = {}
        self._foreign_keys: Dict[Type, Dict[str, str]] = {}
        self._belongs_to_many: Dict[Type, Dict[str, Tuple[str, str, str]]] = {}
        self._table_names: Dict[Type, str] = {}
        self._primary_keys: Dict[Type, str] = {}
        self._attribute_types: Dict[Type, Dict[str, str]] = {}
        self._attribute_lengths: Dict[Type, Dict[str, int]] = {}
        self._attributes: Dict[Type, List[str]] = {}
        self._raw_attributes: Dict[Type, List[str]] = {}
        self._virtual_attributes: Dict[Type, List[str]] = {}

    def get_data(self) -> list:
        return [
            self._foreign_keys,
            self._belongs_to_many,
            self._relationship_types,
            self._reversed_relationships,
            self._table_names,
            self._primary_keys,
            self._attribute_types,
            self._attribute_lengths,
            self._attributes,
            self._raw_attributes,
            self._reversed_classes,
            self._virtual_attributes,
        ]

    def set_data(self, data: list) -> "ModelSchemaInfo":
        (
            self._foreign_keys,
            self._belongs_to_many,
            self._relationship_types,
            self._reversed_relationships,
            self._table_names,
            self._primary_keys,
            self._attribute_types,
            self._attribute_lengths,
            self._attributes,
            self._raw_attributes,
            self._reversed_classes,
            self._virtual_attributes,
        ) = data

        return self

    def register_class(self, cls: Type, table_name: str, primary_key: str,
                       attribute_types: Dict[str, str], attribute_lengths: Dict[str, int],
                       raw_attributes: List[str] = None,
                       virtual_attributes: List[str] = None) -> "ModelSchemaInfo":
        if not cls:
            raise ValueError("cls")
        if not table_name:
            raise ValueError("table_name")
        if not primary_key:
            raise ValueError("primary_key")

        self._table_names[cls] = table_name
        self._primary_keys[cls] = primary_key
        self._attribute_types[cls] = dict(attribute_types)
        self._attribute_lengths[cls] = dict(attribute_lengths)
        self._attributes[cls] = list(attribute_types.keys())
        self._raw_attributes[cls] = list(raw_attributes or [])
        self._virtual_attributes[cls] = list(virtual_attributes or [])

        return self

    def has_class(self, cls: Type) -> bool:
        return cls in self._table_names

    def get_table(self, cls: Type) -> str:
        return self._table_names[self._known(cls)]

    def get_primary_key(self, cls: Type) -> str:
        return self._primary_keys[self._known(cls)]

    def get_attribute_types(self, cls: Type) -> Dict[str, str]:
        return self._attribute_types[self._known(cls)]

    def get_attribute_type(self, cls: Type, name: str) -> str:
        if not self.has_attribute_type(cls, name):
            raise KeyError(f"Type is not defined for attribute `{name}` in class `{cls.__name__}`.")
        return self._attribute_types[cls][name]

    def has_attribute_type(self, cls: Type, name: str) -> bool:
        return name in self._attribute_types[self._known(cls)]

    def get_attribute_lengths(self, cls: Type) -> Dict[str, int]:
        return self._attribute_lengths[self._known(cls)]

    def has_attribute_length(self, cls: Type, name: str) -> bool:
        return name in self._attribute_lengths[self._known(cls)]

    def get_attribute_length(self, cls: Type, name: str) -> int:
        if not self.has_attribute_length(cls, name):
            raise KeyError(f"Length not found for column `{name}` in class `{cls.__name__}`.")
        return self._attribute_lengths[cls][name]

    def get_attributes(self, cls: Type) -> List[str]:
        return self._attributes[self._known(cls)]

    def get_raw_attributes(self, cls: Type) -> List[str]:
        return self._raw_attributes[self._known(cls)]

    def get_virtual_attributes(self, cls: Type) -> List[str]:
        return self._virtual_attributes[self._known(cls)]

    def has_relationship(self, cls: Type, name: str) -> bool:
        return name in self._relationship_types.get(cls, {})

    def get_relationship_type(self, cls: Type, name: str) -> RelationshipTypes:
        if not self.has_relationship(cls, name):
            raise KeyError(f"Relationship `{name}` not found in class `{cls.__name__}`.")
        return self._relationship_types[cls][name]

    def get_reverse_relationship(self, cls: Type, name: str) -> Tuple[Type, str]:
        return self._reversed_relationships[cls][name]

    def get_reverse_primary_key(self, cls: Type, name: str) -> Tuple[str, str]:
        """Primary key and table of the class on the other side."""
        reverse_class = self.get_reverse_model_class(cls, name)

        return self.get_primary_key(reverse_class), self.get_table(reverse_class)

    def get_reverse_foreign_key(self, cls: Type, name: str) -> Tuple[str, str]:
        """Foreign key and table on the other side of a has-many relationship."""
        reverse_class, reverse_name = self.get_reverse_relationship(cls, name)

        return self.get_foreign_key(reverse_class, reverse_name), self.get_table(reverse_class)

    def get_reverse_model_class(self, cls: Type, name: str) -> Type:
        return self._reversed_classes[cls][name]

    def get_foreign_key(self, cls: Type, name: str) -> str:
        return self._foreign_keys[cls][name]

    def get_belongs_to_many_relationship(self, cls: Type, name: str) -> Tuple[str, str, str]:
        """Intermediate table, own foreign key and reverse foreign key."""
        return self._belongs_to_many[cls][name]

    def register_belongs_to_one_relationship(self, cls: Type, name: str, foreign_key: str,
                                             reverse_class: Type, reverse_name: str) -> "ModelSchemaInfo":
        self._register_relationship_type(RelationshipTypes.BELONGS_TO, cls, name)
        self._register_relationship_type(RelationshipTypes.HAS_MANY, reverse_class, reverse_name)

        self._register_reversed_relationship(cls, name, reverse_class, reverse_name)
        self._register_reversed_relationship(reverse_class, reverse_name, cls, name)

        self._foreign_keys.setdefault(cls, {})[name] = foreign_key

        return self

    def register_belongs_to_many_relationship(self, cls: Type, name: str, table: str,
                                              foreign_key: str, reverse_foreign_key: str,
                                              reverse_class: Type, reverse_name: str) -> "ModelSchemaInfo":
        self._register_relationship_type(RelationshipTypes.BELONGS_TO_MANY, cls, name)
        self._register_relationship_type(RelationshipTypes.BELONGS_TO_MANY, reverse_class, reverse_name)

        # must follow type registration which rejects duplicates
        self._register_reversed_relationship(cls, name, reverse_class, reverse_name)
        self._register_reversed_relationship(reverse_class, reverse_name, cls, name)

        self._belongs_to_many.setdefault(cls, {})[name] = (table, foreign_key, reverse_foreign_key)
        self._belongs_to_many.setdefault(reverse_class, {})[reverse_name] = (
            table, reverse_foreign_key, foreign_key
        )

        return self

    def set_table_names(self, table_names: Dict[Type, str]) -> "ModelSchemaInfo":
        self._table_names = table_names
        return self

    def _known(self, cls: Type) -> Type:
        if not self.has_class(cls):
            raise KeyError(f"Class `{getattr(cls, '__name__', cls)}` is not registered.")
        return cls

    def _register_relationship_type(self, relationship_type: RelationshipTypes, cls: Type, name: str):
        if not cls or not name:
            raise ValueError("Relationship class and name must not be empty.")

        relationships = self._relationship_types.setdefault(cls, {})
        if name in relationships:
            raise ModelSchemaError(
                f"Relationship `{name}` for class `{cls.__name__}` was already used."
            )

        relationships[name] = relationship_type

    def _register_reversed_relationship(self, cls: Type, name: str, reverse_class: Type, reverse_name: str):
        self._reversed_relationships.setdefault(cls, {})[name] = (reverse_class, reverse_name)
        self._reversed_classes.setdefault(cls, {})[name] = reverse_class
