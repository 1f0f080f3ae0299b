"""Relationship kinds between models."""

import enum


class RelationshipTypes(enum.IntEnum):
    BELONGS_TO = 0
    HAS_MANY = 1
    BELONGS_TO_MANY = 2
