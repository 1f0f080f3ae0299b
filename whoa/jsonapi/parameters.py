"""JSON:API query parameter types."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union


@dataclass
class FieldParameter:
    """Sparse fieldset for a resource type (``fields[type]=a,b``)."""
    type: str
    fields: Union[str, Sequence[str]]


@dataclass
class FilterParameter:
    """Filter on a field (``filter[field][operation]=v1,v2``)."""
    field: str
    operation: str
    parameters: Optional[Union[str, Sequence[str]]] = None


@dataclass
class SortParameter:
    """Sort on a field (``sort=-field``)."""
    field: str
    is_ascending: bool = True


@dataclass
class ParsedQuery:
    """Result of parsing JSON:API query parameters."""
    fields: Dict[str, List[str]] = field(default_factory=dict)
    filters: List[FilterParameter] = field(default_factory=list)
    sorts: List[SortParameter] = field(default_factory=list)
    includes: List[str] = field(default_factory=list)
    offset: int = 0
    limit: int = 0
