from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional


# --- Errors ---

class MalformedDocumentError(ValueError):
    """The BioPax text does not parse into a JSON-LD document with a @graph list."""


class MalformedDiagramError(ValueError):
    """The diagram JSON does not look like a converted Cytoscape graph."""


# --- Field labels, in extraction order ---

DATA_SOURCE = "Data Source"
DISPLAY_NAME = "Display Name"
COMMENT = "Comment"
NAMES = "Names"
STANDARD_NAME = "Standard Name"
CELLULAR_LOCATION = "Cellular Location"
DATABASES = "Databases"
DATABASE_IDS = "Database IDs"

FIELD_ORDER = (
    DATA_SOURCE,
    DISPLAY_NAME,
    COMMENT,
    NAMES,
    STANDARD_NAME,
    CELLULAR_LOCATION,
    DATABASES,
    DATABASE_IDS,
)


class MetadataField(NamedTuple):
    label: str
    value: Any


# --- BioPax side ---

def _flatten_containers(raw: Any) -> List[Any]:
    if raw is None:
        return []
    if isinstance(raw, dict):
        for key in ('@list', '@set'):
            if key in raw:
                return _flatten_containers(raw[key])
        return [raw]
    if isinstance(raw, list):
        items = []
        for item in raw:
            items.extend(_flatten_containers(item))
        return items
    return [raw]


@dataclass
class BioPaxRecord:
    """One addressable element of a BioPax JSON-LD document."""
    pathid: str  # normalized '@id', renamed since '@id' is reserved in path queries
    record_type: List[str] = field(default_factory=list)
    fields: Dict[str, Any] = field(default_factory=dict)

    def get_values(self, name: str) -> List[Any]:
        """
        Return the values of a field as a list.

        Scalars become one-element lists, @list and @set containers are
        flattened and JSON-LD value objects ({"@value": ...}) are unwrapped.
        Nested records are kept as records.
        """
        values = []
        for item in _flatten_containers(self.fields.get(name)):
            if isinstance(item, dict) and '@value' in item:
                item = item['@value']
            if item is None or item == '':
                continue
            values.append(item)
        return values

    def is_type(self, type_name: str) -> bool:
        return type_name in self.record_type


# --- Diagram side ---

@dataclass
class DiagramNode:
    id: str
    data: Dict[str, Any] = field(default_factory=dict)
    position: Optional[Dict[str, Any]] = None
    metadata: Optional[List[MetadataField]] = None


@dataclass
class PathwayMetadata:
    title: List[Any] = field(default_factory=list)
    data_source: List[Any] = field(default_factory=list)
    comments: List[Any] = field(default_factory=list)
    organism: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'comments': self.comments,
            'dataSource': self.data_source,
            'title': self.title,
            'organism': self.organism,
        }


@dataclass
class DiagramGraph:
    """A converted SBGN diagram: ordered nodes plus untouched edges."""
    nodes: List[DiagramNode] = field(default_factory=list)
    edges: List[Dict[str, Any]] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)
    pathway_metadata: Optional[PathwayMetadata] = None
    parse_type: Optional[str] = None
    # 'flat' (top-level nodes/edges) or 'elements' (Cytoscape elements wrapper)
    layout: str = 'flat'

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]


@dataclass
class AnnotationReport:
    total: int = 0
    annotated: int = 0
    unresolved: int = 0
    matched_by_rule: Counter = field(default_factory=Counter)

    def record_match(self, rule_name: Optional[str]):
        self.total += 1
        if rule_name is None:
            self.unresolved += 1
        else:
            self.annotated += 1
            self.matched_by_rule[rule_name] += 1
