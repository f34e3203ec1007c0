"""
BioPax Graph Index Module

Loads a BioPax JSON-LD document once and indexes every record, at any
nesting depth, by its normalized URI. Records and the references between
them are kept in a networkx MultiDiGraph so one-hop traversals and lookups are
dictionary accesses instead of whole-document searches.
"""

import json
from typing import Any, Dict, List, Optional, Union

import networkx as nx

from pathway_metadata.data_structure.metadata_structure import BioPaxRecord, MalformedDocumentError
from pathway_metadata.utils.id_manager import get_base_uri, is_uri, normalize_id

RAW_ID_KEY = '@id'
RAW_TYPE_KEY = '@type'
GRAPH_KEY = '@graph'

# Fields whose plain string values are always references to other records
REFERENCE_FIELDS = {
    'entityReference',
    'xref',
    'cellularLocation',
    'dataSource',
    'organism',
    'memberPhysicalEntity',
    'component',
    'participant',
    'left',
    'right',
    'controller',
    'controlled',
    'pathwayComponent',
}


class BioPaxIndex:
    """
    Read-only index over the records of one BioPax document.

    Graph nodes are normalized record IDs; the 'records' node attribute holds
    every record carrying that ID in document order. Edges point from a
    record to the records it references and carry the referencing field name.
    """

    def __init__(self, base_uri: Optional[str] = None, verbose: bool = False):
        self.base_uri = get_base_uri(base_uri)
        self.verbose = verbose
        self.graph = nx.MultiDiGraph()
        self.top_level: List[BioPaxRecord] = []
        self._record_count = 0

    # --- Loading ---

    def load_document(self, document: Union[str, bytes]) -> 'BioPaxIndex':
        """
        Parse a JSON-LD document and index all of its records.

        Args:
            document: BioPax JSON-LD text

        Returns:
            BioPaxIndex: self, for chaining

        Raises:
            MalformedDocumentError: if the text is not a JSON object with a @graph list
        """
        try:
            data = json.loads(document)
        except (TypeError, ValueError) as e:
            raise MalformedDocumentError(f"BioPax document is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedDocumentError("BioPax document must be a JSON object")

        graph_items = data.get(GRAPH_KEY)
        if not isinstance(graph_items, list):
            raise MalformedDocumentError(f"BioPax document has no '{GRAPH_KEY}' list")

        for position, item in enumerate(graph_items):
            if not isinstance(item, dict):
                raise MalformedDocumentError(
                    f"'{GRAPH_KEY}' entry {position} is a {type(item).__name__}, expected an object"
                )
            record = self._convert(item, top_level=True)
            if isinstance(record, BioPaxRecord):
                self.top_level.append(record)

        self._link_references()

        if self.verbose:
            stats = self.summary()
            print(f"Indexed {stats['records']} BioPax records "
                  f"({stats['unique_ids']} unique IDs, {stats['references']} references, "
                  f"{stats['dangling_references']} dangling)")
        return self

    def _convert(self, item: Dict[str, Any], top_level: bool = False) -> Any:
        """
        Convert one JSON object into a record, a reference or a value.

        Objects with @id and other fields become records and are indexed.
        Objects with only @id (or, when nested, only @id and @type) are
        references and become their normalized URI.
        Objects without @id (value objects, @list/@set wrappers) keep their
        shape, but records nested inside them are still indexed.
        """
        if RAW_ID_KEY not in item:
            return {name: self._convert_value(value) for name, value in item.items()}

        raw_id = item[RAW_ID_KEY]
        if not isinstance(raw_id, str) or not raw_id.strip():
            raise MalformedDocumentError(f"Record @id must be a non-empty string, got {raw_id!r}")
        pathid = normalize_id(raw_id, self.base_uri)
        body = {k: v for k, v in item.items() if k != RAW_ID_KEY}
        if not body or (not top_level and set(body) <= {RAW_TYPE_KEY}):
            return pathid

        record_type = body.pop(RAW_TYPE_KEY, [])
        if not isinstance(record_type, list):
            record_type = [record_type]

        record = BioPaxRecord(pathid=pathid, record_type=record_type)
        # Index before descending so document order is pre-order
        self._add_record(record)
        record.fields = {name: self._convert_value(value) for name, value in body.items()}
        return record

    def _convert_value(self, value: Any) -> Any:
        if isinstance(value, list):
            return [self._convert_value(v) for v in value]
        if isinstance(value, dict):
            return self._convert(value)
        return value

    def _add_record(self, record: BioPaxRecord):
        if record.pathid not in self.graph:
            self.graph.add_node(record.pathid, records=[])
        self.graph.nodes[record.pathid].setdefault('records', []).append(record)
        self._record_count += 1

    def _link_references(self):
        """Add an edge for every field value that points at another record."""
        for source_id, node_data in list(self.graph.nodes(data=True)):
            for record in node_data.get('records', []):
                for name in record.fields:
                    for value in record.get_values(name):
                        target_id = self._reference_target(name, value)
                        if target_id is not None:
                            self.graph.add_edge(source_id, target_id, field=name)

    def _reference_target(self, name: str, value: Any) -> Optional[str]:
        if isinstance(value, BioPaxRecord):
            return value.pathid
        if not isinstance(value, str):
            return None
        if name in REFERENCE_FIELDS:
            return normalize_id(value, self.base_uri)
        # URIs in free-text fields only count when they name a known record
        if is_uri(value) and self.find(value):
            return value
        return None

    # --- Queries ---

    def find(self, pathid: str) -> List[BioPaxRecord]:
        """
        Return every record whose normalized ID equals pathid.

        Args:
            pathid: Already-normalized record URI

        Returns:
            list: Matching records in document order, empty if none
        """
        if pathid not in self.graph:
            return []
        return list(self.graph.nodes[pathid].get('records', []))

    def references(self, record: BioPaxRecord, field_name: str) -> List[BioPaxRecord]:
        """
        Follow a reference-typed field one hop.

        Nested records are returned as they are; reference strings are
        normalized and resolved to the first matching record. References
        that resolve to nothing are skipped.
        """
        targets = []
        for value in record.get_values(field_name):
            if isinstance(value, BioPaxRecord):
                targets.append(value)
            elif isinstance(value, str):
                matches = self.find(normalize_id(value, self.base_uri))
                if matches:
                    targets.append(matches[0])
        return targets

    def records_of_type(self, type_name: str) -> List[BioPaxRecord]:
        """Top-level records with the given @type, in document order."""
        return [record for record in self.top_level if record.is_type(type_name)]

    def dangling_references(self) -> List[str]:
        """Referenced IDs that no record in the document carries."""
        return sorted(node for node, data in self.graph.nodes(data=True) if not data.get('records'))

    def summary(self) -> Dict[str, int]:
        dangling = self.dangling_references()
        return {
            'records': self._record_count,
            'unique_ids': self.graph.number_of_nodes() - len(dangling),
            'references': self.graph.number_of_edges(),
            'dangling_references': len(dangling),
        }


def load(document: Union[str, bytes], base_uri: Optional[str] = None, verbose: bool = False) -> BioPaxIndex:
    """Build a BioPaxIndex from a JSON-LD document string."""
    return BioPaxIndex(base_uri=base_uri, verbose=verbose).load_document(document)


def lookup(candidate_id: str, index: BioPaxIndex) -> Optional[BioPaxRecord]:
    """
    Find the record named by a candidate ID.

    Args:
        candidate_id: Local name or URI
        index: Loaded BioPax index

    Returns:
        BioPaxRecord: first match in document order, or None
    """
    if not candidate_id:
        return None
    matches = index.find(normalize_id(candidate_id, index.base_uri))
    return matches[0] if matches else None
