"""
Field Extractor Module

Pulls the fixed set of descriptive fields out of a matched BioPax record.
Fields with no value are left out of the result entirely.
"""

from typing import List, Optional, Tuple

from pathway_metadata.build_functions.graph_index import BioPaxIndex
from pathway_metadata.data_structure.metadata_structure import (
    BioPaxRecord, MetadataField, DATA_SOURCE, DISPLAY_NAME, COMMENT, NAMES,
    STANDARD_NAME, CELLULAR_LOCATION, DATABASES, DATABASE_IDS
)
from pathway_metadata.utils.id_manager import normalize_id
from pathway_metadata.utils.property_parser import collect_values, format_value, is_empty


def extract(record: BioPaxRecord, index: BioPaxIndex) -> List[MetadataField]:
    """
    Build the ordered field list for one record.

    Args:
        record: Matched BioPax record
        index: Index the record came from, used for one-hop references

    Returns:
        list: MetadataField(label, value) pairs in fixed order
    """
    result = []
    entity_references = index.references(record, 'entityReference')

    _append(result, DATA_SOURCE, collect_values([record], 'dataSource'))
    _append(result, DISPLAY_NAME, collect_values(entity_references, 'displayName'))
    _append(result, COMMENT, collect_values([record], 'comment'))
    _append(result, NAMES, collect_values([record], 'name'))
    _append(result, STANDARD_NAME, collect_values([record], 'standardName'))
    _append(result, CELLULAR_LOCATION, get_cellular_location(record, index))

    # Entity-reference xrefs first, then the record's own xrefs
    pairs = []
    for entity_reference in entity_references:
        pairs.extend(get_xref_pairs(entity_reference, index))
    pairs.extend(get_xref_pairs(record, index))

    if pairs:
        result.append(MetadataField(DATABASES, [db for db, _ in pairs]))
        result.append(MetadataField(DATABASE_IDS, [db_id for _, db_id in pairs]))

    return result


def _append(result, label, value):
    if not is_empty(value):
        result.append(MetadataField(label, value))


def get_cellular_location(record: BioPaxRecord, index: BioPaxIndex) -> list:
    """
    Cellular location terms of a record.

    A location naming a record, by URI or by local name, is followed one hop
    and its controlled vocabulary 'term' is read. Any other location is kept
    as written.
    """
    terms = []
    for value in record.get_values('cellularLocation'):
        if isinstance(value, BioPaxRecord):
            terms.extend(collect_values([value], 'term'))
            continue
        matches = index.find(normalize_id(value, index.base_uri)) if isinstance(value, str) else []
        if matches:
            terms.extend(collect_values(matches[:1], 'term'))
        else:
            value = format_value(value)
            if value is not None:
                terms.append(value)
    return terms


def get_xref_pairs(record: BioPaxRecord, index: BioPaxIndex) -> List[Tuple[Optional[str], Optional[str]]]:
    """
    (database name, database id) for every xref of a record.

    One pair per xref record keeps the two output lists aligned; a missing
    half is None. Xrefs with neither are skipped.
    """
    pairs = []
    for xref in index.references(record, 'xref'):
        db = _first(collect_values([xref], 'db'))
        db_id = _first(collect_values([xref], 'id'))
        if db is None and db_id is None:
            continue
        pairs.append((db, db_id))
    return pairs


def _first(values):
    return values[0] if values else None
