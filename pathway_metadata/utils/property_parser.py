"""
Property Helpers for BioPax Records
===================================

Small helpers shared by the field extractor and the pathway-level lookup
for turning record field values into plain output values.
"""

from pathway_metadata.data_structure.metadata_structure import BioPaxRecord


def format_value(value):
    """
    Format one field value for output.

    Nested records are written as their URI, strings are stripped and
    everything else (numbers, booleans) is kept as-is.

    Args:
        value: Field value

    Returns:
        Formatted value, or None if it is empty
    """
    if isinstance(value, BioPaxRecord):
        return value.pathid
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value if value else None
    return value


def format_values(values):
    """Format a list of values, dropping the empty ones."""
    formatted = []
    for value in values:
        value = format_value(value)
        if value is not None:
            formatted.append(value)
    return formatted


def collect_values(records, field_name):
    """
    Collect one field over several records, in record order.

    Args:
        records (list): BioPaxRecord objects
        field_name (str): JSON-LD field name, e.g. 'displayName'

    Returns:
        list: formatted values of that field across all records
    """
    values = []
    for record in records:
        values.extend(format_values(record.get_values(field_name)))
    return values


def is_empty(value):
    """True for None, empty strings and empty lists."""
    if value is None:
        return True
    if isinstance(value, (list, tuple, str)):
        return len(value) == 0
    return False
