"""
ID Management utilities for matching diagram node IDs to BioPax records.
"""
import os
import re

LOCAL_BASE_URI = "http://pathwaycommons.org/pc2/"
IDENTIFIERS_BASE_URI = "http://identifiers.org/"
UNIFICATION_XREF_PREFIX = "UnificationXref_"
MAX_ID_SEGMENTS = 2

_URI_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*://')


def get_base_uri(base_uri=None):
    """
    Resolve the local base URI.

    Args:
        base_uri (str, optional): Explicit base URI, wins over the environment

    Returns:
        str: base URI, BIOPAX_BASE_URI from the environment, or LOCAL_BASE_URI
    """
    if base_uri:
        return base_uri
    return os.environ.get('BIOPAX_BASE_URI') or LOCAL_BASE_URI


def is_uri(raw_id):
    return bool(raw_id) and bool(_URI_PATTERN.match(raw_id))


def normalize_id(raw_id, base_uri=None):
    """
    Turn a bare local name into a full URI.

    Every component that compares identifiers goes through this function.

    Args:
        raw_id (str): Local name or URI
        base_uri (str, optional): Prefix for local names

    Returns:
        str: Full URI
    """
    if raw_id is None:
        return raw_id
    raw_id = str(raw_id).strip()
    if is_uri(raw_id):
        return raw_id
    return get_base_uri(base_uri) + raw_id


def strip_id_suffixes(node_id, max_segments=MAX_ID_SEGMENTS):
    """
    Drop the suffix segments appended to duplicate diagram nodes.

    Examples:
        Protein_1_2 -> Protein_1
        Protein_1 -> Protein_1
        9606 -> 9606

    Args:
        node_id (str): Raw diagram node ID
        max_segments (int): Underscore-delimited segments to keep

    Returns:
        str: ID cut after the max_segments-th segment
    """
    if '_' not in node_id:
        return node_id
    return '_'.join(node_id.split('_')[:max_segments])


# --- Candidate rules ---
# Each rule maps a raw node ID to one candidate ID. Order matters and is
# fixed by CANDIDATE_RULES.

def direct_form(node_id):
    """Local BioPax name: the node ID without its duplicate suffixes."""
    return strip_id_suffixes(node_id)


def unification_xref_form(node_id):
    """Cross-database identifier record built from the raw node ID."""
    return f"{UNIFICATION_XREF_PREFIX}{node_id}"


def external_identifier_form(node_id):
    """identifiers.org URI, e.g. uniprot_P12345_1 -> http://identifiers.org/uniprot/P12345"""
    return IDENTIFIERS_BASE_URI + strip_id_suffixes(node_id).replace('_', '/')


CANDIDATE_RULES = (
    ('direct', direct_form),
    ('unification_xref', unification_xref_form),
    ('external_identifier', external_identifier_form),
)


class IdentifierResolver:
    """
    Produces the ordered candidate BioPax IDs for a diagram node.

    The resolver does not check that a candidate is well formed; a bad
    candidate simply finds no record.
    """

    def __init__(self, rules=CANDIDATE_RULES):
        """
        Args:
            rules (sequence): (name, function) pairs, tried in order
        """
        self.rules = tuple(rules)

    def resolve(self, node_id):
        """
        Args:
            node_id (str): Raw diagram node ID

        Returns:
            list: Candidate IDs in the order they must be tried
        """
        return [candidate for _, candidate in self.resolve_named(node_id)]

    def resolve_named(self, node_id):
        """
        Same as resolve() but keeps the rule name next to each candidate.

        Returns:
            list: (rule_name, candidate_id) tuples
        """
        if node_id is None:
            return []
        node_id = str(node_id)
        return [(name, rule(node_id)) for name, rule in self.rules]
