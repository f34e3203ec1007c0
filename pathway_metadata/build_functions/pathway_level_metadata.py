from pathway_metadata.build_functions.graph_index import lookup
from pathway_metadata.data_structure.metadata_structure import PathwayMetadata
from pathway_metadata.utils.property_parser import collect_values


def find_pathway_record(index, pathway_uri=None):
    """
    Find the pathway record a document describes.

    Args:
        index (BioPaxIndex): Loaded BioPax index
        pathway_uri (str, optional): Pathway URI or local name. If omitted,
            the first top-level Pathway record is used.

    Returns:
        BioPaxRecord: the pathway record, or None
    """
    if pathway_uri:
        return lookup(pathway_uri, index)

    pathways = index.records_of_type('Pathway')
    return pathways[0] if pathways else None


def get_pathway_level_metadata(index, pathway_uri=None):
    """
    Title, data source, comments and organism of a pathway.

    Data source and organism are references; their display names are read
    one hop away.

    Returns:
        PathwayMetadata: metadata, or None if the pathway record is missing
    """
    pathway = find_pathway_record(index, pathway_uri)
    if pathway is None:
        return None

    return PathwayMetadata(
        title=collect_values([pathway], 'displayName'),
        data_source=collect_values(index.references(pathway, 'dataSource'), 'displayName'),
        comments=collect_values([pathway], 'comment'),
        organism=collect_values(index.references(pathway, 'organism'), 'displayName'),
    )
