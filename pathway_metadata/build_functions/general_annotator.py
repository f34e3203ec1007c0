"""
Annotate Pathways Module

Runs the metadata mapper over one or many (BioPax, diagram) file pairs,
writing one enhanced Cytoscape JSON file per pathway into a timestamped
output directory.
"""

import os
import re
from datetime import datetime
from pathlib import Path

from pathway_metadata.build_functions.graph_index import load
from pathway_metadata.build_functions.metadata_mapper import MetadataMapper
from pathway_metadata.build_functions.pathway_level_metadata import get_pathway_level_metadata
from pathway_metadata.object2cytoscape.cytoscape_writer import CytoscapeWriter
from pathway_metadata.parsing_functions import parsing_utils

PARSE_TYPE = 'jsonld'
BIOPAX_SUFFIX = '.jsonld'
DIAGRAM_SUFFIX = '.json'


def create_output_directory(output_base_dir):
    """
    Create a timestamped output directory.

    Returns:
        str: path of the created directory
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    output_dir = os.path.join(output_base_dir, f"annotated_pathways_{timestamp}")
    os.makedirs(output_dir, exist_ok=True)
    return output_dir


def find_pathway_pairs(input_dir):
    """
    Pair every BioPax file in a directory with its diagram graph.

    'R-HSA-123.jsonld' pairs with 'R-HSA-123.json'. BioPax files without a
    diagram are skipped.

    Returns:
        list: dicts with 'pathway_id', 'biopax_file' and 'diagram_file'
    """
    pairs = []
    for biopax_file in sorted(Path(input_dir).glob(f"*{BIOPAX_SUFFIX}")):
        pathway_id = biopax_file.name[:-len(BIOPAX_SUFFIX)]
        diagram_file = biopax_file.with_name(pathway_id + DIAGRAM_SUFFIX)
        if not diagram_file.is_file():
            print(f"  Warning: no diagram graph for {biopax_file.name}, skipping")
            continue
        pairs.append({
            'pathway_id': pathway_id,
            'biopax_file': str(biopax_file),
            'diagram_file': str(diagram_file),
        })
    return pairs


def annotate_pathway(biopax_text, diagram_graph, pathway_uri=None, base_uri=None, workers=None, verbose=False):
    """
    Annotate one diagram graph and attach the pathway-level metadata.

    Args:
        biopax_text (str): BioPax JSON-LD document
        diagram_graph (DiagramGraph): Converted SBGN graph
        pathway_uri (str, optional): URI of the pathway record
        base_uri (str, optional): Prefix for bare local names
        workers (int, optional): Thread pool size for node resolution
        verbose (bool): Print index and annotation summaries

    Returns:
        tuple: (annotated DiagramGraph, AnnotationReport)
    """
    index = load(biopax_text, base_uri=base_uri, verbose=verbose)
    mapper = MetadataMapper(index, verbose=verbose)
    annotated = mapper.annotate_graph(diagram_graph, workers=workers)
    annotated.pathway_metadata = get_pathway_level_metadata(index, pathway_uri)
    annotated.parse_type = PARSE_TYPE
    return annotated, mapper.last_report


def annotate_pathways(pathway_pairs, output_dir, base_uri=None, workers=None, verbose=False):
    """
    Annotate every pathway pair and write the results.

    A pathway that fails to load is recorded and the run moves on.

    Args:
        pathway_pairs (list): dicts from find_pathway_pairs(), optionally with 'pathway_uri'
        output_dir (str): Directory for the enhanced JSON files

    Returns:
        tuple: (annotated_pathways list, failed_pathways list)
    """
    writer = CytoscapeWriter()
    annotated_pathways = []
    failed_pathways = []

    for pair in pathway_pairs:
        pathway_id = pair['pathway_id']

        try:
            biopax_text, diagram_graph = parsing_utils.read_input_files(
                pair['biopax_file'], pair['diagram_file'], verbose=verbose
            )
            annotated, report = annotate_pathway(
                biopax_text, diagram_graph,
                pathway_uri=pair.get('pathway_uri'),
                base_uri=base_uri,
                workers=workers,
                verbose=verbose,
            )

            safe_pathway_id = re.sub(r'[^a-zA-Z0-9_-]', '_', pathway_id)
            output_filename = f"{safe_pathway_id}.json"
            output_filepath = os.path.join(output_dir, output_filename)
            writer.write(annotated, output_filepath)

            annotated_pathways.append({
                'pathway_id': pathway_id,
                'filename': output_filename,
                'filepath': output_filepath,
                'nodes': report.total,
                'annotated_nodes': report.annotated,
            })

        except (ValueError, OSError) as e:
            failed_pathways.append({'pathway_id': pathway_id, 'error': str(e)})

    return annotated_pathways, failed_pathways
