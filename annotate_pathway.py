#!/usr/bin/env python3
"""
BioPax Metadata Mapper for SBGN Diagram Graphs
==============================================

Attaches BioPax metadata to the nodes of converted SBGN (Cytoscape JSON)
diagram graphs.

Usage:
    python annotate_pathway.py <output_dir> --biopax <file.jsonld> --diagram <file.json> [options]
    python annotate_pathway.py <output_dir> --input-dir <dir> [options]

Arguments:
    output_dir           : Directory where the enhanced JSON files will be saved

Options:
    --biopax FILE        : BioPax JSON-LD document of one pathway
    --diagram FILE       : Cytoscape JSON converted from the pathway's SBGN
    --pathway-uri URI    : Pathway record to read title/organism from (default: first Pathway)
    --input-dir DIR      : Annotate every <name>.jsonld / <name>.json pair in DIR
    --base-uri URI       : Prefix for bare local IDs (default: $BIOPAX_BASE_URI or Pathway Commons)
    --workers N          : Resolve nodes with a pool of N threads
    --validate           : Validate the written files afterwards

Examples:
    python annotate_pathway.py ./output --biopax R-HSA-6804754.jsonld --diagram R-HSA-6804754.json
    python annotate_pathway.py ./output --input-dir ./downloads --workers 4 --validate
"""

import argparse
import os
import sys
from pathlib import Path

from pathway_metadata.build_functions.general_annotator import (
    annotate_pathways, create_output_directory, find_pathway_pairs
)
from pathway_metadata.validate_annotated_files import print_summary, validate_directory


def build_parser():
    parser = argparse.ArgumentParser(description='Attach BioPax metadata to SBGN diagram graph nodes')
    parser.add_argument('output_dir', help='Directory where the enhanced JSON files will be saved')
    parser.add_argument('--biopax', default=None, help='BioPax JSON-LD document')
    parser.add_argument('--diagram', default=None, help='Cytoscape JSON diagram graph')
    parser.add_argument('--pathway-uri', default=None, help='URI of the pathway record')
    parser.add_argument('--input-dir', default=None, help='Directory of <name>.jsonld / <name>.json pairs')
    parser.add_argument('--base-uri', default=None, help='Prefix for bare local IDs')
    parser.add_argument('--workers', type=int, default=None, help='Thread pool size for node resolution')
    parser.add_argument('--validate', action='store_true', help='Validate the written files')
    return parser


def main(argv=None):
    """Main execution function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.input_dir:
        if not os.path.isdir(args.input_dir):
            print(f"Error: Input directory does not exist: {args.input_dir}")
            return 1
        pathway_pairs = find_pathway_pairs(args.input_dir)
    elif args.biopax and args.diagram:
        pathway_pairs = [{
            'pathway_id': Path(args.biopax).stem,
            'biopax_file': args.biopax,
            'diagram_file': args.diagram,
            'pathway_uri': args.pathway_uri,
        }]
    else:
        print(__doc__)
        print("\nError: Give either --biopax and --diagram, or --input-dir")
        return 1

    if args.workers is not None and args.workers < 1:
        print(f"Error: --workers must be at least 1, got {args.workers}")
        return 1

    output_dir = create_output_directory(args.output_dir)

    print("="*60)
    print("BioPax Metadata Mapper")
    print("="*60)
    print(f"Pathways: {len(pathway_pairs)}")
    print(f"Output directory: {output_dir}")
    print(f"Base URI: {args.base_uri if args.base_uri else 'default'}")
    print(f"Workers: {args.workers if args.workers else 1}")
    print("="*60 + "\n")

    annotated_pathways, failed_pathways = annotate_pathways(
        pathway_pairs, output_dir,
        base_uri=args.base_uri,
        workers=args.workers,
        verbose=True,
    )

    for pathway in annotated_pathways:
        print(f"✓ {pathway['pathway_id']}: {pathway['annotated_nodes']}/{pathway['nodes']} nodes annotated")
    for failure in failed_pathways:
        print(f"✗ {failure['pathway_id']}: {failure['error']}")

    print("\n" + "="*60)
    print("ANNOTATION COMPLETE")
    print("="*60)
    print(f"Pathways annotated: {len(annotated_pathways)}/{len(pathway_pairs)}")
    print(f"Output: {output_dir}")
    print("="*60)

    exit_code = 1 if failed_pathways else 0

    if args.validate:
        reports = validate_directory(output_dir)
        print_summary(reports)
        if any(not report.is_valid() for report in reports):
            exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
