"""
Metadata Mapper Module

Maps BioPax metadata onto the nodes of a converted SBGN diagram graph:
node ID -> candidate IDs -> BioPax record -> ordered field list.
"""

import dataclasses
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple, Union

from pathway_metadata.build_functions import field_extractor
from pathway_metadata.build_functions.graph_index import BioPaxIndex, load, lookup
from pathway_metadata.data_structure.metadata_structure import (
    AnnotationReport, BioPaxRecord, DiagramGraph, MetadataField
)
from pathway_metadata.utils.id_manager import IdentifierResolver


class MetadataMapper:
    """
    Resolves diagram nodes against one loaded BioPax index.

    The index is only read, so nodes may be resolved from several threads.
    """

    def __init__(self, index: BioPaxIndex, resolver: Optional[IdentifierResolver] = None, verbose: bool = False):
        self.index = index
        self.resolver = resolver or IdentifierResolver()
        self.verbose = verbose
        self.last_report = AnnotationReport()

    def find_record(self, node_id: str) -> Tuple[Optional[str], Optional[BioPaxRecord]]:
        """
        Try each candidate ID in order and stop at the first hit.

        Returns:
            tuple: (rule name, record), or (None, None) if nothing matched
        """
        for rule_name, candidate_id in self.resolver.resolve_named(node_id):
            record = lookup(candidate_id, self.index)
            if record is not None:
                return rule_name, record
        return None, None

    def metadata_for(self, node_id: str) -> Optional[List[MetadataField]]:
        """Ordered field list for a node ID, or None if it cannot be resolved."""
        return self._resolve(node_id)[1]

    def _resolve(self, node_id):
        rule_name, record = self.find_record(node_id)
        if record is None:
            return None, None
        return rule_name, field_extractor.extract(record, self.index)

    def annotate_graph(self, diagram_graph: DiagramGraph, workers: Optional[int] = None) -> DiagramGraph:
        """
        Return a copy of the diagram graph with metadata on every node.

        The input graph and its nodes are left untouched. Nodes keep their
        order; unresolved nodes get None.

        Args:
            diagram_graph: Converted SBGN graph
            workers: Size of the thread pool, None or 1 for sequential

        Returns:
            DiagramGraph: the annotated copy
        """
        node_ids = diagram_graph.node_ids()

        if workers and workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(self._resolve, node_ids))
        else:
            results = [self._resolve(node_id) for node_id in node_ids]

        report = AnnotationReport()
        annotated_nodes = []
        for node, (rule_name, metadata) in zip(diagram_graph.nodes, results):
            report.record_match(rule_name)
            annotated_nodes.append(dataclasses.replace(node, data=dict(node.data), metadata=metadata))

        self.last_report = report
        if self.verbose:
            print(f"Annotated {report.annotated}/{report.total} nodes "
                  f"({report.unresolved} without metadata)")
            for rule_name, count in sorted(report.matched_by_rule.items()):
                print(f"  {rule_name}: {count}")

        return dataclasses.replace(
            diagram_graph,
            nodes=annotated_nodes,
            edges=list(diagram_graph.edges),
            extra=dict(diagram_graph.extra),
        )


def annotate(diagram_graph: DiagramGraph, biopax_document: Union[str, bytes, BioPaxIndex],
             base_uri: Optional[str] = None, workers: Optional[int] = None,
             verbose: bool = False) -> DiagramGraph:
    """
    Annotate every node of a diagram graph from a BioPax document.

    Args:
        diagram_graph: Converted SBGN graph
        biopax_document: JSON-LD text, or an already loaded BioPaxIndex
        base_uri: Prefix for bare local names
        workers: Thread pool size for node resolution
        verbose: Print index and annotation summaries

    Returns:
        DiagramGraph: annotated copy of diagram_graph

    Raises:
        MalformedDocumentError: if the document cannot be loaded; no node is annotated
    """
    if isinstance(biopax_document, BioPaxIndex):
        index = biopax_document
    else:
        index = load(biopax_document, base_uri=base_uri, verbose=verbose)
    mapper = MetadataMapper(index, verbose=verbose)
    return mapper.annotate_graph(diagram_graph, workers=workers)
