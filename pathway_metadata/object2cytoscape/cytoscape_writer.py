import json

from pathway_metadata.data_structure.metadata_structure import BioPaxRecord, DiagramGraph, DiagramNode


class CytoscapeWriter:
    def __init__(self, indent=2):
        self.indent = indent

    def format_metadata(self, metadata):
        """
        Convert an extracted field list into JSON-ready [label, value] pairs.

        Args:
            metadata: list of MetadataField, or None

        Returns:
            list or None: [[label, value], ...], None stays None
        """
        if metadata is None:
            return None

        pairs = []
        for label, value in metadata:
            if isinstance(value, (list, tuple)):
                value = [self._json_value(v) for v in value]
            else:
                value = self._json_value(value)
            pairs.append([label, value])
        return pairs

    def _json_value(self, value):
        if isinstance(value, BioPaxRecord):
            return value.pathid
        return value

    def write_node(self, node: DiagramNode) -> dict:
        """
        Converts a DiagramNode into a Cytoscape node object.

        The metadata slot is written as data.parsedMetadata.
        """
        data = dict(node.data)
        data['id'] = node.id
        data['parsedMetadata'] = self.format_metadata(node.metadata)

        node_output = {'data': data}
        if node.position is not None:
            node_output['position'] = node.position
        return node_output

    def graph_to_dict(self, graph: DiagramGraph) -> dict:
        """Enhanced Cytoscape JSON for a whole graph, in the layout it was read from."""
        output = dict(graph.extra)
        elements = {
            'nodes': [self.write_node(node) for node in graph.nodes],
            'edges': list(graph.edges),
        }
        if graph.layout == 'elements':
            output['elements'] = elements
        else:
            output.update(elements)

        if graph.pathway_metadata is not None:
            output['pathwayMetadata'] = graph.pathway_metadata.to_dict()
        if graph.parse_type is not None:
            output['parseType'] = graph.parse_type
        return output

    def to_json(self, graph: DiagramGraph) -> str:
        return json.dumps(self.graph_to_dict(graph), indent=self.indent, ensure_ascii=False)

    def write(self, graph: DiagramGraph, output_path):
        """
        Write the enhanced graph to a JSON file.

        Args:
            graph: Annotated DiagramGraph
            output_path: Destination file path
        """
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(self.to_json(graph))
