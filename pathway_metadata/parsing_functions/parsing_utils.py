import json
import chardet
from pathlib import Path
from typing import Optional, Dict, Any, Tuple, Union

from pathway_metadata.data_structure.metadata_structure import (
    DiagramGraph, DiagramNode, MalformedDiagramError
)


class FileReader:
    """Find and read a file with encoding handling."""

    def __init__(self, base_dir: Optional[Path] = None, verbose: bool = False):
        if base_dir is None:
            base_dir = Path.cwd()
        self.base_dir = Path(base_dir)
        self.verbose = verbose

    def _log(self, message: str):
        if self.verbose:
            print(message)

    def find(self, filename: Union[str, Path]) -> Optional[Path]:
        """
        Use the path as given if it exists. A bare file name that does not
        exist is searched for under base_dir; a path with a directory part is
        never replaced by a same-named file elsewhere.
        """
        path = Path(filename)
        if path.is_file():
            return path
        if path.parent != Path('.'):
            self._log(f"File '{filename}' not found")
            return None

        matches = sorted(self.base_dir.rglob(path.name))
        if not matches:
            self._log(f"File '{filename}' not found under {self.base_dir}")
            return None
        self._log(f"Found file: {matches[0]}")
        return matches[0]

    def _detect_encoding(self, file_path: Path) -> Optional[str]:
        with open(file_path, 'rb') as f:
            raw_data = f.read(10000)
        result = chardet.detect(raw_data)
        encoding = result['encoding']
        confidence = result['confidence'] or 0.0
        self._log(f"Detected encoding for {file_path.name}: {encoding} (confidence: {confidence:.2f})")
        return encoding if confidence >= 0.7 else None

    def read(self, filename: Union[str, Path]) -> str:
        """Find the file and read it with the appropriate encoding."""
        file_path = self.find(filename)
        if file_path is None:
            raise FileNotFoundError(f"Could not find file: {filename}")

        detected_encoding = self._detect_encoding(file_path)
        encodings_to_try = [e for e in ['utf-8', detected_encoding] if e]
        encodings_to_try = list(dict.fromkeys(encodings_to_try))

        for enc in encodings_to_try:
            try:
                with open(file_path, 'r', encoding=enc) as f:
                    content = f.read()
                self._log(f"Successfully read {file_path.name} with encoding: {enc}")
                return content
            except (UnicodeDecodeError, LookupError) as e:
                self._log(f"Failed with {enc}: {e}")
                continue

        # latin-1 decodes any byte sequence
        self._log("Falling back to latin-1")
        with open(file_path, 'r', encoding='latin-1') as f:
            return f.read()


def parse_diagram_graph(data: Dict[str, Any]) -> DiagramGraph:
    """
    Build a DiagramGraph from a converted Cytoscape JSON object.

    Accepts both {"nodes": [...], "edges": [...]} and the
    {"elements": {"nodes": [...], "edges": [...]}} layout, and records which one
    was used in DiagramGraph.layout. Keys other than nodes and edges are kept
    in DiagramGraph.extra.
    """
    if not isinstance(data, dict):
        raise MalformedDiagramError("Diagram graph must be a JSON object")

    layout = 'elements' if isinstance(data.get('elements'), dict) else 'flat'
    elements = data['elements'] if layout == 'elements' else data
    raw_nodes = elements.get('nodes')
    if not isinstance(raw_nodes, list):
        raise MalformedDiagramError("Diagram graph has no 'nodes' list")
    raw_edges = elements.get('edges') or []

    nodes = []
    for position, raw_node in enumerate(raw_nodes):
        node_data = raw_node.get('data') if isinstance(raw_node, dict) else None
        if not isinstance(node_data, dict) or node_data.get('id') is None:
            raise MalformedDiagramError(f"Diagram node {position} has no data.id")
        node_data = dict(node_data)
        metadata = node_data.pop('parsedMetadata', None)
        nodes.append(DiagramNode(
            id=str(node_data['id']),
            data=node_data,
            position=raw_node.get('position'),
            metadata=metadata,
        ))

    extra = {k: v for k, v in data.items() if k not in ('nodes', 'edges', 'elements')}
    return DiagramGraph(nodes=nodes, edges=list(raw_edges), extra=extra, layout=layout)


def read_diagram_graph(text: str) -> DiagramGraph:
    """Parse Cytoscape JSON text into a DiagramGraph."""
    try:
        data = json.loads(text)
    except ValueError as e:
        raise MalformedDiagramError(f"Diagram graph is not valid JSON: {e}") from e
    return parse_diagram_graph(data)


def read_input_files(biopax_file: Union[str, Path], diagram_file: Union[str, Path],
                     base_dir: Optional[Path] = None, verbose: bool = False) -> Tuple[str, DiagramGraph]:
    """
    Read a BioPax document and its diagram graph from disk.

    Returns:
        tuple: (BioPax JSON-LD text, DiagramGraph)
    """
    reader = FileReader(base_dir, verbose=verbose)
    biopax_text = reader.read(biopax_file)
    diagram_graph = read_diagram_graph(reader.read(diagram_file))
    return biopax_text, diagram_graph
