import json

import pytest

from pathway_metadata.data_structure.metadata_structure import MalformedDiagramError
from pathway_metadata.parsing_functions import parsing_utils
from pathway_metadata.parsing_functions.parsing_utils import (
    FileReader, parse_diagram_graph, read_diagram_graph, read_input_files
)


def test_parse_diagram_graph(diagram_data):
    graph = parse_diagram_graph(diagram_data)
    assert graph.node_ids() == ["Protein_1_2", "9606", "Unknown_node_3", "SmallMolecule_7_1"]
    assert graph.nodes[0].data["label"] == "HK1"
    assert graph.nodes[0].position == {"x": 10, "y": 20}
    assert graph.nodes[1].position is None
    assert len(graph.edges) == 1
    assert graph.layout == "flat"


def test_parse_elements_layout(diagram_data):
    graph = parse_diagram_graph({"elements": diagram_data, "style": []})
    assert len(graph.nodes) == 4
    assert graph.extra == {"style": []}
    assert graph.layout == "elements"


def test_existing_metadata_moves_to_slot():
    graph = parse_diagram_graph({"nodes": [
        {"data": {"id": "n1", "parsedMetadata": [["Names", ["x"]]]}},
    ]})
    assert graph.nodes[0].metadata == [["Names", ["x"]]]
    assert "parsedMetadata" not in graph.nodes[0].data


@pytest.mark.parametrize("data", [
    [],
    {"edges": []},
    {"nodes": [{"position": {"x": 1}}]},
    {"nodes": [{"data": {"label": "no id"}}]},
])
def test_malformed_diagrams(data):
    with pytest.raises(MalformedDiagramError):
        parse_diagram_graph(data)


def test_read_diagram_graph_rejects_bad_json():
    with pytest.raises(MalformedDiagramError):
        read_diagram_graph("{nodes:")


def test_file_reader_reads_utf8(tmp_path):
    path = tmp_path / "pathway.jsonld"
    path.write_text('{"@graph": [], "comment": "β-D-glucose"}', encoding="utf-8")
    assert "β-D-glucose" in FileReader(tmp_path).read(path)


def test_file_reader_falls_back_for_latin1(tmp_path):
    path = tmp_path / "pathway.jsonld"
    path.write_bytes('{"@graph": [], "comment": "caf\xe9"}'.encode("latin-1"))
    comment = json.loads(FileReader(tmp_path).read(path))["comment"]
    assert comment.startswith("caf")
    assert len(comment) == 4


def test_file_reader_searches_base_dir(tmp_path):
    nested = tmp_path / "downloads" / "reactome"
    nested.mkdir(parents=True)
    (nested / "R-HSA-1.json").write_text('{"nodes": []}', encoding="utf-8")
    assert FileReader(tmp_path).read("R-HSA-1.json") == '{"nodes": []}'


def test_file_reader_falls_back_to_latin1_when_detection_fails(tmp_path, monkeypatch):
    monkeypatch.setattr(parsing_utils.chardet, "detect", lambda raw: {"encoding": None, "confidence": None})
    path = tmp_path / "pathway.jsonld"
    path.write_bytes('{"comment": "caf\xe9"}'.encode("latin-1"))
    assert json.loads(FileReader(tmp_path).read(path))["comment"] == "caf\xe9"


def test_file_reader_does_not_substitute_other_directories(tmp_path):
    stale = tmp_path / "annotated_pathways_1"
    stale.mkdir()
    (stale / "p.json").write_text('{"nodes": []}', encoding="utf-8")
    (tmp_path / "inputs").mkdir()
    with pytest.raises(FileNotFoundError):
        FileReader(tmp_path).read(tmp_path / "inputs" / "p.json")


def test_file_reader_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileReader(tmp_path).read("missing.jsonld")


def test_read_input_files(tmp_path, biopax_text, diagram_data):
    (tmp_path / "p.jsonld").write_text(biopax_text, encoding="utf-8")
    (tmp_path / "p.json").write_text(json.dumps(diagram_data), encoding="utf-8")
    text, graph = read_input_files(tmp_path / "p.jsonld", tmp_path / "p.json")
    assert text == biopax_text
    assert len(graph.nodes) == 4
