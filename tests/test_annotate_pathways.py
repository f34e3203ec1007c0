import json
import os

import annotate_pathway
from pathway_metadata.build_functions.general_annotator import (
    annotate_pathways, create_output_directory, find_pathway_pairs
)


def write_pair(directory, name, biopax_text, diagram_data):
    (directory / f"{name}.jsonld").write_text(biopax_text, encoding="utf-8")
    (directory / f"{name}.json").write_text(json.dumps(diagram_data), encoding="utf-8")


def test_find_pathway_pairs(tmp_path, biopax_text, diagram_data, capsys):
    write_pair(tmp_path, "R-HSA-70171", biopax_text, diagram_data)
    (tmp_path / "orphan.jsonld").write_text(biopax_text, encoding="utf-8")

    pairs = find_pathway_pairs(tmp_path)
    assert [p["pathway_id"] for p in pairs] == ["R-HSA-70171"]
    assert pairs[0]["diagram_file"].endswith("R-HSA-70171.json")
    assert "no diagram graph for orphan.jsonld" in capsys.readouterr().out


def test_create_output_directory(tmp_path):
    output_dir = create_output_directory(tmp_path)
    assert os.path.isdir(output_dir)
    assert os.path.basename(output_dir).startswith("annotated_pathways_")


def test_annotate_pathways_collects_failures(tmp_path, biopax_text, diagram_data):
    write_pair(tmp_path, "good", biopax_text, diagram_data)
    write_pair(tmp_path, "broken", '{"not": "a graph"}', diagram_data)
    output_dir = tmp_path / "out"
    output_dir.mkdir()

    annotated, failed = annotate_pathways(find_pathway_pairs(tmp_path), str(output_dir))

    assert [p["pathway_id"] for p in annotated] == ["good"]
    assert annotated[0]["nodes"] == 4
    assert annotated[0]["annotated_nodes"] == 3
    assert [f["pathway_id"] for f in failed] == ["broken"]
    assert "@graph" in failed[0]["error"]

    output = json.loads((output_dir / "good.json").read_text(encoding="utf-8"))
    assert output["pathwayMetadata"]["title"] == ["Glycolysis"]
    assert not (output_dir / "broken.json").exists()


def test_cli_single_pathway(tmp_path, biopax_text, diagram_data, capsys):
    write_pair(tmp_path, "R-HSA-70171", biopax_text, diagram_data)
    output_base = tmp_path / "out"

    exit_code = annotate_pathway.main([
        str(output_base),
        "--biopax", str(tmp_path / "R-HSA-70171.jsonld"),
        "--diagram", str(tmp_path / "R-HSA-70171.json"),
        "--pathway-uri", "Pathway_glycolysis",
        "--workers", "2",
        "--validate",
    ])

    assert exit_code == 0
    [run_dir] = list(output_base.iterdir())
    output = json.loads((run_dir / "R-HSA-70171.json").read_text(encoding="utf-8"))
    assert output["nodes"][1]["data"]["parsedMetadata"] == [["Comment", ["NCBI taxonomy 9606"]]]
    stdout = capsys.readouterr().out
    assert "✓ R-HSA-70171: 3/4 nodes annotated" in stdout
    assert "ANNOTATION COMPLETE" in stdout


def test_cli_input_dir_with_failure(tmp_path, biopax_text, diagram_data):
    inputs = tmp_path / "in"
    inputs.mkdir()
    write_pair(inputs, "broken", "not json", diagram_data)
    assert annotate_pathway.main([str(tmp_path / "out"), "--input-dir", str(inputs)]) == 1


def test_cli_requires_inputs(tmp_path, capsys):
    assert annotate_pathway.main([str(tmp_path)]) == 1
    assert "Give either --biopax and --diagram" in capsys.readouterr().out


def test_cli_rejects_bad_worker_count(tmp_path, biopax_text, diagram_data):
    write_pair(tmp_path, "p", biopax_text, diagram_data)
    assert annotate_pathway.main([
        str(tmp_path / "out"),
        "--biopax", str(tmp_path / "p.jsonld"),
        "--diagram", str(tmp_path / "p.json"),
        "--workers", "0",
    ]) == 1
