import copy
import json

import pytest

from pathway_metadata.build_functions.graph_index import load
from pathway_metadata.parsing_functions.parsing_utils import parse_diagram_graph

PC2 = "http://pathwaycommons.org/pc2/"

BIOPAX_DOCUMENT = {
    "@context": "http://www.biopax.org/release/biopax-level3.json",
    "@graph": [
        {
            "@id": PC2 + "Pathway_glycolysis",
            "@type": "Pathway",
            "displayName": "Glycolysis",
            "dataSource": PC2 + "reactome",
            "comment": ["Conversion of glucose to pyruvate."],
            "organism": "http://identifiers.org/taxonomy/9606",
        },
        {
            "@id": PC2 + "reactome",
            "@type": "Provenance",
            "displayName": "Reactome",
        },
        {
            "@id": "http://identifiers.org/taxonomy/9606",
            "@type": "BioSource",
            "displayName": "Homo sapiens",
        },
        {
            "@id": "Protein_1",
            "@type": "Protein",
            "dataSource": PC2 + "reactome",
            "entityReference": "http://identifiers.org/uniprot/P19367",
            "comment": [],
            "name": ["HK1", "Hexokinase-1"],
            "standardName": "Hexokinase 1",
            "cellularLocation": PC2 + "CellularLocationVocabulary_cytosol",
            "xref": [PC2 + "UnificationXref_reactome_R-HSA-70171"],
        },
        {
            "@id": "http://identifiers.org/uniprot/P19367",
            "@type": "ProteinReference",
            "displayName": "HXK1_HUMAN",
            "xref": [
                PC2 + "UnificationXref_uniprot_knowledgebase_P19367",
                PC2 + "RelationshipXref_hgnc_HGNC_4922",
            ],
        },
        {
            "@id": PC2 + "UnificationXref_uniprot_knowledgebase_P19367",
            "@type": "UnificationXref",
            "db": "uniprot knowledgebase",
            "id": "P19367",
        },
        {
            "@id": PC2 + "RelationshipXref_hgnc_HGNC_4922",
            "@type": "RelationshipXref",
            "db": "hgnc",
            "id": "HGNC:4922",
        },
        {
            "@id": PC2 + "UnificationXref_reactome_R-HSA-70171",
            "@type": "UnificationXref",
            "db": "reactome",
            "id": "R-HSA-70171",
        },
        {
            "@id": PC2 + "CellularLocationVocabulary_cytosol",
            "@type": "CellularLocationVocabulary",
            "term": ["cytosol"],
        },
        {
            "@id": "http://identifiers.org/9606",
            "@type": "BioSource",
            "displayName": "Homo sapiens",
            "comment": "NCBI taxonomy 9606",
        },
        {
            "@id": PC2 + "SmallMolecule_7",
            "@type": "SmallMolecule",
            "cellularLocation": "extracellular region",
            "comment": [{"@value": "ATP"}],
            "entityReference": {
                "@id": PC2 + "SmallMoleculeReference_atp",
                "@type": "SmallMoleculeReference",
                "displayName": "ATP",
                "xref": {
                    "@id": PC2 + "UnificationXref_chebi_15422",
                    "@type": "UnificationXref",
                    "db": "chebi",
                    "id": "CHEBI:15422",
                },
            },
        },
    ],
}

DIAGRAM = {
    "nodes": [
        {"data": {"id": "Protein_1_2", "class": "macromolecule", "label": "HK1"},
         "position": {"x": 10, "y": 20}},
        {"data": {"id": "9606", "class": "unspecified entity", "label": "Homo sapiens"}},
        {"data": {"id": "Unknown_node_3", "class": "process"}},
        {"data": {"id": "SmallMolecule_7_1", "class": "simple chemical", "label": "ATP"}},
    ],
    "edges": [
        {"data": {"id": "e1", "source": "Protein_1_2", "target": "SmallMolecule_7_1"}},
    ],
}


@pytest.fixture
def biopax_text():
    return json.dumps(BIOPAX_DOCUMENT)


@pytest.fixture
def biopax_index(biopax_text):
    return load(biopax_text)


@pytest.fixture
def diagram_data():
    return copy.deepcopy(DIAGRAM)


@pytest.fixture
def diagram_graph(diagram_data):
    return parse_diagram_graph(diagram_data)


@pytest.fixture(autouse=True)
def clear_base_uri(monkeypatch):
    monkeypatch.delenv("BIOPAX_BASE_URI", raising=False)
