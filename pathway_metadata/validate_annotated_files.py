#!/usr/bin/env python3
"""
Annotated Graph Validation Script

Validates enhanced Cytoscape JSON files for:
1. JSON well-formedness and a 'nodes' list (top level or under 'elements')
2. Missing or duplicate node IDs
3. parsedMetadata shape ([label, value] pairs or null)
4. Unknown labels and labels out of extraction order
5. Empty values that should have been left out
6. Misaligned 'Databases' / 'Database IDs' lists

Usage:
    python -m pathway_metadata.validate_annotated_files <json_file_or_directory>
"""

import json
import os
import sys
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List

from pathway_metadata.data_structure.metadata_structure import DATABASES, DATABASE_IDS, FIELD_ORDER
from pathway_metadata.utils.property_parser import is_empty

FIELD_POSITION = {label: position for position, label in enumerate(FIELD_ORDER)}


@dataclass
class ValidationError:
    """Represents a validation error"""
    file_path: str
    error_type: str
    message: str
    node_id: str = ""


@dataclass
class ValidationReport:
    """Contains all validation results"""
    file_path: str
    json_valid: bool = False
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, error_type: str, message: str, node_id: str = ""):
        """Add an error to the report"""
        self.errors.append(ValidationError(
            file_path=self.file_path,
            error_type=error_type,
            message=message,
            node_id=node_id
        ))

    def add_warning(self, message: str):
        self.warnings.append(message)

    def is_valid(self) -> bool:
        return len(self.errors) == 0


class AnnotationValidator:
    """Validates enhanced Cytoscape JSON files"""

    def __init__(self):
        self.report = None

    def validate_file(self, file_path: str) -> ValidationReport:
        """Validate a single enhanced JSON file"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            self.report = ValidationReport(file_path=file_path)
            self.report.add_error("FILE_NOT_FOUND", f"File not found: {file_path}")
            return self.report
        except (ValueError, UnicodeDecodeError) as e:
            self.report = ValidationReport(file_path=file_path)
            self.report.add_error("JSON_PARSE_ERROR", f"JSON parsing failed: {e}")
            return self.report

        return self.validate_data(data, file_path)

    def validate_data(self, data: Any, file_path: str = "<memory>") -> ValidationReport:
        """Validate an already parsed enhanced graph"""
        self.report = ValidationReport(file_path=file_path, json_valid=True)

        if isinstance(data, dict) and isinstance(data.get('elements'), dict):
            data = data['elements']
        nodes = data.get('nodes') if isinstance(data, dict) else None
        if not isinstance(nodes, list):
            self.report.add_error("INVALID_ROOT", "Top-level object has no 'nodes' list")
            return self.report

        annotated = sum(
            1 for node in nodes
            if isinstance(node, dict) and isinstance(node.get('data'), dict)
            and node['data'].get('parsedMetadata') is not None
        )
        self.report.stats = {
            "nodes": len(nodes),
            "edges": len(data.get('edges') or []),
            "annotated_nodes": annotated,
            "nodes_without_metadata": len(nodes) - annotated,
        }

        if 'pathwayMetadata' not in data:
            self.report.add_warning("No 'pathwayMetadata' object")

        self._validate_node_ids(nodes)
        for node in nodes:
            if isinstance(node, dict) and isinstance(node.get('data'), dict):
                self._validate_metadata(node['data'])

        return self.report

    def _validate_node_ids(self, nodes: List[Any]):
        """Check for missing and duplicate node IDs"""
        seen = defaultdict(int)
        for position, node in enumerate(nodes):
            node_data = node.get('data') if isinstance(node, dict) else None
            if not isinstance(node_data, dict) or not node_data.get('id'):
                self.report.add_error("MISSING_ID", f"Node {position} has no data.id")
                continue
            seen[node_data['id']] += 1

        for node_id, count in seen.items():
            if count > 1:
                self.report.add_error("DUPLICATE_ID", f"Node ID '{node_id}' used {count} times", node_id)

    def _validate_metadata(self, node_data: Dict[str, Any]):
        """Check one node's parsedMetadata"""
        node_id = str(node_data.get('id', ''))

        if 'parsedMetadata' not in node_data:
            self.report.add_error("MISSING_METADATA_SLOT", "Node has no parsedMetadata key", node_id)
            return

        metadata = node_data['parsedMetadata']
        if metadata is None:
            return
        if not isinstance(metadata, list):
            self.report.add_error("INVALID_METADATA", "parsedMetadata is neither a list nor null", node_id)
            return

        values = {}
        last_position = -1
        for entry in metadata:
            if not isinstance(entry, list) or len(entry) != 2:
                self.report.add_error("INVALID_ENTRY", f"Entry {entry!r} is not a [label, value] pair", node_id)
                continue

            label, value = entry
            if label not in FIELD_POSITION:
                self.report.add_error("UNKNOWN_LABEL", f"Unknown label '{label}'", node_id)
                continue
            if label in values:
                self.report.add_error("DUPLICATE_LABEL", f"Label '{label}' appears more than once", node_id)
            if FIELD_POSITION[label] < last_position:
                self.report.add_error("LABEL_ORDER", f"Label '{label}' is out of order", node_id)
            last_position = max(last_position, FIELD_POSITION[label])

            if is_empty(value):
                self.report.add_error("EMPTY_VALUE", f"Label '{label}' has an empty value", node_id)
            values[label] = value

        self._validate_database_pairs(values, node_id)

    def _validate_database_pairs(self, values: Dict[str, Any], node_id: str):
        """Databases and Database IDs come together and stay aligned"""
        if DATABASES not in values and DATABASE_IDS not in values:
            return
        if DATABASES not in values or DATABASE_IDS not in values:
            self.report.add_error(
                "UNPAIRED_DATABASES",
                f"Only one of '{DATABASES}' / '{DATABASE_IDS}' is present",
                node_id
            )
            return

        databases = values[DATABASES]
        database_ids = values[DATABASE_IDS]
        if isinstance(databases, list) and isinstance(database_ids, list) and len(databases) != len(database_ids):
            self.report.add_error(
                "MISALIGNED_DATABASES",
                f"{len(databases)} database names but {len(database_ids)} database IDs",
                node_id
            )


def validate_directory(directory: str) -> List[ValidationReport]:
    """Validate every .json file in a directory"""
    reports = []
    validator = AnnotationValidator()
    for filename in sorted(os.listdir(directory)):
        if filename.endswith('.json'):
            reports.append(validator.validate_file(os.path.join(directory, filename)))
    return reports


def print_report(report: ValidationReport):
    """Print a validation report"""
    print(f"\n{'='*80}")
    print(f"File: {report.file_path}")
    print(f"{'='*80}")

    print("\nStatistics:")
    for key, value in report.stats.items():
        print(f"  {key}: {value}")

    print(f"\nJSON Valid: {report.json_valid}")

    if report.errors:
        print(f"\nErrors ({len(report.errors)}):")
        error_types = defaultdict(int)
        for error in report.errors:
            error_types[error.error_type] += 1
        for error_type, count in sorted(error_types.items()):
            print(f"  {error_type}: {count}")

        print("\nShowing first 20 errors:" if len(report.errors) > 20 else "\nDetailed Errors:")
        for error in report.errors[:20]:
            node_info = f" (node: {error.node_id})" if error.node_id else ""
            print(f"  - [{error.error_type}]{node_info}: {error.message}")
    else:
        print("\nNo errors found!")

    for warning in report.warnings:
        print(f"  Warning: {warning}")

    status = "VALID" if report.is_valid() else "INVALID"
    print(f"\nStatus: {status}\n")


def print_summary(reports: List[ValidationReport]):
    """Print summary of all reports"""
    print(f"\n{'='*80}")
    print("VALIDATION SUMMARY")
    print(f"{'='*80}\n")

    total_files = len(reports)
    valid_files = sum(1 for r in reports if r.is_valid())
    print(f"Total files: {total_files}")
    print(f"Valid files: {valid_files}")
    print(f"Invalid files: {total_files - valid_files}")
    print(f"Total errors: {sum(len(r.errors) for r in reports)}")
    print()


def main(argv=None):
    """Main entry point"""
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 1:
        print("Usage: python -m pathway_metadata.validate_annotated_files <json_file_or_directory>")
        return 1

    path = argv[0]

    if os.path.isfile(path):
        report = AnnotationValidator().validate_file(path)
        print_report(report)
        return 0 if report.is_valid() else 1

    if os.path.isdir(path):
        reports = validate_directory(path)
        for report in reports:
            print_report(report)
        print_summary(reports)
        return 1 if any(not r.is_valid() for r in reports) else 0

    print(f"Error: '{path}' is not a file or directory")
    return 1


if __name__ == "__main__":
    sys.exit(main())
