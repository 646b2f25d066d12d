from pathlib import Path
from typing import List

import pytest

from extractor.source_unit import SourceUnit, node_text, parse_source

SAMPLE_DIR = Path(__file__).resolve().parent.parent / "sample_inputs"


def find_nodes(unit: SourceUnit, node_type: str) -> List:
    """All nodes of `node_type`, in pre-order."""
    found = []
    stack = [unit.root]
    while stack:
        node = stack.pop()
        if node.type == node_type:
            found.append(node)
        stack.extend(reversed(node.children))
    return found


def find_named(unit: SourceUnit, node_type: str, name: str):
    for node in find_nodes(unit, node_type):
        if node_text(node.child_by_field_name("name")) == name:
            return node
    raise LookupError(f"No {node_type} named {name}")


@pytest.fixture
def sample_dir() -> Path:
    return SAMPLE_DIR


@pytest.fixture
def type_node():
    """Parses `type Subject = <source>;` and returns the aliased type node."""
    def _type_node(source: str):
        unit = parse_source(f"type Subject = {source};")
        alias = find_nodes(unit, "type_alias_declaration")[0]
        return alias.child_by_field_name("value")
    return _type_node


@pytest.fixture
def write_ts(tmp_path):
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf8")
        return path
    return _write
