from typing import Callable, Dict, List

from tree_sitter import Node

from logger import logger
from .source_unit import node_text

UNKNOWN = "unknown"

KEYWORD_TYPES = {
    "string": "string",
    "number": "number",
    "boolean": "boolean",
    "void": "void",
    "undefined": "undefined",
    "null": "null",
    "any": "any",
    "unknown": "unknown",
    "never": "never",
    "object": "object",
}


def _type_child(node: Node) -> Node | None:
    named = [child for child in node.named_children if child.type != "comment"]
    return named[-1] if named else None


def unwrap_annotation(node: Node | None) -> Node | None:
    """`: T` annotations wrap the type node; returns the type node itself."""
    if node is not None and node.type == "type_annotation":
        return _type_child(node)
    return node


def _keyword(node: Node) -> str:
    text = node_text(node)
    if text in KEYWORD_TYPES:
        return KEYWORD_TYPES[text]
    return _unrecognized(node)


def _reference(node: Node) -> str:
    return node_text(node)


def _generic(node: Node) -> str:
    # Promise<T> names the reference only; type arguments are dropped
    return node_text(node.child_by_field_name("name") or node.named_children[0])


def _union_members(node: Node) -> List[Node]:
    members = []
    for child in node.named_children:
        if child.type == "union_type":
            members.extend(_union_members(child))
        elif child.type != "comment":
            members.append(child)
    return members


def _union(node: Node) -> str:
    return " | ".join(resolve_type_name(member) for member in _union_members(node))


def _parenthesized(node: Node) -> str:
    return resolve_type_name(_type_child(node))


def parameter_name(param: Node) -> str:
    """Name of a formal parameter; rest parameters drop their leading "..."."""
    pattern = param.child_by_field_name("pattern")
    if pattern is not None and pattern.type == "rest_pattern" and pattern.named_children:
        pattern = pattern.named_children[0]
    return node_text(pattern)


def formal_parameters(node: Node) -> List[Node]:
    parameters = node.child_by_field_name("parameters")
    if parameters is None:
        return []
    return [p for p in parameters.named_children if p.type in ("required_parameter", "optional_parameter")]


def _function(node: Node) -> str:
    params = []
    for param in formal_parameters(node):
        params.append(f"{parameter_name(param)}: {resolve_type_name(param.child_by_field_name('type'))}")
    return_type = resolve_type_name(node.child_by_field_name("return_type"))
    return f"({', '.join(params)}) => {return_type}"


def _structural(node: Node) -> str:
    return "object"


def _array(node: Node) -> str:
    return resolve_type_name(node.named_children[0]) + "[]"


def _literal(node: Node) -> str:
    return node_text(node)


def _unrecognized(node: Node) -> str:
    logger.warning(f"Unknown type: {node.type} ({node_text(node)!r})")
    return UNKNOWN


_RESOLVERS: Dict[str, Callable[[Node], str]] = {
    "predefined_type": _keyword,
    "type_identifier": _reference,
    "nested_type_identifier": _reference,
    "generic_type": _generic,
    "union_type": _union,
    "parenthesized_type": _parenthesized,
    "function_type": _function,
    "object_type": _structural,
    "array_type": _array,
    "literal_type": _literal,
}


def resolve_type_name(node: Node | None) -> str:
    """
    Converts a declared type into its display name.

    Keywords map to their lowercase names, references keep the referenced
    name, unions join their members with " | ", function types render as
    "(a: A) => R", anonymous object types collapse to "object", arrays get a
    "[]" suffix and literal types keep their source text. Missing types and
    unsupported kinds resolve to "unknown"; this function never raises.

    Args:
        node (Node | None): A type node or the `type_annotation` wrapping one.

    Returns:
        str: The display name.
    """
    node = unwrap_annotation(node)
    if node is None:
        return UNKNOWN

    resolver = _RESOLVERS.get(node.type, _unrecognized)
    try:
        return resolver(node)
    except Exception as e:
        logger.warning(f"Failed to resolve type {node_text(node)!r}: {e}")
        return UNKNOWN
