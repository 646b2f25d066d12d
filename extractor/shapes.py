from typing import Dict, Iterable, List

from tree_sitter import Node

from datamodels import ShapeField
from logger import logger
from .comments import get_doc_comment
from .render import render_section
from .source_unit import SourceUnit, node_text
from .tsdoc_parser import TSDocParser, get_comment_parser
from .type_names import resolve_type_name

ShapeDictionary = Dict[str, List[ShapeField]]


def _shape_body(node: Node) -> Node | None:
    """Body holding the fields of an interface or an object-literal type alias."""
    if node.type == "interface_declaration":
        return node.child_by_field_name("body")
    if node.type == "type_alias_declaration":
        value = node.child_by_field_name("value")
        if value is not None and value.type == "object_type":
            return value
    return None


def _is_optional(member: Node) -> bool:
    return any(child.type == "?" for child in member.children)


def _shape_fields(body: Node, parser: TSDocParser) -> List[ShapeField]:
    fields = []
    for member in body.named_children:
        if member.type != "property_signature":
            continue
        comment = get_doc_comment(member, parser)
        fields.append(ShapeField(
            name=node_text(member.child_by_field_name("name")),
            type=resolve_type_name(member.child_by_field_name("type")),
            description=render_section(comment.summary_section) if comment else "",
            required=not _is_optional(member),
        ))
    return fields


def build_shape_dictionary(units: Iterable[SourceUnit], parser: TSDocParser | None = None) -> ShapeDictionary:
    """
    Collects documented fields of every named shape declared in `units`.

    Shapes are interfaces and `type X = { ... }` aliases with at least one
    property. Units are scanned in order, so a later declaration of the same
    name replaces an earlier one.

    Args:
        units (Iterable[SourceUnit]): The primary module followed by its imports.
        parser (TSDocParser | None): Comment parser; the shared one by default.

    Returns:
        ShapeDictionary: Shape name -> ordered field documentation.
    """
    parser = parser or get_comment_parser()
    shapes: ShapeDictionary = {}

    def visit(node: Node):
        body = _shape_body(node)
        if body is None:
            for child in node.children:
                visit(child)
            return

        name = node_text(node.child_by_field_name("name"))
        fields = _shape_fields(body, parser)
        if not fields:
            return
        if name in shapes:
            logger.debug(f"Shape {name} redeclared; keeping the later declaration")
        shapes[name] = fields

    for unit in units:
        visit(unit.root)

    return shapes
