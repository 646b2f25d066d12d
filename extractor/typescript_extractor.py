from typing import Dict, List

from tree_sitter import Node

from datamodels import ExampleCode, ExtractionOptions, MethodDoc, ParameterDoc, ReturnDoc, ShapeField
from logger import logger
from .base import MethodDocExtractor
from .comments import get_doc_comment
from .errors import MissingDocumentationError
from .render import render_section
from .source_unit import SourceUnit, node_text
from .tsdoc_nodes import DocComment, DocFencedCode
from .tsdoc_parser import get_comment_parser
from .type_names import formal_parameters, parameter_name, resolve_type_name, unwrap_annotation

METHOD_NODE_TYPES = ("method_definition", "abstract_method_signature", "method_signature")
# Overloads and ambient class methods; interface members are also method_signature
SIGNATURE_NODE_TYPES = ("method_signature",)
CLASS_NODE_TYPES = ("class_declaration", "abstract_class_declaration")
EXCLUDED_MODIFIERS = ("private", "protected")
ACCESSOR_KEYWORDS = ("get", "set")


class TypeScriptMethodDocExtractor(MethodDocExtractor):
    """
    Extracts method and constructor documentation from TypeScript modules
    using Tree-sitter for the syntax tree and TSDoc for the comments.
    """

    def __init__(self, options: ExtractionOptions | None = None):
        self.options = options or ExtractionOptions()
        self._comment_parser = get_comment_parser()

    @property
    def comment_parser(self):
        return self._comment_parser

    @property
    def suffix(self) -> list[str]:
        return [".ts", ".tsx"]

    def extract_method_docs(self, unit: SourceUnit, shapes: Dict[str, List[ShapeField]]) -> List[MethodDoc]:
        """
        Walks the module depth-first and builds a `MethodDoc` for every public
        method or constructor, in source order.

        A declaration filtered out by the class-name filter or by a
        private/protected modifier produces no record, but declarations nested
        inside it are still visited.

        Args:
            unit (SourceUnit): The primary module.
            shapes (Dict[str, List[ShapeField]]): Complete shape dictionary for the run.

        Returns:
            List[MethodDoc]: One record per matched declaration.
        """
        results: List[MethodDoc] = []

        def traverse(node: Node):
            if node.type in METHOD_NODE_TYPES and self._is_eligible(node):
                results.append(self._build_method_doc(node, shapes))
            for child in node.children:
                traverse(child)

        traverse(unit.root)
        logger.debug(f"Extracted {len(results)} method records from {unit.path or '<string>'}")
        return results

    def _is_eligible(self, node: Node) -> bool:
        if node.type in SIGNATURE_NODE_TYPES and (node.parent is None or node.parent.type != "class_body"):
            return False
        if any(not child.is_named and child.type in ACCESSOR_KEYWORDS for child in node.children):
            return False

        class_name = self.options.class_name
        if class_name is not None and enclosing_class_name(node) != class_name:
            return False

        modifier = next((c for c in node.children if c.type == "accessibility_modifier"), None)
        if modifier is not None and node_text(modifier) in EXCLUDED_MODIFIERS:
            return False
        return True

    def _build_method_doc(self, node: Node, shapes: Dict[str, List[ShapeField]]) -> MethodDoc:
        name_node = node.child_by_field_name("name")
        method_name = node_text(name_node) if name_node is not None else "constructor"
        comment = get_doc_comment(node, self.comment_parser)

        description = render_section(comment.summary_section if comment else None, required=self.options.strict)
        if self.options.strict and not description:
            raise MissingDocumentationError(f"No description found for {method_name}")

        deprecated = None
        returns_description = ""
        if comment and comment.deprecated_block:
            deprecated = render_section(comment.deprecated_block.content)
        if comment and comment.returns_block:
            returns_description = render_section(comment.returns_block.content)

        return_annotation = unwrap_annotation(node.child_by_field_name("return_type"))
        return MethodDoc(
            method_name=method_name,
            description=description,
            example=get_example_code(comment) if comment else None,
            parameters=[self._build_parameter_doc(p, comment, shapes) for p in formal_parameters(node)],
            deprecated=deprecated,
            returns=ReturnDoc(
                type=node_text(return_annotation).lstrip(":").strip() if return_annotation is not None else "void",
                description=returns_description,
            ),
        )

    @staticmethod
    def _build_parameter_doc(param: Node, comment: DocComment | None, shapes: Dict[str, List[ShapeField]]) -> ParameterDoc:
        name = parameter_name(param)
        param_type = resolve_type_name(param.child_by_field_name("type"))
        param_doc = comment.find_param(name) if comment else None
        return ParameterDoc(
            name=name,
            type=param_type,
            description=render_section(param_doc.content) if param_doc else "",
            required=param.type != "optional_parameter",
            parameters=list(shapes.get(param_type, [])),
        )


def enclosing_class_name(node: Node) -> str | None:
    """Name of the class whose body directly contains `node`."""
    body = node.parent
    if body is None or body.type != "class_body":
        return None
    owner = body.parent
    if owner is None or owner.type not in CLASS_NODE_TYPES:
        return None
    name = owner.child_by_field_name("name")
    return node_text(name) if name is not None else None


def get_example_code(comment: DocComment) -> ExampleCode | None:
    example_block = comment.find_custom_block("@example")
    if example_block is None:
        return None

    fenced_code = next((n for n in example_block.content.nodes if isinstance(n, DocFencedCode)), None)
    if fenced_code is None:
        return None

    return ExampleCode(content=fenced_code.code, language=fenced_code.language)
