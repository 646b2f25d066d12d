from typing import Sequence

from .errors import MissingDocumentationError, UnexpectedDocNodeError
from .tsdoc_nodes import (
    DocCodeSpan,
    DocErrorText,
    DocFencedCode,
    DocInlineTag,
    DocNode,
    DocParagraph,
    DocPlainText,
    DocSection,
    DocSoftBreak,
)

SOFT_BREAK = " "


def render_inline(nodes: Sequence[DocNode]) -> str:
    """Flattens the inline children of a paragraph into display text."""
    ret = ""
    for node in nodes:
        if isinstance(node, DocPlainText):
            ret += node.text
        elif isinstance(node, DocSoftBreak):
            ret += SOFT_BREAK
        elif isinstance(node, DocCodeSpan):
            ret += "`" + node.code + "`"
        elif isinstance(node, DocErrorText):
            ret += node.text
        elif isinstance(node, DocInlineTag):
            ret += node.raw
        else:
            raise UnexpectedDocNodeError(node.kind)
    return ret.strip()


def render_section(section: DocSection | None, required: bool = False) -> str:
    """
    Renders the leading paragraph of a comment section as a display string.

    Later paragraphs hold the long-form details and are not part of the
    rendered text.

    Args:
        section (DocSection | None): The section to render.
        required (bool): Raise instead of returning "" when the section is missing.

    Returns:
        str: The first paragraph, trimmed.
    """
    if section is None:
        if required:
            raise MissingDocumentationError("No description found")
        return ""

    if not section.nodes:
        return ""

    node = section.nodes[0]
    if isinstance(node, DocParagraph):
        return render_inline(node.nodes)
    if isinstance(node, DocFencedCode):
        return f"```{node.language}\n{node.code}\n```"
    raise UnexpectedDocNodeError(node.kind)
