from tree_sitter import Node

from .source_unit import node_text
from .tsdoc_nodes import DocComment
from .tsdoc_parser import TSDocParser, get_comment_parser

OPENING_TOKENS = ("{", "(", "[", "{|")


def leading_comment_text(node: Node) -> str | None:
    """
    Returns the first comment of the contiguous run directly in front of `node`.

    Decorators in front of a declaration belong to it, so the search starts
    before them. Anything other than a comment ends the run. Comments on the
    line where the previous member ends trail that member and are skipped;
    after an opening bracket they still lead the declaration.
    """
    anchor = node
    while anchor.prev_sibling is not None and anchor.prev_sibling.type == "decorator":
        anchor = anchor.prev_sibling

    run = []
    prev = anchor.prev_sibling
    while prev is not None and prev.type == "comment":
        run.append(prev)
        prev = prev.prev_sibling
    run.reverse()

    if prev is not None and prev.type not in OPENING_TOKENS:
        trailing_row = prev.end_point[0]
        run = [comment for comment in run if comment.start_point[0] > trailing_row]

    if not run:
        return None
    return node_text(run[0])


def get_doc_comment(node: Node, parser: TSDocParser | None = None) -> DocComment | None:
    comment = leading_comment_text(node)
    if comment is None:
        return None
    return (parser or get_comment_parser()).parse_string(comment)
