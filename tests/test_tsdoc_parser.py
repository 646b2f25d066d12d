"""Tests for the TSDoc comment parser."""

from extractor.render import render_section
from extractor.tsdoc_nodes import (
    DocCodeSpan,
    DocErrorText,
    DocFencedCode,
    DocInlineTag,
    DocParagraph,
    DocPlainText,
    DocSoftBreak,
)
from extractor.tsdoc_parser import TSDocParser, get_comment_parser


def parse(text):
    return TSDocParser().parse_string(text)


def test_summary_paragraph_nodes():
    comment = parse("/**\n * Adds two `numbers`.\n */")
    paragraph = comment.summary_section.nodes[0]
    assert isinstance(paragraph, DocParagraph)
    assert paragraph.nodes == [
        DocPlainText(text="Adds two "),
        DocCodeSpan(code="numbers"),
        DocPlainText(text="."),
        DocSoftBreak(),
    ]


def test_text_on_opening_line():
    comment = parse("/** Adds two numbers.\n* @param a First\n* @returns Sum\n*/")
    assert render_section(comment.summary_section) == "Adds two numbers."
    assert render_section(comment.returns_block.content) == "Sum"


def test_param_forms():
    comment = parse(
        "/**\n"
        " * @param a - With hyphen\n"
        " * @param b Without hyphen\n"
        " * @param {string} c JSDoc type prefix\n"
        " * @param [d] Bracketed name\n"
        " */"
    )
    names = [block.parameter_name for block in comment.params]
    assert names == ["a", "b", "c", "d"]
    assert render_section(comment.find_param("a").content) == "With hyphen"
    assert render_section(comment.find_param("b").content) == "Without hyphen"
    assert render_section(comment.find_param("c").content) == "JSDoc type prefix"
    assert render_section(comment.find_param("d").content) == "Bracketed name"
    assert comment.find_param("missing") is None


def test_multiline_param_description():
    comment = parse("/**\n * @param a - First line\n *   continues here\n */")
    assert render_section(comment.find_param("a").content) == "First line continues here"


def test_type_params_are_separate():
    comment = parse("/**\n * @typeParam T - Element type\n * @param a - Value\n */")
    assert [b.parameter_name for b in comment.type_params] == ["T"]
    assert [b.parameter_name for b in comment.params] == ["a"]


def test_deprecated_and_remarks():
    comment = parse("/**\n * Old.\n * @remarks Kept for callers.\n * @deprecated Use bar.\n */")
    assert render_section(comment.deprecated_block.content) == "Use bar."
    assert render_section(comment.remarks_block.content) == "Kept for callers."


def test_example_block_with_fence():
    comment = parse("/**\n * Runs.\n * @example\n * ```ts\n * foo();\n *   bar();\n * ```\n */")
    block = comment.find_custom_block("@example")
    fence = [n for n in block.content.nodes if isinstance(n, DocFencedCode)][0]
    assert fence.language == "ts"
    assert fence.code == "foo();\n  bar();"


def test_tags_inside_fence_are_code():
    comment = parse("/**\n * @example\n * ```\n * @param x not a tag\n * ```\n */")
    assert comment.params == []
    fence = comment.custom_blocks[0].content.nodes[0]
    assert fence.code == "@param x not a tag"


def test_custom_blocks_keep_order():
    comment = parse("/**\n * @see other\n * @example first\n * @example second\n */")
    assert [b.tag_name for b in comment.custom_blocks] == ["@see", "@example", "@example"]


def test_modifier_tags():
    comment = parse("/**\n * Does it.\n * @beta\n * @internal\n */")
    assert comment.modifier_tags == ["@beta", "@internal"]
    assert render_section(comment.summary_section) == "Does it."


def test_undefined_tag_becomes_error_text():
    comment = parse("/**\n * @return Sum\n */")
    assert comment.returns_block is None
    nodes = comment.summary_section.nodes[0].nodes
    assert nodes[0] == DocErrorText(text="@return", message="Undefined tag")
    assert render_section(comment.summary_section) == "@return Sum"


def test_unterminated_code_span():
    comment = parse("/** Uses `broken */")
    nodes = comment.summary_section.nodes[0].nodes
    assert DocErrorText(text="`", message="Unterminated code span") in nodes
    assert render_section(comment.summary_section) == "Uses `broken"


def test_unterminated_fence_is_error_text():
    comment = parse("/**\n * @example\n * ```ts\n * foo();\n */")
    block = comment.custom_blocks[0]
    assert not any(isinstance(n, DocFencedCode) for n in block.content.nodes)
    assert isinstance(block.content.nodes[0].nodes[0], DocErrorText)


def test_inline_tag():
    comment = parse("/** See {@link Foo.bar | bar}. */")
    tag = comment.summary_section.nodes[0].nodes[1]
    assert isinstance(tag, DocInlineTag)
    assert tag.tag_name == "@link"
    assert tag.content == "Foo.bar | bar"
    assert render_section(comment.summary_section) == "See {@link Foo.bar | bar}."


def test_escaped_at_sign():
    comment = parse("/** Mail me \\@home. */")
    assert render_section(comment.summary_section) == "Mail me @home."


def test_paragraphs_split_on_blank_lines():
    comment = parse("/**\n * First.\n *\n * Second.\n */")
    assert len(comment.summary_section.nodes) == 2
    assert render_section(comment.summary_section) == "First."


def test_non_tsdoc_comments_are_empty():
    for text in ["// line comment", "/* block */"]:
        comment = parse(text)
        assert comment.summary_section.nodes == []
        assert comment.params == []


def test_shared_parser_is_reused():
    assert get_comment_parser() is get_comment_parser()


def test_block_tags_in_the_middle_of_a_line():
    comment = parse("/** Gets x. @param v - The value @returns The x */")
    assert render_section(comment.summary_section) == "Gets x."
    assert render_section(comment.find_param("v").content) == "The value"
    assert render_section(comment.returns_block.content) == "The x"


def test_mid_line_modifier_tag():
    comment = parse("/** Does it. @beta */")
    assert comment.modifier_tags == ["@beta"]
    assert render_section(comment.summary_section) == "Does it."


def test_tags_need_whitespace_before_them():
    comment = parse("/** Mail admin@returns.example or run `x @returns y`. */")
    assert comment.returns_block is None
    assert render_section(comment.summary_section) == "Mail admin@returns.example or run `x @returns y`."


def test_find_custom_block_returns_first_match():
    comment = parse("/**\n * @example first\n * @example second\n */")
    assert render_section(comment.find_custom_block("@example").content) == "first"
    assert comment.find_custom_block("@see") is None
