import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, List

from logger import logger
from .tsdoc_nodes import (
    DocBlock,
    DocCodeSpan,
    DocComment,
    DocErrorText,
    DocFencedCode,
    DocInlineTag,
    DocNode,
    DocParagraph,
    DocParamBlock,
    DocPlainText,
    DocSection,
    DocSoftBreak,
)

BLOCK_TAGS = frozenset({
    "@param",
    "@typeParam",
    "@returns",
    "@deprecated",
    "@remarks",
    "@privateRemarks",
    "@example",
    "@see",
    "@throws",
    "@defaultValue",
    "@decorator",
})

MODIFIER_TAGS = frozenset({
    "@public",
    "@internal",
    "@alpha",
    "@beta",
    "@experimental",
    "@override",
    "@sealed",
    "@virtual",
    "@readonly",
    "@eventProperty",
    "@packageDocumentation",
})

_FENCE = "```"
_TAG_RE = re.compile(r"@[A-Za-z][A-Za-z0-9]*")
_PARAM_NAME_RE = re.compile(r"(\[[^\]]*\]|[^\s\-]+)")


@dataclass
class _PendingBlock:
    tag_name: str | None
    lines: List[str] = field(default_factory=list)


class TSDocParser:
    """
    Parses TSDoc comments (``/** ... */``) into a `DocComment` tree.

    The parser holds only its tag configuration, so one instance can be shared
    for a whole run. Recoverable problems (undefined tags, unterminated code
    spans or fences) surface as `DocErrorText` nodes instead of exceptions.
    """

    def __init__(self, block_tags: Iterable[str] = BLOCK_TAGS, modifier_tags: Iterable[str] = MODIFIER_TAGS):
        self.block_tags = frozenset(block_tags)
        self.modifier_tags = frozenset(modifier_tags)

    def parse_string(self, text: str) -> DocComment:
        lines = self._comment_lines(text)
        if lines is None:
            logger.debug(f"Not a TSDoc comment: {text[:40]!r}")
            return DocComment()

        blocks: List[_PendingBlock] = [_PendingBlock(tag_name=None)]
        modifiers: List[str] = []
        in_fence = False

        for line in lines:
            stripped = line.strip()
            if stripped.startswith(_FENCE):
                in_fence = not in_fence
                blocks[-1].lines.append(line)
                continue
            if in_fence:
                blocks[-1].lines.append(line)
                continue

            cuts = self._tag_offsets(stripped)
            if not cuts:
                blocks[-1].lines.append(line)
                continue
            if cuts[0] > 0:
                blocks[-1].lines.append(stripped[:cuts[0]].rstrip())
            for start, end in zip(cuts, cuts[1:] + [len(stripped)]):
                self._start_tag(stripped[start:end].rstrip(), blocks, modifiers)

        return self._assemble(blocks, modifiers)

    def _tag_offsets(self, line: str) -> List[int]:
        """Offsets of defined tags that start a block or mark a modifier.

        A tag counts at the start of the line or after whitespace, and never
        inside a code span.
        """
        offsets = []
        for match in _TAG_RE.finditer(line):
            start, end = match.span()
            if start > 0 and not line[start - 1].isspace():
                continue
            if end < len(line) and not line[end].isspace():
                continue
            if match.group(0) not in self.block_tags | self.modifier_tags:
                continue
            if line.count("`", 0, start) % 2:
                continue
            offsets.append(start)
        return offsets

    def _start_tag(self, segment: str, blocks: List[_PendingBlock], modifiers: List[str]):
        tag = _TAG_RE.match(segment).group(0)
        rest = segment[len(tag):].strip()
        if tag in self.modifier_tags:
            modifiers.append(tag)
            if rest:
                blocks[-1].lines.append(rest)
        else:
            blocks.append(_PendingBlock(tag_name=tag, lines=[rest]))

    def _assemble(self, blocks: List[_PendingBlock], modifiers: List[str]) -> DocComment:
        summary = self._build_section(blocks[0].lines)
        params: List[DocParamBlock] = []
        type_params: List[DocParamBlock] = []
        returns_block = deprecated_block = remarks_block = None
        custom_blocks: List[DocBlock] = []

        for pending in blocks[1:]:
            tag = pending.tag_name
            if tag in ("@param", "@typeParam"):
                block = self._param_block(tag, pending.lines)
                (params if tag == "@param" else type_params).append(block)
                continue

            block = DocBlock(tag_name=tag, content=self._build_section(pending.lines))
            if tag == "@returns":
                returns_block = returns_block or block
            elif tag == "@deprecated":
                deprecated_block = deprecated_block or block
            elif tag == "@remarks":
                remarks_block = remarks_block or block
            else:
                custom_blocks.append(block)

        return DocComment(
            summary_section=summary,
            params=params,
            type_params=type_params,
            returns_block=returns_block,
            deprecated_block=deprecated_block,
            remarks_block=remarks_block,
            custom_blocks=custom_blocks,
            modifier_tags=modifiers,
        )

    def _param_block(self, tag: str, lines: List[str]) -> DocParamBlock:
        header = lines[0] if lines else ""

        # JSDoc-style "{type}" prefix is tolerated and dropped
        if header.startswith("{"):
            close = header.find("}")
            header = header[close + 1:].lstrip() if close != -1 else ""

        match = _PARAM_NAME_RE.match(header)
        name = match.group(0) if match else ""
        remainder = header[match.end():].lstrip() if match else header
        if name.startswith("["):
            name = name[1:-1].split("=", 1)[0].strip()
        if remainder.startswith("-"):
            remainder = remainder[1:].lstrip()

        return DocParamBlock(
            tag_name=tag,
            parameter_name=name,
            content=self._build_section([remainder] + lines[1:]),
        )

    @staticmethod
    def _comment_lines(text: str) -> List[str] | None:
        text = text.strip()
        if not text.startswith("/**") or not text.endswith("*/") or len(text) < 5:
            return None

        body = text[3:-2]
        lines = []
        for raw in body.splitlines():
            line = raw.lstrip()
            if line.startswith("*"):
                line = line[1:]
            elif line:
                # Continuation lines without a leading "*" keep their text
                lines.append(line.rstrip())
                continue
            if line.startswith(" "):
                line = line[1:]
            lines.append(line.rstrip())
        return lines

    def _build_section(self, lines: List[str]) -> DocSection:
        nodes: List[DocNode] = []
        paragraph: List[str] = []

        def flush():
            if paragraph:
                nodes.append(DocParagraph(nodes=self._parse_inline(paragraph)))
                paragraph.clear()

        i = 0
        while i < len(lines):
            stripped = lines[i].strip()
            if stripped.startswith(_FENCE):
                flush()
                closing = next(
                    (j for j in range(i + 1, len(lines)) if lines[j].strip().startswith(_FENCE)),
                    None,
                )
                if closing is None:
                    nodes.append(DocParagraph(nodes=self._error_lines(lines[i:], "Unterminated code fence")))
                    break
                nodes.append(DocFencedCode(
                    language=stripped[len(_FENCE):].strip(),
                    code="\n".join(lines[i + 1:closing]),
                ))
                i = closing + 1
                continue
            if not stripped:
                flush()
            else:
                paragraph.append(stripped)
            i += 1

        flush()
        return DocSection(nodes=nodes)

    @staticmethod
    def _error_lines(lines: List[str], message: str) -> List[DocNode]:
        nodes: List[DocNode] = []
        for line in lines:
            nodes.append(DocErrorText(text=line, message=message))
            nodes.append(DocSoftBreak())
        return nodes

    def _parse_inline(self, lines: List[str]) -> List[DocNode]:
        nodes: List[DocNode] = []
        for line in lines:
            self._parse_line(line, nodes)
            nodes.append(DocSoftBreak())
        return nodes

    def _parse_line(self, line: str, nodes: List[DocNode]):
        buffer: List[str] = []

        def flush_text():
            if buffer:
                nodes.append(DocPlainText(text="".join(buffer)))
                buffer.clear()

        i = 0
        while i < len(line):
            ch = line[i]

            if ch == "\\" and i + 1 < len(line) and not line[i + 1].isalnum():
                buffer.append(line[i + 1])
                i += 2
                continue

            if ch == "`":
                end = line.find("`", i + 1)
                flush_text()
                if end == -1:
                    nodes.append(DocErrorText(text="`", message="Unterminated code span"))
                    i += 1
                else:
                    nodes.append(DocCodeSpan(code=line[i + 1:end]))
                    i = end + 1
                continue

            if line.startswith("{@", i):
                end = line.find("}", i)
                flush_text()
                if end == -1:
                    nodes.append(DocErrorText(text="{", message="Unterminated inline tag"))
                    i += 1
                    continue
                raw = line[i:end + 1]
                tag_name, _, content = raw[1:-1].partition(" ")
                nodes.append(DocInlineTag(tag_name=tag_name, content=content.strip(), raw=raw))
                i = end + 1
                continue

            if ch == "@" and (i == 0 or line[i - 1].isspace()):
                match = _TAG_RE.match(line, i)
                if match and match.group(0) not in self.block_tags | self.modifier_tags:
                    flush_text()
                    nodes.append(DocErrorText(text=match.group(0), message="Undefined tag"))
                    i = match.end()
                    continue

            buffer.append(ch)
            i += 1

        flush_text()


@lru_cache(maxsize=None)
def get_comment_parser() -> TSDocParser:
    """Process-wide comment parser, created on first use."""
    return TSDocParser()
