from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class DocNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ClassVar[str] = "Node"


class DocPlainText(DocNode):
    kind: ClassVar[str] = "PlainText"
    text: str


class DocSoftBreak(DocNode):
    kind: ClassVar[str] = "SoftBreak"


class DocCodeSpan(DocNode):
    kind: ClassVar[str] = "CodeSpan"
    code: str


class DocErrorText(DocNode):
    kind: ClassVar[str] = "ErrorText"
    text: str
    message: str = ""


class DocInlineTag(DocNode):
    """An inline tag such as ``{@link Foo}``; ``raw`` keeps the source text."""

    kind: ClassVar[str] = "InlineTag"
    tag_name: str
    content: str = ""
    raw: str


class DocParagraph(DocNode):
    kind: ClassVar[str] = "Paragraph"
    nodes: list[DocNode] = Field(default_factory=list)


class DocFencedCode(DocNode):
    kind: ClassVar[str] = "FencedCode"
    language: str = ""
    code: str


class DocSection(DocNode):
    kind: ClassVar[str] = "Section"
    nodes: list[DocNode] = Field(default_factory=list)


class DocBlock(DocNode):
    kind: ClassVar[str] = "Block"
    tag_name: str
    content: DocSection = Field(default_factory=DocSection)


class DocParamBlock(DocBlock):
    kind: ClassVar[str] = "ParamBlock"
    parameter_name: str


class DocComment(DocNode):
    """Structured form of one ``/** ... */`` comment."""

    kind: ClassVar[str] = "Comment"
    summary_section: DocSection = Field(default_factory=DocSection)
    params: list[DocParamBlock] = Field(default_factory=list)
    type_params: list[DocParamBlock] = Field(default_factory=list)
    returns_block: DocBlock | None = None
    deprecated_block: DocBlock | None = None
    remarks_block: DocBlock | None = None
    custom_blocks: list[DocBlock] = Field(default_factory=list)
    modifier_tags: list[str] = Field(default_factory=list)

    def find_param(self, name: str) -> DocParamBlock | None:
        return next((block for block in self.params if block.parameter_name == name), None)

    def find_custom_block(self, tag_name: str) -> DocBlock | None:
        return next((block for block in self.custom_blocks if block.tag_name == tag_name), None)
