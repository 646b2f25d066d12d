from pydantic import BaseModel, ConfigDict, Field


class ShapeField(BaseModel):
    name: str
    type: str
    description: str = ""
    required: bool = True


class ParameterDoc(BaseModel):
    name: str
    type: str
    description: str = ""
    required: bool = True
    parameters: list[ShapeField] = Field(default_factory=list)  # fields of a matching shape


class ExampleCode(BaseModel):
    content: str
    language: str = ""


class ReturnDoc(BaseModel):
    type: str = "void"
    description: str = ""


class MethodDoc(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    method_name: str = Field(alias="methodName")
    description: str = ""
    example: ExampleCode | None = None
    parameters: list[ParameterDoc] = Field(default_factory=list)
    deprecated: str | None = None  # None means "not deprecated"
    returns: ReturnDoc = Field(default_factory=ReturnDoc)


class ExtractionOptions(BaseModel):
    """Settings for one extraction run."""

    model_config = ConfigDict(frozen=True)

    class_name: str | None = None
    strict: bool = False
    import_depth: int = Field(default=1, ge=1)
