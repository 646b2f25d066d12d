class ExtractionError(Exception):
    """Base exception for documentation extraction."""

    pass


class UnexpectedDocNodeError(ExtractionError):
    """Raised when a parsed comment contains a node kind the renderer does not know."""

    def __init__(self, kind: str):
        super().__init__(f"Unexpected node type: {kind}")
        self.kind = kind


class MissingDocumentationError(ExtractionError):
    """Raised in strict mode when a documented section is required but absent."""

    pass
