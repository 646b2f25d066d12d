from functools import lru_cache
from pathlib import Path
from typing import Iterator, List, Union

import tree_sitter_typescript
from pydantic import BaseModel, ConfigDict
from tree_sitter import Language, Node, Parser, Tree

from logger import logger

IMPORT_EXTENSION = ".ts"

_DIALECTS = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


@lru_cache(maxsize=None)
def get_parser(dialect: str = "typescript") -> Parser:
    return Parser(Language(_DIALECTS[dialect]()))


def node_text(node: Node | None) -> str:
    if node is None:
        return ""
    return node.text.decode("utf8")


class SourceUnit(BaseModel):
    """A parsed TypeScript module: its text plus the syntax tree built from it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: Path | None = None
    text: str
    tree: Tree
    dialect: str = "typescript"

    @property
    def root(self) -> Node:
        return self.tree.root_node


def parse_source(text: str, path: Union[str, Path, None] = None) -> SourceUnit:
    path = Path(path) if path is not None else None
    dialect = "tsx" if path is not None and path.suffix == ".tsx" else "typescript"
    tree = get_parser(dialect).parse(text.encode("utf8"))
    return SourceUnit(path=path, text=text, tree=tree, dialect=dialect)


def load_source_unit(path: Union[str, Path]) -> SourceUnit:
    path = Path(path)
    return parse_source(path.read_text(encoding="utf8"), path)


def iter_relative_imports(unit: SourceUnit) -> Iterator[str]:
    """Yields the specifiers of `import ... from "./x"` statements, in source order."""
    stack = [unit.root]
    while stack:
        node = stack.pop()
        if node.type == "import_statement":
            source = node.child_by_field_name("source")
            specifier = node_text(source)[1:-1]
            if specifier.startswith("."):
                yield specifier
            continue
        stack.extend(reversed(node.children))


def load_local_imports(unit: SourceUnit, depth: int = 1) -> List[SourceUnit]:
    """
    Loads the modules that `unit` imports through relative specifiers.

    Each specifier is resolved against the importing file's directory with
    IMPORT_EXTENSION appended. Package imports are ignored and missing files
    are logged and skipped. Only direct imports are followed unless `depth`
    is raised; a file is never loaded twice.

    Args:
        unit (SourceUnit): The primary module.
        depth (int): How many import hops to follow.

    Returns:
        List[SourceUnit]: Imported modules in discovery order.
    """
    if unit.path is None:
        logger.debug("Source unit has no path; relative imports are not resolved")
        return []

    seen = {unit.path.resolve()}
    result: List[SourceUnit] = []
    frontier = [unit]

    for _ in range(depth):
        next_frontier: List[SourceUnit] = []
        for importer in frontier:
            if importer.path is None:
                continue
            for specifier in iter_relative_imports(importer):
                import_path = importer.path.parent / f"{specifier}{IMPORT_EXTENSION}"
                if not import_path.is_file():
                    logger.warning(f"File in import ({import_path}) does not exist")
                    continue
                resolved = import_path.resolve()
                if resolved in seen:
                    continue
                seen.add(resolved)
                imported = load_source_unit(import_path)
                result.append(imported)
                next_frontier.append(imported)
        frontier = next_frontier

    return result
