import json
from pathlib import Path
from typing import List, Union

from datamodels import ExtractionOptions, MethodDoc
from extractor.base import MethodDocExtractor
from extractor.shapes import build_shape_dictionary
from extractor.source_unit import load_local_imports, load_source_unit
from extractor.typescript_extractor import TypeScriptMethodDocExtractor
from logger import logger


def extract_api_docs(
    file_path: Union[str, Path],
    options: ExtractionOptions | None = None,
    extractor: MethodDocExtractor | None = None,
) -> List[MethodDoc]:
    """
    Extracts method documentation from one TypeScript module.

    The module's relative imports are loaded first so that parameter types
    declared there can be expanded; the shape dictionary is complete before
    any method record is built.

    Args:
        file_path (str | Path): Module to document.
        options (ExtractionOptions | None): Class filter, strictness and import depth.
        extractor (MethodDocExtractor | None): Defaults to the TypeScript extractor.

    Returns:
        List[MethodDoc]: Records in source order.
    """
    options = options or ExtractionOptions()
    extractor = extractor or TypeScriptMethodDocExtractor(options)

    if Path(file_path).suffix not in extractor.suffix:
        logger.warning(f"{file_path} does not have a {'/'.join(extractor.suffix)} suffix; parsing as TypeScript")

    unit = load_source_unit(file_path)
    imports = load_local_imports(unit, depth=options.import_depth)
    shapes = build_shape_dictionary([unit, *imports])
    logger.debug(f"Collected {len(shapes)} shapes from {1 + len(imports)} modules")

    docs = extractor.extract_method_docs(unit, shapes)
    logger.info(f"Extracted {len(docs)} methods from {file_path}")
    return docs


def save_method_docs_to_json(
    docs: List[MethodDoc],
    output_path: Union[str, Path]
):
    """
    Saves extracted method records to a JSON file.

    Args:
        docs (List[MethodDoc]): Output from `extract_api_docs`
        output_path (str | Path): Where to write the JSON file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    json_data = [doc.model_dump(by_alias=True) for doc in docs]
    output_path.write_text(json.dumps(json_data, indent=2), encoding="utf8")

    logger.info(f"Saved {len(docs)} method records to {output_path}")
