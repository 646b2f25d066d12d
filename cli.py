"""Command-line entry point: ts-api-docs <inputFile> <outputFile> [className]."""

import argparse
import sys
from pathlib import Path

from datamodels import ExtractionOptions
from extractor.errors import MissingDocumentationError
from extractor_utils import extract_api_docs, save_method_docs_to_json
from logger import logger


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="ts-api-docs",
        description="Extract TSDoc method documentation from a TypeScript module as JSON.",
    )
    parser.add_argument("input_file", help="TypeScript module to document")
    parser.add_argument("output_file", help="Where to write the JSON array")
    parser.add_argument("class_name", nargs="?", default=None, help="Only document methods of this class")
    parser.add_argument("--strict", action="store_true", help="Fail on methods without a description")
    parser.add_argument("--import-depth", type=int, default=1, help="Relative import hops to follow for shapes")
    parser.add_argument("--log-level", default=None, help="Logging level (e.g. DEBUG, WARNING)")
    return parser


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    if args.log_level:
        logger.setLevel(args.log_level.upper())

    input_path = Path(args.input_file)
    if not input_path.exists():
        logger.error(f"File {args.input_file} does not exist")
        return 1

    if args.import_depth < 1:
        logger.error("--import-depth must be at least 1")
        return 1

    options = ExtractionOptions(
        class_name=args.class_name,
        strict=args.strict,
        import_depth=args.import_depth,
    )
    try:
        docs = extract_api_docs(input_path, options)
    except MissingDocumentationError as e:
        logger.error(str(e))
        return 1

    save_method_docs_to_json(docs, args.output_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
