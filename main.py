"""Main entry point for the calculator importer"""

import argparse
import json
import logging
import sys
from pathlib import Path

from orchestrator import CalculatorImporter
from ui.progress import ConsoleProgress
from core.exceptions import CalcSheetError, CalculatorValidationError
from stages.s1_translation import DIALECTS
from stages.s3_validation import validate_calculator
from config import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert spreadsheet tables into calculator JSON",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help="Logging level (warnings report unresolved references)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Import a .tsv/.txt/.xlsx table")
    import_parser.add_argument("file", type=Path, help="Input table path")
    import_parser.add_argument("--name", default=settings.CALCULATOR_DEFAULT_NAME, help="Calculator name")
    import_parser.add_argument(
        "--description",
        default=settings.CALCULATOR_DEFAULT_DESCRIPTION,
        help="Calculator description"
    )
    import_parser.add_argument("--sheet", default=None, help="Worksheet name (.xlsx only)")
    import_parser.add_argument(
        "--dialect",
        choices=sorted(DIALECTS),
        default=settings.TARGET_DIALECT,
        help="Target expression dialect"
    )
    import_parser.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout")
    import_parser.add_argument(
        "--strict",
        action="store_true",
        help="Do not write output when validation fails"
    )
    import_parser.add_argument("--verbose", action="store_true", help="Show stage progress on stderr")

    validate_parser = subparsers.add_parser("validate", help="Validate a calculator JSON file")
    validate_parser.add_argument("file", type=Path, help="Calculator JSON path")

    return parser


def run_import(args) -> int:
    if not args.file.exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 2

    try:
        importer = CalculatorImporter(
            dialect=args.dialect,
            progress=ConsoleProgress() if args.verbose else None,
        )
        result = importer.import_from_file(
            str(args.file),
            name=args.name,
            description=args.description,
            sheet_name=args.sheet,
        )
    except CalcSheetError as e:
        print(f"✗ Import failed: {e}", file=sys.stderr)
        return 2

    report = importer.validate(result.calculator)
    for error in report.errors:
        print(f"  - {error}", file=sys.stderr)

    if args.strict:
        try:
            report.raise_for_errors()
        except CalculatorValidationError as e:
            print(f"✗ {e}", file=sys.stderr)
            return 1

    document = result.calculator.to_json(indent=settings.JSON_INDENT)
    if args.output:
        args.output.write_text(document + "\n", encoding="utf-8")
        print(f"✓ Calculator written to {args.output} ({len(result.calculator.cells)} cells)", file=sys.stderr)
    else:
        print(document)

    return 0 if report.valid else 1


def run_validate(args) -> int:
    if not args.file.exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 2

    try:
        document = json.loads(args.file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"✗ Could not read calculator: {e}", file=sys.stderr)
        return 2

    if not isinstance(document, dict):
        print("✗ Calculator document must be a JSON object", file=sys.stderr)
        return 2

    report = validate_calculator(document)
    if report.valid:
        print("✓ Validation passed")
        return 0

    print("✗ Validation failed:")
    for error in report.errors:
        print(f"  - {error}")
    return 1


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "import":
        return run_import(args)
    return run_validate(args)


if __name__ == "__main__":
    sys.exit(main())
