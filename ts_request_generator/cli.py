#!/usr/bin/env python3
"""Command-line interface for the TypeScript request generator."""

import argparse
import contextlib
import json
import logging
import sys
import traceback
from collections.abc import Generator
from pathlib import Path

import yaml

from ts_request_generator.constants import (
    DEFAULT_FILE_NAME,
    DEFAULT_REQUEST_ACTION_IMPORT,
    EXIT_FILE_NOT_FOUND,
    EXIT_GENERATION_ERROR,
    EXIT_INVALID_SPEC,
    EXIT_PARTIAL_OUTPUT,
    EXIT_SUCCESS,
    FORM_DATA_LOCATION,
)
from ts_request_generator.errors import GenerationReport
from ts_request_generator.generator.template_engine import RequestCodeGenerator, TSTemplateEngine
from ts_request_generator.parser.oas_parser import OASParser
from ts_request_generator.utils.file_utils import write_files_to_disk

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def parse_command_line_args(args: list[str] | None = None) -> argparse.Namespace:
    """Create and configure the command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Generate typed TypeScript request actions from an OpenAPI/Swagger description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s spec.json
  %(prog)s spec.yaml --output ./src/api --file-name petstore.ts
  %(prog)s spec.json --form-data-location formData --verbose
        """,
    )
    parser.add_argument(
        "spec_file",
        type=Path,
        help="Path to API description file (JSON or YAML)",
        metavar="SPEC_FILE",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path("./generated"),
        help="Output directory for the generated module (default: %(default)s)",
        dest="output_dir",
    )
    parser.add_argument(
        "--file-name",
        "-f",
        default=DEFAULT_FILE_NAME,
        help="Name of the generated TypeScript module (default: %(default)s)",
        dest="file_name",
    )
    parser.add_argument(
        "--request-action-import",
        "-i",
        default=DEFAULT_REQUEST_ACTION_IMPORT,
        help="Module that exports createRequestAction (default: %(default)s)",
        dest="request_action_import",
    )
    parser.add_argument(
        "--form-data-location",
        default=FORM_DATA_LOCATION,
        help="Parameter location routed to the form-data group (default: %(default)s)",
        dest="form_data_location",
    )
    parser.add_argument(
        "--template-dir",
        "-t",
        type=Path,
        help="Custom template directory (optional)",
        dest="template_dir",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings, such as dropped parameters, as failures",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    parsed_args = parser.parse_args(args)

    # Validate spec file exists
    if not parsed_args.spec_file.exists():
        parser.error(f"Specification file not found: {parsed_args.spec_file}")

    return parsed_args


def configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=_LOG_FORMAT)
    # Route ParameterClassificationWarning and friends through the log handler
    logging.captureWarnings(True)


def print_verbose_info(*, path_count: int, operation_count: int, definition_count: int) -> None:
    """Print verbose information about the parsed description."""
    print(f"Parsed {path_count} paths")
    print(f"Parsed {operation_count} operations")
    print(f"Found {definition_count} definitions")


def print_report(report: GenerationReport) -> None:
    """Print collected errors to stderr; warnings are already logged as they occur."""
    for error in report.errors:
        print(f"Error: {error}", file=sys.stderr)


@contextlib.contextmanager
def backup_output_file(output_file: Path) -> Generator[None, None, None]:
    """A context manager that restores the previous output file if generation fails."""
    previous_content = output_file.read_text(encoding="utf-8") if output_file.is_file() else None

    try:
        yield
    except Exception:
        if previous_content is not None:
            print(
                "Error: Generation failed. Restoring original content.",
                file=sys.stderr,
            )
            output_file.write_text(previous_content, encoding="utf-8")
        raise


def generate_requests_from_spec(
    *,
    spec_file: Path,
    output_dir: Path,
    file_name: str = DEFAULT_FILE_NAME,
    request_action_import: str = DEFAULT_REQUEST_ACTION_IMPORT,
    form_data_location: str = FORM_DATA_LOCATION,
    template_dir: Path | None = None,
    verbose: bool = False,
) -> tuple[dict[Path, str], GenerationReport]:
    """Generate the TypeScript request module from an API description file."""
    parser = OASParser()
    parsed_spec = parser.parse_file(spec_file)

    if verbose:
        print_verbose_info(
            path_count=len(parsed_spec.paths),
            operation_count=len(parsed_spec.operations),
            definition_count=len(parsed_spec.definitions),
        )

    generator = RequestCodeGenerator(
        TSTemplateEngine(template_dir),
        request_action_import=request_action_import,
    )
    return generator.generate_client(
        parsed_spec,
        output_dir,
        file_name=file_name,
        form_data_location=form_data_location,
    )


def main(args: list[str] | None = None) -> int:
    """Generate a TypeScript request module from an API description."""
    parsed_args = parse_command_line_args(args)
    configure_logging(verbose=parsed_args.verbose)

    try:
        with backup_output_file(parsed_args.output_dir / parsed_args.file_name):
            generated_files, report = generate_requests_from_spec(
                spec_file=parsed_args.spec_file,
                output_dir=parsed_args.output_dir,
                file_name=parsed_args.file_name,
                request_action_import=parsed_args.request_action_import,
                form_data_location=parsed_args.form_data_location,
                template_dir=parsed_args.template_dir,
                verbose=parsed_args.verbose,
            )

            # Write files to disk
            write_files_to_disk(generated_files)

        if parsed_args.verbose:
            print(f"Generated {len(generated_files)} files:")
            for file_path in sorted(generated_files.keys()):
                print(f"  {file_path}")

        print_report(report)
        if not report.ok or (parsed_args.strict and report.warnings):
            print(
                f"Requests generated with {len(report.errors)} errors and {len(report.warnings)} warnings "
                f"in {parsed_args.output_dir}",
                file=sys.stderr,
            )
            return EXIT_PARTIAL_OUTPUT

        print(f"Requests generated successfully in {parsed_args.output_dir}")
        return EXIT_SUCCESS

    except FileNotFoundError:
        print(f"Error: Specification file not found: {parsed_args.spec_file}", file=sys.stderr)
        return EXIT_FILE_NOT_FOUND
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        print(f"Error: Invalid specification file: {e}", file=sys.stderr)
        return EXIT_INVALID_SPEC
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if parsed_args.verbose:
            traceback.print_exc()
        return EXIT_GENERATION_ERROR


if __name__ == "__main__":
    sys.exit(main())
