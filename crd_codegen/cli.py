"""
Command-line interface for generating Java model classes from CRDs.

Loads CustomResourceDefinition manifests, compiles every version and
writes one source file per generated class below the target directory.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from . import __version__
from .codegen import get_generator, list_supported_languages
from .codegen.core.config import GeneratorConfig, load_config
from .codegen.core.crd import compile_crd
from .codegen.core.errors import GeneratorError
from .codegen.core.generator import generate_code
from .codegen.core.result import CompilationResult
from .codegen.registry import get_language_info
from .logging_config import get_logger, setup_logging
from .utils import CRDLoaderError, load_crds

logger = get_logger(__name__)

# Initialize rich console
console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def _key_value(option: str):
    """Build an argparse type parsing ``KEY=VALUE`` pairs."""

    def parse(text: str):
        key, sep, value = text.partition("=")
        if not sep or not key or not value:
            raise argparse.ArgumentTypeError(f"{option} expects KEY=VALUE, got {text!r}")
        return key.strip(), value.strip()

    return parse


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="crd-codegen",
        description="Generate Java model classes from Kubernetes CustomResourceDefinitions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  crd-codegen --source crds/ --target src/main/java
  crd-codegen -s https://example.com/crd.yaml --dry-run
  crd-codegen -s crd.yaml -t out --existing-type v1.Foo=com.example.Foo
        """.strip(),
    )

    input_group = parser.add_argument_group("input and output")
    input_group.add_argument(
        "--source",
        "-s",
        action="append",
        default=[],
        metavar="PATH_OR_URL",
        help="CRD manifest file, directory or URL (repeatable)",
    )
    input_group.add_argument(
        "--target",
        "-t",
        metavar="DIR",
        help="Directory receiving the generated sources",
    )
    input_group.add_argument(
        "--language",
        "-l",
        default="java",
        help="Target language (default: java)",
    )
    input_group.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for code generation"
    )

    compiler_group = parser.add_argument_group("compiler options")
    compiler_group.add_argument(
        "--existing-type",
        action="append",
        default=[],
        type=_key_value("--existing-type"),
        metavar="QUALIFIED=OVERRIDE",
        help="Use an existing type instead of generating a class (repeatable)",
    )
    compiler_group.add_argument(
        "--package-override",
        action="append",
        default=[],
        type=_key_value("--package-override"),
        metavar="GROUP=PACKAGE",
        help="Package for an API group instead of the reversed group name (repeatable)",
    )
    compiler_group.add_argument(
        "--preserve-unknown-fields",
        action="store_true",
        help="Add an additional-properties map to every generated class",
    )
    compiler_group.add_argument(
        "--no-enum-uppercase",
        action="store_true",
        help="Keep the case of string enum values in constant names",
    )
    compiler_group.add_argument(
        "--no-generated-annotations",
        action="store_true",
        help="Don't add @Generated to generated classes",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Compile and show a summary without writing files",
    )
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    info_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge the configuration file with command-line options."""
    config = load_config(args.language, config_file=args.config)

    overrides = {}
    if args.existing_type:
        overrides["existing_java_types"] = {
            **config.existing_java_types,
            **dict(args.existing_type),
        }
    if args.package_override:
        overrides["package_overrides"] = {
            **config.package_overrides,
            **dict(args.package_override),
        }
    if args.preserve_unknown_fields:
        overrides["preserve_unknown_fields"] = True
    if args.no_enum_uppercase:
        overrides["enum_uppercase"] = False
    if args.no_generated_annotations:
        overrides["generated_annotations"] = False

    return config.with_overrides(**overrides) if overrides else config


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.list_languages:
        return _list_languages()

    if not args.source:
        parser.error("at least one --source is required")
    if not args.target and not args.dry_run:
        parser.error("--target is required unless --dry-run is given")

    try:
        return _run(args)
    except (GeneratorError, CRDLoaderError, CLIError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        logger.debug("Generation aborted", exc_info=True)
        return 1
    except FileNotFoundError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _run(args: argparse.Namespace) -> int:
    config = build_config(args)
    generator = get_generator(args.language, config)
    resolver = generator.create_resolver()

    crds = load_crds(args.source)
    if not crds:
        raise CLIError("No CustomResourceDefinition found in the given sources")

    results: List[CompilationResult] = []
    for source, document in crds:
        name = (document.get("metadata") or {}).get("name", "<unnamed>")
        logger.info("Compiling %s from %s", name, source)
        results.extend(compile_crd(resolver, document))

    generation = generate_code(generator, results)
    if not generation.success:
        raise CLIError(generation.error_message)

    _print_summary(results)

    for warning in generation.warnings:
        console.print(f"  [yellow]•[/yellow] {warning}")

    if args.dry_run:
        console.print(
            f"[yellow]Dry run:[/yellow] {len(generation.files)} file(s) not written"
        )
        return 0

    written = write_files(generation.files, Path(args.target))
    console.print(
        f"[green]✓[/green] Wrote {len(written)} file(s) to [cyan]{args.target}[/cyan]"
    )
    return 0


def write_files(files: Dict[str, str], target: Path) -> List[Path]:
    """Write generated sources below a target directory."""
    written = []
    for relative_path, code in files.items():
        output_path = target / relative_path
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(code, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Failed to write {output_path}: {e}") from e
        logger.debug("Wrote %s", output_path)
        written.append(output_path)
    return written


def _print_summary(results: List[CompilationResult]):
    table = Table(
        title="📊 Generated Types",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Resource", style="bold")
    table.add_column("Version", style="green")
    table.add_column("Classes", justify="right")
    table.add_column("Enums", justify="right")
    table.add_column("Fields", justify="right")

    for result in results:
        resource = result.custom_resource
        summary = result.summary()
        table.add_row(
            resource.qualified_name if resource else result.root.qualified_name,
            resource.version if resource else "",
            str(summary["top_level"]),
            str(summary["inner"]),
            str(summary["fields"]),
        )

    console.print(table)


def _list_languages() -> int:
    """List supported languages."""
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(language, info["file_extension"], info["class"], aliases)

    console.print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
