"""verityctl: validate data files against declarative contracts."""

from __future__ import annotations

import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Any

import click

import verity.constraints
from verity import __version__
from verity.config import VerityConfig, set_config
from verity.constraints.base import Constraint
from verity.errors import Errors, format_path
from verity.loader import load_contract_file, load_document

logger = logging.getLogger(__name__)


def handle_error(error: Exception, debug: bool) -> None:
    """Report a failed command on stderr and exit with status 1.

    Contract document errors carry an ``errors`` list, printed one entry
    per line under the message.

    Args:
        error: Exception raised by the command
        debug: Print the traceback instead of the message
    """
    if debug:
        traceback.print_exc()
    else:
        click.echo(f"Error: {error}", err=True)
        for detail in getattr(error, "errors", []):
            click.echo(f"  {detail}", err=True)
    sys.exit(1)


def constraint_types() -> list[dict[str, str]]:
    """List the error tokens of every built-in constraint."""
    types = []
    for name in sorted(verity.constraints.__all__):
        cls = getattr(verity.constraints, name)
        if isinstance(cls, type) and issubclass(cls, Constraint):
            types.append({"constraint": name, "type": cls.TYPE, "negated_type": cls.NEGATED_TYPE})
    return types


def format_report(valid: bool, errors: Errors) -> str:
    """Render an evaluation result as text."""
    if valid:
        return "valid"

    lines = [f"invalid ({len(errors)} errors)"]
    for record in errors:
        location = format_path(record["path"]) or "<root>"
        line = f"  {location}: {record['message'] or record['type']}"
        if record["data"]:
            line += f" {json.dumps(record['data'], sort_keys=True, default=str)}"
        lines.append(line)
    return "\n".join(lines)


@click.group()
@click.version_option(version=__version__, prog_name="verityctl")
@click.option('--config', '-c', type=click.Path(exists=True, path_type=Path), help='YAML configuration file')
@click.option('--debug', is_flag=True, help='Enable debug mode (show full tracebacks)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx: click.Context, config: Path | None, debug: bool, verbose: bool):
    """Verity CLI - Structural validation of data against contracts."""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        try:
            set_config(VerityConfig.from_yaml(config))
        except Exception as e:
            handle_error(e, debug)


@cli.command()
@click.argument('contract', type=click.Path(exists=True, path_type=Path))
@click.argument('input', type=click.Path(exists=True, path_type=Path))
@click.option('--format', '-f', 'output_format', type=click.Choice(['text', 'json']), default='text')
@click.option('--negated', is_flag=True, help='Require the input NOT to match the contract')
@click.pass_context
def check(ctx: click.Context, contract: Path, input: Path, output_format: str, negated: bool):
    """Check INPUT (JSON or YAML) against the CONTRACT document."""
    debug = ctx.obj.get('debug', False)

    try:
        built = load_contract_file(contract)
        data = load_document(input)

        if negated:
            valid, errors = built.negated_match(data)
        else:
            valid, errors = built.match(data)
        logger.info(f"Checked {input} against {contract}: {'valid' if valid else 'invalid'}")

        if output_format == 'json':
            result: dict[str, Any] = {"valid": valid, "errors": errors.to_list()}
            click.echo(json.dumps(result, indent=2, sort_keys=True, default=str))
        else:
            click.echo(format_report(valid, errors))
    except Exception as e:
        handle_error(e, debug)
        return

    if not valid:
        sys.exit(1)


@cli.command()
@click.argument('contract', type=click.Path(exists=True, path_type=Path))
@click.pass_context
def lint(ctx: click.Context, contract: Path):
    """Validate a CONTRACT document without evaluating any data."""
    debug = ctx.obj.get('debug', False)

    try:
        built = load_contract_file(contract)
        definitions = sum(1 for _ in built.each_definition())
        click.echo(f"{contract}: ok ({type(built).__name__}, {definitions} definitions)")
    except Exception as e:
        handle_error(e, debug)


@cli.command(name="types")
@click.option('--format', '-f', 'output_format', type=click.Choice(['text', 'json']), default='text')
def list_types(output_format: str):
    """List the error types reported by the built-in constraints."""
    types = constraint_types()
    if output_format == 'json':
        click.echo(json.dumps(types, indent=2))
        return

    width = max(len(entry["constraint"]) for entry in types)
    for entry in types:
        click.echo(f"{entry['constraint']:<{width}}  {entry['type']}  {entry['negated_type']}")


def main() -> None:
    """Entry point."""
    cli()


if __name__ == '__main__':
    main()
