#!/usr/bin/env python3
"""
cli.py
------
Command-line entry point for hugocheck.

Runs as a plain CLI or inside a GitHub Action, where inputs arrive as
`INPUT_<NAME>` environment variables.

Usage:
    hugocheck check ./site
    hugocheck check ./site --chatgpt-api-key sk-...
    hugocheck languages ./site

    # GitHub Actions
    INPUT_HUGO-FOLDER=./site hugocheck check
"""
import click
from pathlib import Path
from typing import Optional

from hugocheck.core.cli_decorators import hugocheck_cli_group
from hugocheck.core.exceptions import CheckerError
from hugocheck.core.logging_manager import handle_cli_error

HUGO_FOLDER_ENVVARS = ["HUGO_FOLDER", "INPUT_HUGO-FOLDER"]
API_KEY_ENVVARS = ["OPENAI_API_KEY", "INPUT_CHATGPT-API-KEY"]


@hugocheck_cli_group("checker")
def cli(ctx: click.Context) -> None:
    """
    hugocheck - Validate translated Hugo content.

    Checks front matter, required lists, slugs, duplicates and language
    structure of every folder that contains a hugo-checker.yaml.
    """
    pass


@cli.command()
@click.argument(
    "hugo_folder",
    type=click.Path(file_okay=False),
    envvar=HUGO_FOLDER_ENVVARS,
    required=True,
)
@click.option(
    "--chatgpt-api-key",
    envvar=API_KEY_ENVVARS,
    default=None,
    help="OpenAI API key for folders with chatgpt-spell-check enabled",
)
@click.pass_context
def check(ctx: click.Context, hugo_folder: str, chatgpt_api_key: Optional[str]) -> None:
    """
    Validate every governed folder of a Hugo site.

    Exits with status 1 on the first failed check.
    """
    from hugocheck.validators.checker import Checker, checker_version
    from hugocheck.validators.report import format_check_report

    logger = ctx.obj["logger"]

    click.echo(f"🔍 hugocheck {checker_version()}: checking {hugo_folder}\n")

    report = Checker(Path(hugo_folder), chatgpt_api_key, logger).run()

    click.echo(format_check_report(report))
    click.echo(report.stats.summary())

    if not report.passed:
        raise click.ClickException(report.fatal.describe())

    click.echo("Well done!")


@cli.command()
@click.argument(
    "hugo_folder",
    type=click.Path(exists=True, file_okay=False),
    envvar=HUGO_FOLDER_ENVVARS,
    required=True,
)
@click.pass_context
def languages(ctx: click.Context, hugo_folder: str) -> None:
    """
    List governed folders with their default and declared languages.
    """
    from hugocheck.dataclasses.ruleset import load_ruleset
    from hugocheck.validators.checker import discover_rulesets

    ruleset_files = discover_rulesets(Path(hugo_folder))
    if not ruleset_files:
        raise click.ClickException(f"No rule-set files found in {hugo_folder}")

    for ruleset_file in ruleset_files:
        try:
            ruleset = load_ruleset(ruleset_file)
        except CheckerError as e:
            handle_cli_error(ctx, e, "languages", {"ruleset": str(ruleset_file)})
            return

        click.echo(f"📁 {ruleset_file.parent}")
        click.echo(f"   default: {ruleset.default_language or '-'}")
        click.echo(f"   languages: {', '.join(ruleset.languages) or '-'}")
        if ruleset.check_language_structure:
            click.echo("   language structure: enforced")


if __name__ == "__main__":
    cli()
