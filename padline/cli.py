"""CLI interface for padline."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from padline.config import LintSettings, RulesSettings, get_settings, set_settings
from padline.formatters import format_as_json, format_as_sarif
from padline.models import FileReport, LintResult
from padline.pipeline.pipeline import run_pipeline
from padline.pipeline.rules import PaddingRule, RuleConfigError, get_ruleset_with_descriptions
from padline.pipeline.rules_factory import build_rules

console = Console()

EXIT_CONFIG_ERROR = 2


def setup_logging(log_level: str) -> None:
    """Configure logging with rich handler."""
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _display_report(report: FileReport) -> None:
    """Display the violations of one file."""
    if not report.violations and not report.fixed:
        return

    console.print(f"\n[bold]{report.path}[/bold]")
    for violation in report.violations:
        marker = "[green]fixable[/green]" if violation.fixable else "[dim]manual[/dim]"
        console.print(
            f"  [cyan]{violation.line}:{violation.column}[/cyan]  "
            f"{violation.message}  [dim]{violation.requirement.value}[/dim] {marker}"
        )
    if report.fixed:
        console.print(f"  [green]✓[/green] {report.fixed} fix(es) applied")


def display_failed_files(result: LintResult, show_details: bool) -> None:
    """Display failed files with optional error details."""
    if not result.failed_files:
        return

    console.print("\n[bold red]Failed Files:[/bold red]")
    for file_path, error in result.failed_files.items():
        console.print(f"  [red]✗[/red] {file_path}")
        if show_details:
            console.print(f"    [dim]{error}[/dim]")


def display_summary(result: LintResult) -> None:
    """Display a summary line of the lint run."""
    if result.violation_count == 0:
        console.print(
            f"\n[bold green]No padding violations[/bold green] in {result.success_count} file(s)"
            + (f", {result.fixed_count} fix(es) applied" if result.fixed_count else "")
        )
        return

    fixable = sum(report.fixable_count for report in result.reports)
    console.print(
        f"\n[bold yellow]{result.violation_count} violation(s)[/bold yellow] "
        f"in {result.success_count} file(s) ([green]{fixable} fixable with --fix[/green])"
    )


def _write_output(text: str, output_path: Path | None) -> None:
    """Write output text to file or stdout."""
    if output_path:
        output_path.write_text(text)
    else:
        click.echo(text)


def _handle_output(
    result: LintResult,
    output_format: str,
    output_path: Path | None,
    log_level: str,
) -> None:
    """Handle formatting and outputting results."""
    output_format = output_format.lower()
    if output_format == "sarif":
        _write_output(format_as_sarif(result, pretty=True), output_path)
    elif output_format == "json":
        _write_output(format_as_json(result, pretty=True), output_path)
    else:  # console
        for report in result.reports:
            _display_report(report)
        display_failed_files(result, show_details=(log_level.upper() == "DEBUG"))
        display_summary(result)


def _print_ruleset(ruleset_name: str) -> None:
    """Print rules in the specified built-in ruleset."""
    rules_with_descriptions = get_ruleset_with_descriptions(ruleset_name)

    console.print(f"\n[bold blue]Ruleset: {ruleset_name}[/bold blue]\n")

    if not rules_with_descriptions:
        console.print("  [dim]No padding rules - nothing is reported[/dim]\n")
        return

    console.print(f"[dim]{len(rules_with_descriptions)} rule(s), later rules take precedence:[/dim]\n")
    for rule, description in rules_with_descriptions:
        console.print(f"  [cyan]•[/cyan] {description}")
        console.print(f"    [dim]{rule}[/dim]\n")


def _configure_settings(
    rules: tuple[str, ...],
    rules_file: Path | None,
    rules_file_ruleset: str,
    ruleset: str,
    ignore: str,
    ignore_files: str,
) -> LintSettings:
    """Configure lint settings from CLI options."""
    settings = LintSettings(
        rules=RulesSettings(
            ruleset=ruleset,
            rules_file=str(rules_file) if rules_file else None,
            rules_file_ruleset=rules_file_ruleset,
            rules=list(rules),
        ),
        ignore_patterns=_parse_patterns(ignore),
        ignore_file_patterns=_parse_patterns(ignore_files),
    )
    set_settings(settings)
    return settings


def _parse_patterns(pattern_string: str) -> list[str]:
    """Parse comma-separated pattern string into list."""
    return [p.strip() for p in pattern_string.split(",") if p.strip()]


def _load_rules_or_exit() -> list[PaddingRule]:
    """Build rules from the current settings, exiting on configuration errors."""
    try:
        return build_rules(get_settings())
    except (RuleConfigError, FileNotFoundError) as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        sys.exit(EXIT_CONFIG_ERROR)


@click.group(invoke_without_command=True)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Set the logging level",
)
@click.option(
    "--list-ruleset",
    type=click.Choice(["none", "recommended"], case_sensitive=False),
    default=None,
    help="List rules in the specified built-in ruleset",
)
@click.pass_context
def main(ctx: click.Context, log_level: str, list_ruleset: str | None) -> None:
    """Require or disallow line breaks between JavaScript statements."""
    setup_logging(log_level.upper())

    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level

    if list_ruleset is not None:
        _print_ruleset(list_ruleset)
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--rule",
    "rules",
    multiple=True,
    help="Padding rule 'requirement:prev:next' (repeatable, later rules take precedence), e.g. 'blankline:*:return'",
)
@click.option(
    "--rules-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Rules file: YAML rulesets or one rule string per line",
)
@click.option(
    "--rules-file-ruleset",
    type=str,
    default="default",
    help="Ruleset to load from a YAML rules file (default: default)",
)
@click.option(
    "--ruleset",
    type=click.Choice(["none", "recommended"], case_sensitive=False),
    default="none",
    help="Built-in ruleset used when no --rule or --rules-file is given (default: none)",
)
@click.option("--fix", is_flag=True, default=False, help="Write safe fixes back to the files")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["console", "json", "sarif"], case_sensitive=False),
    default="console",
    help="Output format (default: console)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file path (default: stdout)",
)
@click.option(
    "--ignore",
    type=str,
    default="",
    help="Comma-separated list of glob patterns to ignore files (e.g., '*.min.js,**/node_modules/**')",
)
@click.option(
    "--ignore-files",
    type=str,
    default="**/.*ignore",
    help="Comma-separated list of glob patterns to find ignore files (default: '**/.*ignore')",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit with error code 1 if any violation remains",
)
@click.pass_context
def check(
    ctx: click.Context,
    path: Path,
    rules: tuple[str, ...],
    rules_file: Path | None,
    rules_file_ruleset: str,
    ruleset: str,
    fix: bool,
    output_format: str,
    output: Path | None,
    ignore: str,
    ignore_files: str,
    strict: bool,
) -> None:
    """Check line breaks between statements of JavaScript files."""
    log_level = ctx.obj["log_level"]

    _configure_settings(rules, rules_file, rules_file_ruleset, ruleset, ignore, ignore_files)
    padding_rules = _load_rules_or_exit()

    if output_format.lower() == "console":
        with console.status("[bold green]Checking statements..."):
            result = run_pipeline(path, padding_rules, fix=fix)
    else:
        result = run_pipeline(path, padding_rules, fix=fix)

    if result.success_count == 0 and result.failure_count > 0:
        if output_format.lower() == "console":
            console.print("[bold red]Error:[/bold red] Failed to parse any files")
            display_failed_files(result, show_details=True)
        sys.exit(1)

    _handle_output(result, output_format, output, log_level)

    if strict and result.violation_count:
        sys.exit(1)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def classify(file: Path) -> None:
    """Show the statement types each statement of a file belongs to.

    Only statements that are checked against padding rules are listed, in
    document order, indented by nesting depth.
    """
    from padline.pipeline.classifier import statement_types_of
    from padline.pipeline.parse import parse_file
    from padline.pipeline.traversal import iter_statements

    try:
        parsed = parse_file(file)
    except (ValueError, RuntimeError) as e:
        console.print(f"[bold red]Error:[/bold red] Failed to parse file: {e}")
        sys.exit(1)

    table = Table(title=f"[bold cyan]{file}[/bold cyan]", show_header=True, header_style="bold")
    table.add_column("Line", justify="right")
    table.add_column("Statement")
    table.add_column("Types", style="cyan")

    for node, depth in iter_statements(parsed.root_node):
        types = statement_types_of(node, parsed.tokens)
        table.add_row(
            str(node.start_point[0] + 1),
            "  " * depth + node.type,
            ", ".join(t.value for t in types),
        )

    console.print(table)


if __name__ == "__main__":
    main()
