"""confess CLI — scan text and inspect moderation policies."""

import json
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from confess import __version__

console = Console()

_STATUS_STYLE = {
    "approved": "green",
    "review": "yellow",
    "flagged": "magenta",
    "rejected": "red",
}


def _load(policy: str | None):
    from confess.moderation.config import config_from_env
    from confess.moderation.errors import ConfigError

    try:
        return config_from_env(policy)
    except ConfigError as e:
        console.print(f"  [red]Failed to load policy:[/] {e}")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def main():
    """confess — content moderation for CampusConfess.

    Scan posts and comments for banned keywords and personal
    information, and inspect the moderation policy in use.
    """


# ── Scan ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("text")
@click.option("--type", "content_type", default="post", type=click.Choice(["post", "comment"]))
@click.option("--policy", "-p", default=None, help="Policy YAML file (default: bundled policy)")
@click.option("--json", "as_json", is_flag=True, help="Print the API response body instead")
def scan(text: str, content_type: str, policy: str | None, as_json: bool):
    """Scan TEXT and print the moderation verdict."""
    from confess.moderation.engine import ModerationEngine
    from confess.moderation.errors import InputValidationError
    from confess.moderation.models import ModerationStatus

    engine = ModerationEngine(_load(policy))

    try:
        report = engine.scan(text, content_type)
    except InputValidationError as e:
        if as_json:
            click.echo(json.dumps({"success": False, "error": str(e)}))
        else:
            console.print(f"[red]Invalid input:[/] {e}")
        sys.exit(2)

    if as_json:
        click.echo(json.dumps({"success": True, "result": report.to_dict()}))
        return

    verdict = report.verdict
    style = _STATUS_STYLE[verdict.status.value]
    console.print(
        Panel(
            f"[bold {style}]{verdict.status.value.upper()}[/] — {verdict.reason}\n"
            f"Confidence: {verdict.confidence:.2f}",
            title="Verdict",
        )
    )

    table = Table(show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("Category", report.keywords.category)
    table.add_row("Keywords", ", ".join(report.keywords.matches) or "-")
    table.add_row("PII", ", ".join(report.pii.types) or "-")
    console.print(table)

    if verdict.status == ModerationStatus.FLAGGED and engine.config.crisis_resources:
        console.print("\n[bold]Support resources:[/]")
        for r in engine.config.crisis_resources:
            contact = r.phone or r.text
            console.print(f"  [cyan]{r.name}[/] {contact} {r.website}".rstrip())


# ── Policy ───────────────────────────────────────────────────────────


@main.command()
@click.option("--policy", "-p", default=None, help="Policy YAML file (default: bundled policy)")
def categories(policy: str | None):
    """List keyword categories in declaration (tie-break) order."""
    config = _load(policy)

    table = Table(title=f"{config.name} v{config.version}")
    table.add_column("#", style="dim", width=3)
    table.add_column("Category", style="cyan")
    table.add_column("Terms", justify="right")
    table.add_column("Examples")

    for i, (category, terms) in enumerate(config.categories.items()):
        table.add_row(str(i + 1), category, str(len(terms)), ", ".join(terms[:4]))

    console.print(table)
    console.print(
        f"PII profile: [cyan]{config.pii_profile}[/] ({', '.join(config.pii_types)})"
    )


@main.command(name="check-policy")
@click.argument("policy_path")
def check_policy(policy_path: str):
    """Validate a moderation policy file."""
    from confess.moderation.config import load_config
    from confess.moderation.errors import ConfigError

    console.print(f"\n[bold blue]confess[/] — Checking: {policy_path}\n")

    try:
        config = load_config(policy_path)
    except ConfigError as e:
        console.print(f"  [red]x[/] {e}")
        sys.exit(1)

    t = config.thresholds
    term_count = sum(len(terms) for terms in config.categories.values())
    console.print(f"  [green]v[/] {len(config.categories)} categories, {term_count} terms")
    console.print(f"  [green]v[/] PII detectors: {', '.join(config.pii_types)}")
    console.print(
        f"  [green]v[/] Thresholds: review >= {t.auto_approve}, "
        f"reject >= {t.auto_reject}, saturates at {t.max_keyword_matches} matches"
    )
    console.print("\n[green]Valid![/]")


if __name__ == "__main__":
    main()
