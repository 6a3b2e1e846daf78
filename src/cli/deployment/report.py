"""Version comparison tables and outcome listings."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from rich.table import Table

from src.utils.console_like import ConsoleLike

from .executor import DeployOutcome

MISSING = "-"


@dataclass(frozen=True)
class VersionRow:
    service: str
    before: str
    after: str

    @property
    def changed(self) -> bool:
        return self.before != self.after


def build_rows(
    before: Mapping[str, str],
    after: Mapping[str, str],
) -> list[VersionRow]:
    """One row per service in ``after``, sorted by name.

    Services unknown to ``before`` show an empty "before" version.
    """
    return [
        VersionRow(service, before.get(service, ""), after[service])
        for service in sorted(after)
    ]


def _version_table(
    title: str, before_label: str, after_label: str, rows: Iterable[VersionRow]
) -> Table:
    table = Table(title=title, title_justify="left", show_lines=False)
    table.add_column("Service", style="bold")
    table.add_column(before_label, style="cyan")
    table.add_column(after_label)
    for row in rows:
        style = "red" if row.changed else "green"
        table.add_row(
            f"[yellow]•[/yellow] {row.service}",
            row.before or MISSING,
            f"[{style}]{row.after or MISSING}[/{style}]",
        )
    return table


class ReportPresenter:
    """Renders rollout data on a console."""

    def __init__(self, console: ConsoleLike) -> None:
        self.console = console

    def _legend(self) -> None:
        self.console.print("[green]green[/green]  version unchanged")
        self.console.print("[red]red[/red]    version changes")

    def preview(self, current: Mapping[str, str], target: Mapping[str, str]) -> None:
        """Current vs target version for every selected service."""
        rows = build_rows(current, target)
        self.console.print(
            _version_table("Version preview", "Current", "Target", rows)
        )
        self._legend()

    def outcomes(self, outcomes: Iterable[DeployOutcome]) -> None:
        for outcome in sorted(outcomes, key=lambda o: o.service):
            if outcome.success:
                self.console.ok(f"{outcome.service} deployed ({outcome.image})")
            else:
                self.console.error(f"{outcome.service} failed: {outcome.detail}")

    def comparison(self, before: Mapping[str, str], after: Mapping[str, str]) -> None:
        """Before vs after version for every service observed after the rollout."""
        rows = build_rows(before, after)
        self.console.print(_version_table("Rollout result", "Before", "After", rows))
        self._legend()
