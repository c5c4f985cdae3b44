# src/kubechart/cli/formatter.py
from typing import Any, Dict

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Initialize the Rich console for high-quality terminal output
console = Console()


class ChartFormatter:
    """
    ChartFormatter: renders assembly plans and summaries for the CLI.
    """

    def print_header(self, subtitle: str):
        console.print(Panel.fit(
            "[bold cyan]KubeChart v1.0.0[/bold cyan]\n"
            "══════════════════════════════════════════════════════════════════",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def print_plan(self, report: Dict[str, Any], show_changes: bool = False):
        """One row per input document, in stream order."""
        title = "KubeChart Assembly Report" if report["written"] else "KubeChart Assembly Plan"
        table = Table(title=title, show_lines=True, header_style="bold magenta")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Kind", style="white")
        table.add_column("Name", style="cyan")
        table.add_column("Destination", style="bold")
        if show_changes:
            table.add_column("Changes")

        for f in report["files"]:
            destination = f["path"] or "[yellow]dropped[/yellow]"
            row = [str(f["index"]), escape(str(f["kind"])), escape(str(f["name"] or "-")), destination]
            if show_changes:
                row.append(escape("\n".join(f["changes"])) or "[dim]none[/dim]")
            table.add_row(*row)

        console.print(table)

    def print_summary(self, report: Dict[str, Any]):
        summary = report["summary"]
        state = "[green]written[/green]" if report["written"] else "[cyan]preview only[/cyan]"
        console.print(Panel(
            f"[bold white]Chart {escape(str(report['chart_name']))} {escape(str(report['version']))}[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Chart Root:  {escape(str(report['chart_root']))}\n"
            f"Documents:   {summary['documents']}\n"
            f"CRDs:        {summary['crds']}\n"
            f"Templates:   {summary['templates']}\n"
            f"Dropped:     {summary['dropped']}\n"
            f"Status:      {state}",
            border_style="dim"
        ))

    def print_error(self, error: Exception):
        console.print(f"[bold red]ASSEMBLY FAILED:[/bold red] {escape(str(error))}")
