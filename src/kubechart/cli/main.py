#!/usr/bin/env python3
"""
KUBECHART CLI
-------------
Command-line front end for the chart assembler.

    kustomize build config/default | kubechart assemble - \\
        --chart-root charts/awx-operator --version 2.19.1 \\
        --description "A Helm chart for the AWX Operator"

'plan' runs the same pipeline read-only and shows where every document
would land. Process exit codes are decided here, never in the core.

Author: KubeChart Team
Date: 2026-10-18
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from kubechart.cli.formatter import ChartFormatter, console
from kubechart.core.config import AssemblyConfig, DEFAULT_PLACEHOLDER, DEFAULT_NOTES_TEMPLATE
from kubechart.core.engine import ChartAssembler
from kubechart.core.errors import AssemblyError, ChartIOError


class KubeChartCLI:
    """Translates user commands into ChartAssembler actions."""

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="kubechart",
            description="KubeChart - Assemble rendered Kubernetes manifests into a Helm chart",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = ChartFormatter()
        self._setup_args()

    def _add_common_args(self, parser: argparse.ArgumentParser):
        parser.add_argument("input", nargs="?", default="-",
                            help="Rendered multi-document YAML file, or '-' for stdin (default)")
        parser.add_argument("--chart-root", required=True, help="Chart directory to (re)generate")
        parser.add_argument("--version", required=True, dest="chart_version", help="Chart version")
        parser.add_argument("--app-version", help="appVersion (default: --version)")
        parser.add_argument("--description", help="Chart description (default: keep the existing one)")
        parser.add_argument("--name", help="Chart name (default: chart root directory name)")
        parser.add_argument("--placeholder", default=DEFAULT_PLACEHOLDER,
                            help="Namespace token written into RoleBinding subjects")
        parser.add_argument("--chart-label", action="store_true",
                            help="Label every resource with helm.sh/chart=<name>")
        parser.add_argument("--starter", help="Starter chart directory to seed from")
        parser.add_argument("--notes", default=DEFAULT_NOTES_TEMPLATE,
                            help="NOTES.txt template ({name}, {version}); empty to skip")
        parser.add_argument("--changes", action="store_true", help="List field changes per document")

    def _setup_args(self):
        self.parser.add_argument("-v", "--version", action="version", version="kubechart v1.0.0")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        assemble_parser = subparsers.add_parser("assemble", help="📦 Build the chart on disk")
        self._add_common_args(assemble_parser)
        assemble_parser.add_argument("--dry-run", action="store_true", help="Preview without writing")

        plan_parser = subparsers.add_parser("plan", help="🔍 Show where each document would go (read-only)")
        self._add_common_args(plan_parser)

    def _read_input(self, source: str) -> str:
        if source == "-":
            return sys.stdin.read()
        path = Path(source)
        try:
            return path.read_text(encoding='utf-8-sig')
        except OSError as e:
            raise ChartIOError(str(path), f"cannot read input: {e}") from e

    def _build_config(self, args: argparse.Namespace) -> AssemblyConfig:
        return AssemblyConfig(
            chart_root=Path(args.chart_root),
            version=args.chart_version,
            app_version=args.app_version,
            description=args.description,
            chart_name=args.name,
            placeholder=args.placeholder,
            chart_label=args.chart_label,
            starter=Path(args.starter) if args.starter else None,
            notes_template=args.notes or None,
        )

    def _run_engine(self, args: argparse.Namespace, write: bool) -> int:
        try:
            text = self._read_input(args.input)
            assembler = ChartAssembler(self._build_config(args))
            report = assembler.assemble(text) if write else assembler.plan(text)
        except AssemblyError as e:
            self.formatter.print_error(e)
            return 1

        self.formatter.print_plan(report, show_changes=args.changes)
        self.formatter.print_summary(report)
        if not write:
            console.print(f"\n[bold cyan]Preview Mode:[/bold cyan] No files were written. To build, run:")
            console.print(f"[bold white]kubechart assemble {args.input} --chart-root {args.chart_root} "
                          f"--version {args.chart_version}[/bold white]")
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit code."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.formatter.print_header("Manifest Bundle Assembler")
            self.parser.print_help()
            return 0

        args = self.parser.parse_args(argv)
        if args.command == "assemble":
            self.formatter.print_header("Chart Assembly")
            return self._run_engine(args, write=not args.dry_run)
        if args.command == "plan":
            self.formatter.print_header("Chart Plan")
            return self._run_engine(args, write=False)

        self.parser.print_help()
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KubeChartCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
