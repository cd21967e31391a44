#!/usr/bin/env python3
"""
CHARTDOC CLI - README Generator
-------------------------------
Command-line entry point: reads a chart's values file and doc info,
renders the parameter table into the README template and writes the
result to stdout or a file.

Author: ChartDoc Team
Date: 2026-10-19
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from chartdoc.cli.formatter import RowFormatter, console
from chartdoc.core.engine import DocEngine
from chartdoc.core.errors import ChartDocError

VERSION = "chart-doc-gen v0.1.0"


class ChartDocCLI:
    """
    CLI wrapper that translates user flags into DocEngine calls.
    """

    def __init__(self):
        """Initializes the CLI and sets up the argument parser."""
        self.parser = argparse.ArgumentParser(
            prog="chart-doc-gen",
            description="chart-doc-gen - Generate Helm chart READMEs from annotated values files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=(
                "Directives (in a key's comments):\n"
                "  # +doc-gen:ignore   leave the field out of the docs\n"
                "  # +doc-gen:break    document the field as a single row"
            ),
        )
        self.formatter = RowFormatter()
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags."""
        self.parser.add_argument("--version", action="version", version=VERSION)
        self.parser.add_argument("-d", "--doc", default="doc.yaml",
                                 help="Path to a project's doc.{json|yaml} info file")
        self.parser.add_argument("-v", "--values", default="values.yaml",
                                 help="Path to chart values file")
        self.parser.add_argument("-t", "--template", default="readme.tpl",
                                 help="Path to a doc template file (built-in template if missing)")
        self.parser.add_argument("-o", "--output", default="",
                                 help="Path to a output file (stdout if empty)")
        self.parser.add_argument("-s", "--schema", default=None,
                                 help="Path to a JSON/YAML table of schema definitions")
        self.parser.add_argument("--prune", default=None, metavar="PATH",
                                 help="Also write the values file without ignored fields to PATH")
        self.parser.add_argument("--associative-lists", action="store_true",
                                 help="Address list elements by their name/id/key field")
        self.parser.add_argument("--preview", action="store_true",
                                 help="Print the extracted parameters as a table on stderr")
        self.parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    def _write(self, path: str, content: str, what: str):
        try:
            Path(path).write_text(content, encoding='utf-8')
        except OSError as e:
            raise ChartDocError(f"Failed to write {what} to {path}: {str(e)}") from e
        self.formatter.print_written(what, path)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary entry point. Returns the process exit status."""
        args = self.parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

        try:
            engine = DocEngine(schema_path=args.schema,
                               infer_associative_lists=args.associative_lists)
            context = engine.generate(args.values, doc_path=args.doc, template_path=args.template)

            if args.preview:
                self.formatter.print_rows(context.rows)

            if args.output:
                self._write(args.output, context.readme, "README")
            else:
                sys.stdout.write(context.readme)

            if args.prune:
                self._write(args.prune, engine.exporter.export(context.destination), "Pruned values")
        except ChartDocError as e:
            self.formatter.print_error(str(e))
            return 1
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(ChartDocCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
