"""
Results file and console tables for a tagging run.

The results file is reset to its header at the start of every run and the
Watson response is appended once the taxonomy has been written, so the file
only ever holds the latest run.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO, Any, Dict, Iterable, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.models import OrganizationEntity, RelevanceEntity

logger = logging.getLogger(__name__)

# Width used when stdout is not a terminal, so piped tables keep one row per line
PIPED_CONSOLE_WIDTH = 1000


def default_console(file: Optional[IO[str]] = None) -> Console:
    """Return a stdout Console that does not shrink to 80 columns when piped."""
    console = Console(file=file)
    if not console.is_terminal:
        console = Console(file=file, width=PIPED_CONSOLE_WIDTH)
    return console


def build_table(columns: Sequence[str], rows: Iterable[Sequence[Any]], title: Optional[str] = None) -> Table:
    """Build a plain ASCII table in the style of WP-CLI's table output."""
    table = Table(title=title, box=box.ASCII, title_justify="left")
    for column in columns:
        table.add_column(column, no_wrap=True)
    for row in rows:
        table.add_row(*(Text(str(cell)) for cell in row))
    return table


class ReportWriter:
    """Writes the results file and prints entity tables.

    Args:
        results_path: File that receives the pretty-printed Watson response
        header: First line of the results file
        console: rich Console to print to (defaults to stdout)
    """

    def __init__(self, results_path: Path, header: str = "Results Below", console: Optional[Console] = None):
        self.results_path = Path(results_path)
        self.header = header
        self.console = console or default_console()

    def reset(self) -> None:
        """Truncate the results file to its header."""
        self.results_path.parent.mkdir(parents=True, exist_ok=True)
        self.results_path.write_text(f"{self.header}\n\n", encoding="utf-8")

    def write_results(self, raw_response: str) -> None:
        """Append the pretty-printed service response to the results file."""
        pretty = json.dumps(json.loads(raw_response), indent=4, ensure_ascii=False)
        with open(self.results_path, "a", encoding="utf-8") as f:
            f.write(pretty)
        logger.info("Wrote service response to %s", self.results_path)

    def print_tables(
        self,
        azure_organizations: Sequence[OrganizationEntity],
        watson_organizations: Sequence[RelevanceEntity],
    ) -> None:
        self.console.print(
            build_table(
                ("name", "WikiScore", "EntityScore"),
                (
                    (org.name, org.wiki_score, org.entity_score)
                    for org in azure_organizations
                ),
            )
        )
        self.console.print(
            build_table(
                ("name", "relevance"),
                ((org.name, org.relevance) for org in watson_organizations),
            )
        )

    def print_terms(self, title: str, terms: List[Dict[str, Any]], fields: Sequence[str]) -> None:
        """Print terms as listed by the host platform."""
        self.console.print(f"Success: {title}")
        self.console.print(build_table(fields, ([term.get(field, "") for field in fields] for term in terms)))
