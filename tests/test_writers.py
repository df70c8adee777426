"""Tests for the taxonomy and report writers."""

import io
import json
import sys
from pathlib import Path

from rich.console import Console


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from taxcat.core.models import EntityKind, OrganizationEntity, PersonEntity, RelevanceEntity  # noqa: E402
from taxcat.processors.report_writer import PIPED_CONSOLE_WIDTH, ReportWriter, default_console  # noqa: E402
from taxcat.processors.taxonomy_writer import TaxonomyWriter, term_names  # noqa: E402


class RecordingHost:
    def __init__(self):
        self.calls = []

    def get_post_content(self, post_id):
        return ""

    def list_terms(self, post_id, taxonomy):
        return []

    def replace_terms(self, post_id, taxonomy, names):
        self.calls.append((post_id, taxonomy, list(names)))


def test_term_names_collapse_repeated_names_in_order():
    records = [
        OrganizationEntity(name="WIDE Project", wiki_score=0.4, entity_score=0.7),
        OrganizationEntity(name="Toyota Prius", wiki_score=0.5, entity_score=0.9),
        OrganizationEntity(name="WIDE Project", wiki_score=0.6, entity_score=0.7),
    ]
    assert term_names(records) == ["WIDE Project", "Toyota Prius"]


def test_writer_replaces_organizations_then_people():
    host = RecordingHost()
    TaxonomyWriter(host).write(
        42,
        [OrganizationEntity(name="Toyota Prius", wiki_score=0.5, entity_score=0.9)],
        [PersonEntity(name="Henry Ford", entity_score=0.99), PersonEntity(name="Henry Ford", entity_score=0.99)],
    )

    assert host.calls == [
        (42, "organization", ["Toyota Prius"]),
        (42, "people", ["Henry Ford"]),
    ]


def test_writer_clears_taxonomies_when_nothing_found():
    host = RecordingHost()
    TaxonomyWriter(host).write(42, [], [])
    assert host.calls == [(42, "organization", []), (42, "people", [])]


def test_report_writer_resets_then_appends(tmp_path):
    path = tmp_path / "out" / "results.txt"
    writer = ReportWriter(path, console=Console(file=io.StringIO()))

    writer.reset()
    assert path.read_text(encoding="utf-8") == "Results Below\n\n"

    writer.write_results('{"language":"en","entities":[{"text":"Zürich","relevance":0.5}]}')
    content = path.read_text(encoding="utf-8")
    assert content.startswith("Results Below\n\n{\n    \"language\": \"en\",")
    assert json.loads(content[len("Results Below\n\n"):])["entities"][0]["text"] == "Zürich"

    writer.reset()
    assert path.read_text(encoding="utf-8") == "Results Below\n\n"


def test_report_tables_keep_full_scores_and_literal_names(tmp_path):
    buf = io.StringIO()
    writer = ReportWriter(tmp_path / "results.txt", console=Console(file=buf, width=120))

    writer.print_tables(
        [OrganizationEntity(name="Yes [Israel]", wiki_score=0.123456789, entity_score=0.8)],
        [RelevanceEntity(name="Toyota", relevance=0.93, kind=EntityKind.ORGANIZATION)],
    )

    output = buf.getvalue()
    assert "Yes [Israel]" in output
    assert "0.123456789" in output
    assert "EntityScore" in output
    assert "relevance" in output


def test_report_tables_with_no_rows_still_print_headers(tmp_path):
    buf = io.StringIO()
    ReportWriter(tmp_path / "results.txt", console=Console(file=buf, width=120)).print_tables([], [])
    output = buf.getvalue()
    assert "WikiScore" in output
    assert "relevance" in output


def test_piped_console_keeps_each_row_on_one_line(tmp_path):
    buf = io.StringIO()
    console = default_console(buf)
    assert console.width == PIPED_CONSOLE_WIDTH

    long_name = "International Business Machines Corporation Research Division " * 2
    ReportWriter(tmp_path / "results.txt", console=console).print_tables(
        [OrganizationEntity(name=long_name.strip(), wiki_score=0.12345678901234, entity_score=0.98765432109876)],
        [],
    )

    rows = [line for line in buf.getvalue().splitlines() if "International" in line]
    assert len(rows) == 1
    assert long_name.strip() in rows[0]
    assert "0.12345678901234" in rows[0]
    assert "0.98765432109876" in rows[0]
