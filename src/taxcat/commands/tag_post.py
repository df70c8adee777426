"""
Tag one post with organizations and people found in its text.

Steps
-----

- Load settings; a missing or empty API key aborts before anything else runs.
- Reset the results file to its header.
- Fetch the post body from WordPress.
- Send the tag-stripped, truncated body to Azure and the raw body to Watson.
- Parse both responses.
- Replace the post's ``organization`` and ``people`` terms with Azure's names.
- Append Watson's response to the results file and print both organization
  tables.

Any failure propagates. A failure while the terms are being replaced can
leave a taxonomy empty or partial until the command is run again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from rich.console import Console

from ..core.apis import AzureEntityClient, WatsonNLUClient
from ..core.config import ConfigManager, Settings
from ..core.host import TERM_FIELDS, HostPlatform, WPCLIHost
from ..core.http_client import HTTPClient
from ..core.models import OrganizationEntity, PersonEntity, RelevanceEntity
from ..core.paths import resolve_output_file
from ..core.text_utils import prepare_service_text
from ..processors.entity_parser import parse_azure_response, parse_watson_response
from ..processors.report_writer import ReportWriter
from ..processors.taxonomy_writer import ORGANIZATION_TAXONOMY, PEOPLE_TAXONOMY, TaxonomyWriter

logger = logging.getLogger(__name__)


@dataclass
class TagResult:
    """Entities extracted during one run."""

    post_id: int
    azure_organizations: List[OrganizationEntity] = field(default_factory=list)
    azure_people: List[PersonEntity] = field(default_factory=list)
    watson_organizations: List[RelevanceEntity] = field(default_factory=list)
    watson_people: List[RelevanceEntity] = field(default_factory=list)


def run(
    config_path: Optional[str],
    post_id: int,
    *,
    show_terms: bool = False,
    host: Optional[HostPlatform] = None,
    http: Optional[HTTPClient] = None,
    console: Optional[Console] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> TagResult:
    """Run the tagging pipeline for a single post.

    Args:
        config_path: Path to the main configuration file (None = default)
        post_id: WordPress post ID
        show_terms: Print the post's resulting terms after writing them
        host: Host platform (defaults to WP-CLI configured from settings)
        http: HTTP client shared by both services
        console: rich Console for the tables (defaults to stdout)
        environ: Mapping to read API keys from (defaults to the process env)

    Raises:
        ConfigurationError: Missing or empty API key, or invalid config
        HostPlatformError: The post could not be read or its terms written
        MalformedResponseError: A service response did not match its schema
        requests.RequestException: A service call failed
    """
    logger.info(f"Starting tag command for post {post_id}")

    settings = ConfigManager(config_path).load_settings(environ)

    report = ReportWriter(
        resolve_output_file(settings.report.results_file, ensure_parent=True),
        header=settings.report.header,
        console=console,
    )
    report.reset()

    if host is None:
        wp = settings.wordpress
        host = WPCLIHost(wp.wp_cli, path=wp.path, url=wp.url, allow_root=wp.allow_root)
    owns_http = http is None
    http = http or HTTPClient(timeout=settings.http_timeout)
    try:
        return _tag(settings, post_id, host, http, report, show_terms)
    finally:
        if owns_http:
            http.close()


def _tag(
    settings: Settings,
    post_id: int,
    host: HostPlatform,
    http: HTTPClient,
    report: ReportWriter,
    show_terms: bool,
) -> TagResult:
    azure = AzureEntityClient(
        settings.azure.access_key.get_secret_value(),
        endpoint=settings.azure.endpoint,
        path=settings.azure.path,
        language=settings.azure.language,
        http=http,
    )
    watson = WatsonNLUClient(
        settings.watson.access_key.get_secret_value(),
        endpoint=settings.watson.endpoint,
        path=settings.watson.path,
        username=settings.watson.username,
        entity_limit=settings.watson.entity_limit,
        concept_limit=settings.watson.concept_limit,
        http=http,
    )

    content = host.get_post_content(post_id)
    logger.info(f"Fetched post {post_id} ({len(content)} characters)")

    azure_text = prepare_service_text(
        content,
        max_length=settings.azure.max_text_length,
        min_length=settings.azure.min_text_length,
    )
    azure_raw = azure.fetch_entities(azure_text)
    watson_raw = watson.fetch_analysis(content)

    result = TagResult(post_id=post_id)
    result.azure_organizations, result.azure_people = parse_azure_response(azure_raw)
    result.watson_organizations, result.watson_people = parse_watson_response(watson_raw)

    TaxonomyWriter(host).write(post_id, result.azure_organizations, result.azure_people)

    report.write_results(watson_raw)
    report.print_tables(result.azure_organizations, result.watson_organizations)

    if show_terms:
        report.print_terms("Organization Taxonomies", host.list_terms(post_id, ORGANIZATION_TAXONOMY), TERM_FIELDS)
        report.print_terms("People Taxonomies", host.list_terms(post_id, PEOPLE_TAXONOMY), TERM_FIELDS)

    logger.info("Tag command completed for post %s", post_id)
    return result
