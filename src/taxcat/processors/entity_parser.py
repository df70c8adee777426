"""
Turn raw service responses into organization and people records.

Azure
-----

- Only the first document of the response is read.
- An entity is considered only when its best (first) match carries an
  ``entityTypeScore``. Entities without matches or without that score are
  skipped; this loses some entities and is accepted behavior.
- ``Organization``: one record per match that has a ``wikipediaScore``,
  combining the entity name, that match's Wikipedia score and the best
  match's entity type score. Duplicate records (all fields equal) collapse
  to the first occurrence.
- ``Person``: one record per entity with the best match's entity type score.
  People are not deduplicated.

Watson
------

- ``Company`` and ``Organization`` entities become organizations, ``Person``
  entities become people, one record per entity with its relevance.
  No deduplication.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.errors import MalformedResponseError
from ..core.models import (
    AzureEntitiesResponse,
    EntityKind,
    OrganizationEntity,
    PersonEntity,
    RelevanceEntity,
    WatsonAnalysisResponse,
)

logger = logging.getLogger(__name__)

AZURE = "Azure Text Analytics"
WATSON = "Watson NLU"

WATSON_ORGANIZATION_TYPES = ("Company", "Organization")
WATSON_PERSON_TYPES = ("Person",)

T = TypeVar("T", bound=BaseModel)


def _decode(schema: Type[T], raw: str, service: str) -> T:
    try:
        return schema.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedResponseError(service, f"{e.error_count()} validation error(s): {e}") from e


def unique_in_order(records: Iterable[T]) -> List[T]:
    """Drop records equal to an earlier one, keeping first occurrences in order."""
    seen = set()
    unique = []
    for record in records:
        if record in seen:
            continue
        seen.add(record)
        unique.append(record)
    return unique


def parse_azure_response(raw: str) -> Tuple[List[OrganizationEntity], List[PersonEntity]]:
    """Extract organizations and people from an Azure entities response.

    Raises:
        MalformedResponseError: If the body is not JSON, does not match the
            schema, or contains no document
    """
    response = _decode(AzureEntitiesResponse, raw, AZURE)
    if not response.documents:
        detail = "no documents"
        if response.errors:
            detail += f" (errors: {response.errors})"
        raise MalformedResponseError(AZURE, detail)

    organizations: List[OrganizationEntity] = []
    people: List[PersonEntity] = []

    for entity in response.documents[0].entities:
        best = entity.best_match
        if best is None or best.entity_type_score is None:
            logger.debug("Skipping %s entity '%s' without entity type score", entity.type, entity.name)
            continue

        if entity.type == "Organization":
            for match in entity.matches:
                if match.wikipedia_score is None:
                    continue
                organizations.append(
                    OrganizationEntity(
                        name=entity.name,
                        wiki_score=match.wikipedia_score,
                        entity_score=best.entity_type_score,
                    )
                )
        elif entity.type == "Person":
            people.append(PersonEntity(name=entity.name, entity_score=best.entity_type_score))

    organizations = unique_in_order(organizations)
    logger.info("Azure: %d organization record(s), %d person record(s)", len(organizations), len(people))
    return organizations, people


def parse_watson_response(raw: str) -> Tuple[List[RelevanceEntity], List[RelevanceEntity]]:
    """Extract organizations and people from a Watson NLU analyze response.

    Raises:
        MalformedResponseError: If the body is not JSON or has no entity list
    """
    response = _decode(WatsonAnalysisResponse, raw, WATSON)

    organizations: List[RelevanceEntity] = []
    people: List[RelevanceEntity] = []
    for entity in response.entities:
        if entity.type in WATSON_ORGANIZATION_TYPES:
            organizations.append(
                RelevanceEntity(name=entity.text, relevance=entity.relevance, kind=EntityKind.ORGANIZATION)
            )
        elif entity.type in WATSON_PERSON_TYPES:
            people.append(RelevanceEntity(name=entity.text, relevance=entity.relevance, kind=EntityKind.PERSON))

    logger.info("Watson: %d organization(s), %d person(s)", len(organizations), len(people))
    return organizations, people
