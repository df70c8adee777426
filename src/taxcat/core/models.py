"""
Typed schemas for the two text-analysis services and the entity records
extracted from them.

Response schemas only declare the fields the parsers read; everything else
in a response is accepted and ignored. Score fields are optional on purpose:
an entity whose best match carries no ``entityTypeScore`` is skipped by the
parser rather than rejected here.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EntityKind(str, Enum):
    """Kinds of entity; values are the matching taxonomy names."""

    ORGANIZATION = "organization"
    PERSON = "people"


# =============================================================================
# Azure Text Analytics (entities)
# =============================================================================


class AzureMatch(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    wikipedia_score: Optional[float] = Field(default=None, alias="wikipediaScore")
    entity_type_score: Optional[float] = Field(default=None, alias="entityTypeScore")


class AzureEntity(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    type: str
    matches: List[AzureMatch] = Field(default_factory=list)

    @property
    def best_match(self) -> Optional[AzureMatch]:
        """The service lists the best match first."""
        return self.matches[0] if self.matches else None


class AzureDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    entities: List[AzureEntity] = Field(default_factory=list)


class AzureEntitiesResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    documents: List[AzureDocument]
    errors: List[dict] = Field(default_factory=list)


# =============================================================================
# Watson Natural Language Understanding (analyze)
# =============================================================================


class WatsonEntity(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    text: str
    relevance: float


class WatsonAnalysisResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    entities: List[WatsonEntity]


# =============================================================================
# Extracted entity records
# =============================================================================


class OrganizationEntity(BaseModel):
    """Organization found by Azure, one record per Wikipedia-linked match."""

    model_config = ConfigDict(frozen=True)

    name: str
    wiki_score: float
    entity_score: float
    kind: EntityKind = EntityKind.ORGANIZATION


class PersonEntity(BaseModel):
    """Person found by Azure."""

    model_config = ConfigDict(frozen=True)

    name: str
    entity_score: float
    kind: EntityKind = EntityKind.PERSON


class RelevanceEntity(BaseModel):
    """Organization or person found by Watson with its relevance score."""

    model_config = ConfigDict(frozen=True)

    name: str
    relevance: float
    kind: EntityKind


__all__ = [
    "EntityKind",
    "AzureMatch",
    "AzureEntity",
    "AzureDocument",
    "AzureEntitiesResponse",
    "WatsonEntity",
    "WatsonAnalysisResponse",
    "OrganizationEntity",
    "PersonEntity",
    "RelevanceEntity",
]
