"""Write extracted entity names back to a post's taxonomies."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Union

from ..core.host import HostPlatform
from ..core.models import EntityKind, OrganizationEntity, PersonEntity

logger = logging.getLogger(__name__)

ORGANIZATION_TAXONOMY = EntityKind.ORGANIZATION.value
PEOPLE_TAXONOMY = EntityKind.PERSON.value


def term_names(records: Iterable[Union[OrganizationEntity, PersonEntity]]) -> List[str]:
    """Return record names in order with repeats removed.

    Several Azure organization records can share a name (one per Wikipedia
    match); the taxonomy only needs the name once.
    """
    names: List[str] = []
    for record in records:
        if record.name not in names:
            names.append(record.name)
    return names


class TaxonomyWriter:
    """Replace a post's organization and people terms with extracted names.

    This is a full replace, not a merge: terms that were added by hand and
    are not found again are removed.
    """

    def __init__(self, host: HostPlatform):
        self.host = host

    def write(
        self,
        post_id: int,
        organizations: Sequence[OrganizationEntity],
        people: Sequence[PersonEntity],
    ) -> None:
        for taxonomy, records in ((ORGANIZATION_TAXONOMY, organizations), (PEOPLE_TAXONOMY, people)):
            names = term_names(records)
            logger.info("Replacing '%s' terms on post %s with %d name(s)", taxonomy, post_id, len(names))
            self.host.replace_terms(post_id, taxonomy, names)
