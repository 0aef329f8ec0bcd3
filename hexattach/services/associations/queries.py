# hexattach/services/associations/queries.py
from __future__ import annotations

from typing import List

from hexattach.domain.entities.tag_set import TagsInput
from hexattach.domain.policies.tag_filter import TagFilter
from hexattach.domain.ports.association_store import AssociationStorePort


def where_has_media(
    store: AssociationStorePort,
    host_type: str,
    tags: TagsInput,
    match_all: bool = False,
) -> List[str]:
    """
    Ids of hosts of `host_type` having at least one media that matches
    (any live media at all when no tags are given).
    Needs a join-like query; stores that cannot do it raise
    UnsupportedOperationError before touching anything.
    """
    tag_filter = TagFilter.build(tags, match_all)
    return store.find_host_ids_with_media(host_type, tag_filter)


def where_has_media_match_all(store: AssociationStorePort, host_type: str, tags: TagsInput) -> List[str]:
    return where_has_media(store, host_type, tags, match_all=True)
