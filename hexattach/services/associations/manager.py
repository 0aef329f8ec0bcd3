# hexattach/services/associations/manager.py
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Union
from uuid import UUID

from hexattach.common.logging import get_logger
from hexattach.common.settings import AssociationConfig, get_settings
from hexattach.domain.entities.host import HostRef, HasMediaAssociations, host_ref_of
from hexattach.domain.entities.media import Media
from hexattach.domain.entities.tag_set import TagSet, TagsInput, optional_tags
from hexattach.domain.enums.delete_mode import DeleteMode
from hexattach.domain.errors import NotFoundError
from hexattach.domain.policies.cascade import resolve_delete_mode
from hexattach.domain.policies.dirty_tracking import DirtyTagTracker
from hexattach.domain.policies.rehydration import should_rehydrate, should_refetch_before_write
from hexattach.domain.policies.tag_filter import TagFilter
from hexattach.domain.ports.association_store import AssociationStorePort
from hexattach.services.associations.cascade import CascadeController
from hexattach.services.associations.session import AssociationSession, HostMediaState

logger = get_logger(__name__)

MediaRef = Union[Media, UUID, str]
MediaRefs = Union[MediaRef, Iterable[MediaRef]]


class MediaAssociations:
    """
    Media association manager for one host.

    Embed it in a host entity (see HasMediaAssociations) or build it on the fly
    from a HostRef. The cached relation and dirty tags live in the
    AssociationSession, so managers built for the same host within one session
    share them.

    Reads run `rehydrate_if_necessary` first so the relation reflects this
    session's own writes; writes by other sessions/processes are not detected.
    Mutations are fail-fast: a StoreError propagates unchanged and nothing is
    marked dirty for the failed call.
    """

    def __init__(
        self,
        host: HostRef | HasMediaAssociations,
        store: AssociationStorePort,
        *,
        session: Optional[AssociationSession] = None,
        config: Optional[AssociationConfig] = None,
        rehydrates_media: Optional[bool] = None,
    ) -> None:
        self.host: HostRef = host_ref_of(host)
        self.store = store
        self.session = session if session is not None else AssociationSession()
        cfg = config if config is not None else get_settings().associations
        self.flags = cfg.resolve(self.host.host_type)
        self._rehydrates_override = rehydrates_media

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------
    @property
    def rehydrates_media(self) -> bool:
        if self._rehydrates_override is not None:
            return self._rehydrates_override
        return self.flags.rehydrate_media

    @property
    def detach_on_soft_delete(self) -> bool:
        return self.flags.detach_on_soft_delete

    @property
    def state(self) -> HostMediaState:
        return self.session.state_for(self.host)

    @property
    def dirty(self) -> DirtyTagTracker:
        return self.state.dirty

    # -------------------------------------------------------------------------
    # Relation loading
    # -------------------------------------------------------------------------
    @property
    def media(self) -> List[Media]:
        """The cached relation; lazily loads everything on first access."""
        state = self.state
        if state.media is None:
            # lazy load does not count as an explicit reload: dirty tags stay
            state.media = self.store.find_all(self.host)
            state.loaded_filter = None
        return state.media

    @property
    def media_loaded(self) -> bool:
        return self.state.loaded

    def load_media(self, tags: TagsInput = None, match_all: bool = False) -> "MediaAssociations":
        """
        Explicitly (re)load the relation, optionally restricted to tags.
        Empty/absent tags load everything. Always clears dirty tags.
        """
        tag_filter = TagFilter.build(tags, match_all)
        if tag_filter.is_empty:
            media = self.store.find_all(self.host)
            self.state.replace(media, None)
        else:
            media = self.store.find_by_tags(self.host, tag_filter)
            self.state.replace(media, tag_filter)
        logger.debug("loaded %d media for %s (%s)", len(media), self.host,
                     "all" if tag_filter.is_empty else tag_filter.describe())
        return self

    def load_media_match_all(self, tags: TagsInput = None) -> "MediaAssociations":
        return self.load_media(tags, match_all=True)

    # -------------------------------------------------------------------------
    # Dirty tracking / rehydration
    # -------------------------------------------------------------------------
    def mark_dirty(self, tags: TagsInput = None) -> None:
        self.dirty.mark_dirty(tags)

    def is_dirty(self, tags: TagsInput = None) -> bool:
        return self.dirty.is_dirty(tags)

    def rehydrate_if_necessary(self, tags: TagsInput = None) -> bool:
        """Reload the full relation when rehydration is on and `tags` are dirty."""
        if should_rehydrate(self.rehydrates_media, self.dirty, tags):
            self.load_media()
            return True
        return False

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------
    def attach_media(self, media: MediaRefs, tags: TagsInput) -> List[Media]:
        """
        Add `tags` to each referenced media and (re)parent it to this host.

        A UUID that does not resolve raises NotFoundError. A Media value whose
        authoritative copy cannot be re-fetched is used as given; saving it then
        fails in the store if its id is bogus. Batch saves are not atomic.
        """
        tag_set = TagSet.normalize(tags)
        if not tag_set:
            logger.debug("attach_media on %s with no tags: nothing to do", self.host)
            return []

        refs, many = _as_ref_list(media)
        resolved: List[Media] = []
        for ref in refs:
            medium = self._resolve_for_write(ref)
            medium.attach_to(self.host)
            medium.add_tags(tag_set)
            resolved.append(medium)

        if many:
            saved = self.store.save_many(resolved)
        else:
            saved = [self.store.save(resolved[0])]

        self.mark_dirty(tag_set)
        logger.debug("attached %d media to %s with %s", len(saved), self.host, tag_set.as_list())
        return saved

    def sync_media(self, media: MediaRefs, tags: TagsInput) -> List[Media]:
        """
        Replace whatever media currently hold any of `tags` with `media`.
        Two steps, not atomic: a failure in the attach step leaves the tags
        detached. Run it inside one store transaction when that matters.
        """
        self.detach_media_tags(tags)
        return self.attach_media(media, tags)

    def detach_media(self, media: MediaRef, tags: TagsInput = None) -> Media:
        """
        Remove `tags` from the media, or every tag when `tags` is None.
        The media record itself is never deleted, even with no tags left.
        A Media value is re-fetched first when rehydrating, like attach_media;
        an unsaved one raises NotFoundError.
        """
        if isinstance(media, Media) and media.id is None:
            raise NotFoundError("cannot detach tags from unsaved media")

        tag_set = optional_tags(tags)
        if tag_set is not None and not tag_set:
            logger.debug("detach_media on %s with an empty tag list: nothing to do", self.host)
            return media if isinstance(media, Media) else self._require(media)

        medium = self._resolve_for_write(media)
        if tag_set is None:
            medium.clear_tags()
        else:
            medium.remove_tags(tag_set)
        saved = self.store.save(medium)

        self.mark_dirty(tag_set)
        return saved

    def detach_media_tags(self, tags: TagsInput) -> List[Media]:
        """Strip `tags` from every media of this host carrying any of them."""
        tag_filter = TagFilter.build(tags)
        if tag_filter.is_empty:
            return []

        affected = self.store.find_by_tags(self.host, tag_filter)
        saved: List[Media] = []
        for medium in affected:
            medium.remove_tags(tag_filter.tags)
            saved.append(self.store.save(medium))

        self.mark_dirty(tag_filter.tags)
        logger.debug("detached %s from %d media of %s", tag_filter.tags.as_list(), len(saved), self.host)
        return saved

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def get_media(self, tags: TagsInput, match_all: bool = False) -> List[Media]:
        """
        Media carrying any of `tags` (or all of them with match_all=True).
        Match-any filters the cached relation; match-all asks the store.
        No tags means no filter: the whole relation comes back.
        """
        if match_all:
            return self.get_media_match_all(tags)

        tag_filter = TagFilter.build(tags)
        if tag_filter.is_empty:
            return self._unfiltered()
        self.rehydrate_if_necessary(tag_filter.tags)
        return tag_filter.apply(self._full_relation())

    def get_media_match_all(self, tags: TagsInput) -> List[Media]:
        tag_filter = TagFilter.build(tags, match_all=True)
        if tag_filter.is_empty:
            return self._unfiltered()
        self.rehydrate_if_necessary(tag_filter.tags)
        return self.store.find_by_tags(self.host, tag_filter)

    def has_media(self, tags: TagsInput, match_all: bool = False) -> bool:
        return len(self.get_media(tags, match_all)) > 0

    def first_media(self, tags: TagsInput, match_all: bool = False) -> Optional[Media]:
        found = self.get_media(tags, match_all)
        return found[0] if found else None

    def last_media(self, tags: TagsInput, match_all: bool = False) -> Optional[Media]:
        found = self.get_media(tags, match_all)
        return found[-1] if found else None

    def get_all_media_by_tag(self) -> Dict[str, List[Media]]:
        """tag -> media carrying it, relation order. A media with N tags lands in N buckets."""
        self.rehydrate_if_necessary()

        out: Dict[str, List[Media]] = {}
        for medium in self._full_relation():
            for tag in medium.tags:
                out.setdefault(tag, []).append(medium)
        return out

    def get_tags_for_media(self, media: MediaRef) -> TagSet:
        self.rehydrate_if_necessary()

        medium = media if isinstance(media, Media) else self._require(media)
        if self.rehydrates_media and medium.id is not None:
            medium = self.store.get(medium.id) or medium
        return medium.tags or TagSet()

    # -------------------------------------------------------------------------
    # Deletion hook
    # -------------------------------------------------------------------------
    def handle_host_deletion(self, mode: Optional[DeleteMode | str] = None, *, force: bool = False) -> int:
        """
        Post-delete hook: call after the host row was deleted (or trashed).
        Without `mode`, the host's soft_deletes flag and `force` decide.
        Returns the number of media deleted.
        """
        if mode is None:
            mode = resolve_delete_mode(self.host.soft_deletes, force)
        controller = CascadeController(self.store, detach_on_soft_delete=self.detach_on_soft_delete)
        deleted = controller.run(self.host, DeleteMode(mode))
        if deleted:
            self.session.forget(self.host)
        return deleted

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------
    def _full_relation(self) -> List[Media]:
        state = self.state
        if state.loaded and state.loaded_filter is not None:
            # a tag-restricted load does not hold the whole relation
            self.load_media()
        return self.media

    def _unfiltered(self) -> List[Media]:
        self.rehydrate_if_necessary()
        return list(self._full_relation())

    def _resolve_for_write(self, ref: MediaRef) -> Media:
        if isinstance(ref, Media):
            if should_refetch_before_write(self.rehydrates_media, ref.id is not None):
                fresh = self.store.get(ref.id)  # type: ignore[arg-type]
                if fresh is None:
                    logger.warning("media %s not found for refetch; using the given value", ref.id)
                    return ref
                return fresh
            return ref
        return self._require(ref)

    def _require(self, ref: Union[UUID, str]) -> Media:
        media_id = _coerce_uuid(ref)
        found = self.store.get(media_id)
        if found is None:
            raise NotFoundError(f"Media {media_id} not found", media_id=media_id)
        return found

    def __repr__(self) -> str:
        return f"<MediaAssociations host={self.host} loaded={self.media_loaded} dirty={self.dirty!r}>"


def _coerce_uuid(ref: Union[UUID, str]) -> UUID:
    if isinstance(ref, UUID):
        return ref
    if isinstance(ref, str):
        try:
            return UUID(ref)
        except ValueError as e:
            raise NotFoundError(f"Media reference {ref!r} is not a valid id") from e
    raise TypeError(f"unsupported media reference: {type(ref).__name__}")


def _as_ref_list(media: MediaRefs) -> tuple[List[MediaRef], bool]:
    if isinstance(media, (Media, UUID, str)):
        return [media], False
    refs = list(media)
    return refs, True
