# hexattach/database/repos/media_repo.py
from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hexattach.common.iter import chunked
from hexattach.common.logging import get_logger
from hexattach.common.settings import get_settings
from hexattach.database.models.media import Media as DBMedia
from hexattach.database.repos._filters import host_clause, live_clause, tag_filter_clause
from hexattach.database.repos._mapping import apply_domain_to_orm, to_domain_media
from hexattach.domain.entities.host import HostRef
from hexattach.domain.entities.media import Media as DomainMedia
from hexattach.domain.errors import StoreConflictError, StoreError
from hexattach.domain.policies.tag_filter import TagFilter
from hexattach.domain.ports.association_store import AssociationStorePort

logger = get_logger(__name__)


class SqlAlchemyAssociationStore(AssociationStorePort):
    """
    PostgreSQL-backed association store. Tag filters are pushed down as array
    operators; reads skip trashed media and come back in insertion (`seq`) order.

    Every write runs in a SAVEPOINT, so a failed write (e.g. a duplicate
    storage location) leaves the caller's transaction usable. The caller owns
    commit/rollback.
    """

    def __init__(self, db: Session, *, batch_size: Optional[int] = None) -> None:
        self.db = db
        self.batch_size = batch_size or get_settings().associations.batch_size

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def get(self, media_id: UUID) -> Optional[DomainMedia]:
        try:
            row = self.db.get(DBMedia, media_id, populate_existing=True)
        except SQLAlchemyError as e:
            raise StoreError(f"failed to load media {media_id}") from e
        if row is None or row.deleted_at is not None:
            return None
        return to_domain_media(row)

    def find_all(self, host: HostRef) -> List[DomainMedia]:
        stmt = select(DBMedia).where(host_clause(host), live_clause()).order_by(DBMedia.seq.asc())
        return self._fetch(stmt, f"media of {host}")

    def find_by_tags(self, host: HostRef, tag_filter: TagFilter) -> List[DomainMedia]:
        stmt = (
            select(DBMedia)
            .where(host_clause(host), live_clause(), tag_filter_clause(tag_filter))
            .order_by(DBMedia.seq.asc())
        )
        return self._fetch(stmt, f"media of {host} matching {tag_filter.describe()}")

    def find_for_hosts(
        self,
        hosts: Sequence[HostRef],
        tag_filter: Optional[TagFilter] = None,
    ) -> Dict[Tuple[str, str], List[DomainMedia]]:
        ids_by_type: Dict[str, List[str]] = defaultdict(list)
        for h in hosts:
            if h.host_id not in ids_by_type[h.host_type]:
                ids_by_type[h.host_type].append(h.host_id)

        out: Dict[Tuple[str, str], List[DomainMedia]] = {}
        for host_type, host_ids in ids_by_type.items():
            for batch in chunked(host_ids, self.batch_size):
                stmt = (
                    select(DBMedia)
                    .where(DBMedia.host_type == host_type, DBMedia.host_id.in_(batch), live_clause())
                    .order_by(DBMedia.seq.asc())
                )
                if tag_filter is not None:
                    stmt = stmt.where(tag_filter_clause(tag_filter))
                for media in self._fetch(stmt, f"media of {len(batch)} {host_type} hosts"):
                    out.setdefault((host_type, media.host_id), []).append(media)  # type: ignore[arg-type]
        return out

    def find_host_ids_with_media(self, host_type: str, tag_filter: TagFilter) -> List[str]:
        stmt = select(DBMedia.host_id).where(DBMedia.host_type == host_type, live_clause())
        if not tag_filter.is_empty:
            stmt = stmt.where(tag_filter_clause(tag_filter))
        stmt = stmt.group_by(DBMedia.host_id).order_by(func.min(DBMedia.seq).asc())
        try:
            return [hid for (hid,) in self.db.execute(stmt).all()]
        except SQLAlchemyError as e:
            raise StoreError(f"failed to query {host_type} hosts with media") from e

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    def save(self, media: DomainMedia) -> DomainMedia:
        try:
            with self.db.begin_nested():
                if media.id is None:
                    orm = apply_domain_to_orm(DBMedia(), media)
                    self.db.add(orm)
                else:
                    orm = self.db.get(DBMedia, media.id)
                    if orm is None:
                        raise StoreError(f"Media {media.id} does not exist")
                    apply_domain_to_orm(orm, media)
                self.db.flush()
            self.db.refresh(orm)
        except IntegrityError as e:
            raise StoreConflictError(f"media location or id conflict: {media.location.disk_path()}") from e  # type: ignore[union-attr]
        except SQLAlchemyError as e:
            raise StoreError(f"failed to save media {media.location.disk_path()}") from e  # type: ignore[union-attr]

        if media.id is None:
            media.id = orm.id
        logger.debug("saved media %s tags=%s", orm.id, orm.tags)
        return to_domain_media(orm)

    def save_many(self, media: Iterable[DomainMedia]) -> List[DomainMedia]:
        # record by record: no cross-record atomicity beyond the caller's transaction
        return [self.save(m) for m in media]

    def delete(self, media: DomainMedia) -> None:
        if media.id is None:
            raise StoreError("cannot delete unsaved media")
        try:
            with self.db.begin_nested():
                orm = self.db.get(DBMedia, media.id)
                if orm is None:
                    raise StoreError(f"Media {media.id} does not exist")
                self.db.delete(orm)
                self.db.flush()
        except SQLAlchemyError as e:
            raise StoreError(f"failed to delete media {media.id}") from e

    def trash(self, media: DomainMedia) -> DomainMedia:
        """Soft delete: keep the row, hide it from every read."""
        media.trash()
        return self.save(media)

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------
    def _fetch(self, stmt, what: str) -> List[DomainMedia]:
        try:
            rows = self.db.execute(stmt.execution_options(populate_existing=True)).scalars().all()
        except SQLAlchemyError as e:
            raise StoreError(f"failed to load {what}") from e
        return [to_domain_media(r) for r in rows]
