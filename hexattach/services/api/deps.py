# hexattach/services/api/deps.py
from __future__ import annotations
from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from hexattach.database.core.main import SessionLocal
from hexattach.database.repos.media_repo import SqlAlchemyAssociationStore
from hexattach.domain.entities.host import HostRef
from hexattach.domain.ports.association_store import AssociationStorePort
from hexattach.services.associations.manager import MediaAssociations
from hexattach.services.associations.session import AssociationSession


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def transactional_session(db: Session = Depends(get_db)) -> Generator[Session, None, None]:
    """
    Request-scoped transaction. Every store call made while handling the
    request shares it, so sync (detach + attach) commits or rolls back as one.
    """
    with db.begin():
        yield db


def get_association_store(db: Session = Depends(transactional_session)) -> AssociationStorePort:
    return SqlAlchemyAssociationStore(db)


def get_association_session() -> AssociationSession:
    """One association cache per request; dirty tags never outlive it."""
    return AssociationSession()


def host_media(
    host_type: str,
    host_id: str,
    store: AssociationStorePort = Depends(get_association_store),
    session: AssociationSession = Depends(get_association_session),
) -> MediaAssociations:
    return MediaAssociations(HostRef.of(host_type, host_id), store, session=session)
