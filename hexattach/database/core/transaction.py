# hexattach/database/core/transaction.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def transactional(db: Session) -> Iterator[Session]:
    """
    Run a block in one transaction (or a SAVEPOINT when one is already open),
    e.g. to make sync_media's detach+attach all-or-nothing.
    """
    if db.in_transaction():
        with db.begin_nested():
            yield db
    else:
        with db.begin():
            yield db
