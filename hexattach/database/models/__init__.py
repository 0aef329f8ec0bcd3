# hexattach/database/models/__init__.py

from hexattach.database.core.main import Base
from hexattach.database.models.media import Media

__all__ = [
    "Base",
    "Media",
]
