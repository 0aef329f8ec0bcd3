from hexattach.services.associations.session import AssociationSession, HostMediaState
from hexattach.services.associations.manager import MediaAssociations
from hexattach.services.associations.cascade import CascadeController
from hexattach.services.associations.collection import MediaAssociationCollection
from hexattach.services.associations.queries import where_has_media, where_has_media_match_all

__all__ = [
    "AssociationSession",
    "HostMediaState",
    "MediaAssociations",
    "CascadeController",
    "MediaAssociationCollection",
    "where_has_media",
    "where_has_media_match_all",
]
