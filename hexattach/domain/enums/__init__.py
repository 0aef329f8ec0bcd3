from hexattach.domain.enums.aggregate_type import AggregateType
from hexattach.domain.enums.delete_mode import DeleteMode
__all__ = [
    "AggregateType",
    "DeleteMode",
]
