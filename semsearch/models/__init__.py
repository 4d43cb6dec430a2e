from semsearch.models.base import Base
from semsearch.models.record import Record

__all__ = [
    "Base",
    "Record",
]
