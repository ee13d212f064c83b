"""Application ports package."""

from .database import DatabaseEnginePort
from .record_store import Record, RecordStorePort

__all__ = [
    "DatabaseEnginePort",
    "Record",
    "RecordStorePort",
]
