"""Database models and bootstrap helpers."""

from .db_init import init_db
from .db_models import Base, StoreModel, TvStatusModel

__all__ = ["Base", "StoreModel", "TvStatusModel", "init_db"]
