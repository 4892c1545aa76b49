from models.database import Base, SessionLocal, get_db, init_db
from models.domain import ProductMapping

__all__ = [
    "Base",
    "SessionLocal",
    "get_db",
    "init_db",
    "ProductMapping",
]
