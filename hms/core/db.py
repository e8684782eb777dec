from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from .config import settings
from .base import Base

def make_sessionmaker(dsn: str | None = None) -> sessionmaker[Session]:
    engine = create_engine(dsn or settings.SQL_DSN, pool_pre_ping=True)
    # the key/value table is the whole schema, so create_all is enough
    Base.metadata.create_all(engine)
    return sessionmaker(engine, expire_on_commit=False)
