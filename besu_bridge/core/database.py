"""
Database utilities and session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

Base = declarative_base()


def create_db_engine(connection_string: str) -> Engine:
    # NullPool: every request opens and closes its own connection
    return create_engine(connection_string, poolclass=NullPool, echo=False)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
