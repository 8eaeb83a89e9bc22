"""Module: session."""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from vetclinic.core.config import settings


def build_engine(database_url: str) -> Engine:
    # SQLite is used for local runs and tests; request handlers run on a thread pool.
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:", "sqlite+pysqlite://"):
            options["poolclass"] = StaticPool
        engine = create_engine(database_url, **options)

        # SQLite ignores ON DELETE RESTRICT unless foreign keys are switched on per connection.
        @event.listens_for(engine, "connect")
        def enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine
    return create_engine(database_url, pool_pre_ping=True)


engine = build_engine(settings.database_url)

# One session per request via api.v1.routes.deps.get_db.
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
