# storefront/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.utils.settings import DATABASE_URL, DATABASE_ISOLATION_LEVEL, DATABASE_ECHO

Base = declarative_base()


def make_engine(url: str = DATABASE_URL, isolation_level: str | None = DATABASE_ISOLATION_LEVEL, **kwargs):
    options = dict(echo=DATABASE_ECHO, future=True)
    if isolation_level:
        options["isolation_level"] = isolation_level

    if url.startswith("sqlite"):
        # sessions are handed across threads by FastAPI and the test suite
        options["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True

    options.update(kwargs)
    return create_engine(url, **options)


engine = make_engine()

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
