"""Alembic environment; the target database comes from the app's Settings."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url

from DiscordMirror import models  # noqa: F401  registers tables on Base.metadata
from DiscordMirror.db import DATABASE_URL, Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _sync_db_url() -> str:
    # Migrations run on sync drivers: psycopg for Postgres, pysqlite for SQLite
    url = make_url(DATABASE_URL)
    backend = url.get_backend_name()
    driver = "postgresql+psycopg" if backend == "postgresql" else backend
    return url.set(drivername=driver).render_as_string(hide_password=False)


if context.is_offline_mode():
    context.configure(url=_sync_db_url(), target_metadata=Base.metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()
else:
    with create_engine(_sync_db_url()).connect() as connection:
        context.configure(connection=connection, target_metadata=Base.metadata)
        with context.begin_transaction():
            context.run_migrations()
