"""Alembic environment for the finance learning schema."""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from finlearn.config import get_settings
from finlearn.db.base import Base
from finlearn.db import models  # noqa: F401 - Import models to register them

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    """
    Sync database URL for migrations.

    `alembic -x db_url=sqlite:///local.db upgrade head` overrides the
    URL built from settings (handy for throwaway local databases).
    """
    override = context.get_x_argument(as_dictionary=True).get("db_url")
    return override or get_settings().database_url_sync


def _configure_kwargs(url: str) -> dict:
    # SQLite can't ALTER most things in place; batch mode recreates tables
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """Emit SQL to the script output instead of running it."""
    url = get_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_kwargs(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live database with a sync driver."""
    url = get_url()
    connectable = create_engine(url, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_kwargs(url))

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
