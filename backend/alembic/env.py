"""
Alembic environment for the hotel booking schema.
Runs migrations online against DATABASE_URL_SYNC, or emits SQL offline.
"""

from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context

from hotel_booking.db.base import Base
import hotel_booking.models  # noqa: F401 - register models for autogenerate
from hotel_booking.core.config import get_settings

config = context.config
config.set_main_option("sqlalchemy.url", get_settings().DATABASE_URL_SYNC)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
