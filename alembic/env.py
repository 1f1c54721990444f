from logging.config import fileConfig

from sqlalchemy import pool

from alembic import context

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _configure_url() -> None:
    # DATABASE_URL (or DB_* pieces) wins over alembic.ini.
    from catalog_api.core.config import get_settings

    settings = get_settings()
    if settings.database_url or settings.db_password:
        # configparser interpolation: a literal % (escaped password characters) must be doubled.
        config.set_main_option("sqlalchemy.url", settings.database_url_resolved.replace("%", "%%"))


def _target_metadata():
    # Imported lazily so the models register on Base.metadata.
    from catalog_api import models  # noqa: F401
    from catalog_api.core.db import Base

    return Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=_target_metadata(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    from catalog_api.core.db import create_db_engine

    connectable = create_db_engine(config.get_main_option("sqlalchemy.url"), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=_target_metadata())

        with context.begin_transaction():
            context.run_migrations()


_configure_url()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
