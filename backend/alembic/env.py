import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from resume_builder.core.config import settings
from resume_builder.core.database import Base, Database
import resume_builder.models  # noqa: F401 - users, resumes and the résumé child tables

config = context.config
database_url = os.getenv("ALEMBIC_DATABASE_URL", settings.DATABASE_URL)
config.set_main_option("sqlalchemy.url", database_url)

if config.config_file_name:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit the résumé schema as SQL without connecting."""
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    database = Database(database_url, poolclass=pool.NullPool)
    try:
        with database.engine.connect() as connection:
            context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        database.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
