"""Alembic environment for Flask-Migrate."""

from logging.config import fileConfig
import logging

from alembic import context
from flask import current_app

config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger('alembic.env')

db = current_app.extensions['migrate'].db
config.set_main_option('sqlalchemy.url', db.engine.url.render_as_string(hide_password=False).replace('%', '%%'))
target_metadata = db.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode (no engine needed)."""
    context.configure(
        url=config.get_main_option('sqlalchemy.url'),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode (with the app's engine)."""
    with db.engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            **current_app.extensions['migrate'].configure_args
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    logger.info("Running migrations in offline mode")
    run_migrations_offline()
else:
    logger.info("Running migrations in online mode")
    run_migrations_online()
