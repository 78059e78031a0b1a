from logging.config import fileConfig
import os

from sqlalchemy import engine_from_config, pool
from alembic import context
from dotenv import load_dotenv
from sqlmodel import SQLModel

# Load environment variables
load_dotenv(".env")

# Alembic Config
config = context.config

# Logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Every model has to be imported so SQLModel registers its table
from fiscaal.models.company import Company
from fiscaal.models.client import Client
from fiscaal.models.product import Product
from fiscaal.models.invoice import Invoice
from fiscaal.models.invoice_line import InvoiceLine
from fiscaal.models.invoice_counter import InvoiceCounter
from fiscaal.models.expense import Expense
from fiscaal.models.kilometer import KilometerEntry
from fiscaal.models.btw_declaration import BTWDeclaration

target_metadata = SQLModel.metadata


def get_database_url() -> str:
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        from fiscaal.core.config import settings
        database_url = settings.DATABASE_URL
    return database_url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = get_database_url()

    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    config.set_main_option("sqlalchemy.url", get_database_url())

    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
