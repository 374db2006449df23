import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from dotenv import load_dotenv

load_dotenv()

config = context.config

# DATABASE_URL trong .env thắng alembic.ini; mặc định giống create_app()
db_url = os.getenv("DATABASE_URL") or config.get_main_option(
    "sqlalchemy.url", "sqlite:///equipment.db"
)
config.set_main_option("sqlalchemy.url", db_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# import model để metadata có đủ 4 bảng
from configs import db  # noqa: E402
from db.models import (  # noqa: E402,F401
    InventoryItem,
    MovementRequest,
    RequestItem,
    User,
)

target_metadata = db.metadata
IS_SQLITE = db_url.startswith("sqlite")


def include_object(obj, name, type_, reflected, compare_to):
    # bảng nội bộ của sqlite và bảng version của alembic không thuộc model
    if type_ == "table" and reflected and compare_to is None:
        return name in target_metadata.tables
    return True


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        include_object=include_object,
        # SQLite không ALTER được cột -> batch mode
        render_as_batch=IS_SQLITE,
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
