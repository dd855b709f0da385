from __future__ import annotations

import os
from logging.config import fileConfig

from alembic.operations import ops
from sqlalchemy import engine_from_config, pool

from alembic import context
from educonnect.core.config import settings
from educonnect.core.db import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

target_metadata = Base.metadata

DROP_OPERATIONS = (ops.DropTableOp, ops.DropColumnOp, ops.DropIndexOp, ops.DropConstraintOp)


def _has_drops(operation: ops.MigrateOperation) -> bool:
    if isinstance(operation, DROP_OPERATIONS):
        return True
    return any(_has_drops(child) for child in getattr(operation, "ops", None) or [])


def _refuse_autogenerated_drops(_context, _revision, directives) -> None:
    """Stop autogenerate from emitting drops unless ALLOW_ALEMBIC_DROPS=1."""
    if os.environ.get("ALLOW_ALEMBIC_DROPS") == "1" or not directives:
        return

    upgrade_ops = getattr(directives[0], "upgrade_ops", None)
    if upgrade_ops is not None and _has_drops(upgrade_ops):
        raise SystemExit(
            "Autogenerated revision contains drop operations; check that the models match "
            "the database or set ALLOW_ALEMBIC_DROPS=1."
        )


def run_migrations_offline() -> None:
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        process_revision_directives=_refuse_autogenerated_drops,
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
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            process_revision_directives=_refuse_autogenerated_drops,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
