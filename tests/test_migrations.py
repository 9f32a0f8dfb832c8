"""The platform migration matches the model metadata"""
import importlib.util
import io
import re
from pathlib import Path

import pytest
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext

import saas_console.models  # noqa: F401
from saas_console.core.database import PlatformBase

MIGRATION = Path(__file__).resolve().parents[1] / "alembic" / "versions" / "20261019_01_platform_schema.py"


@pytest.fixture(scope="module")
def upgrade_sql():
    spec = importlib.util.spec_from_file_location("platform_schema_migration", MIGRATION)
    migration = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(migration)

    buffer = io.StringIO()
    context = MigrationContext.configure(
        dialect_name="postgresql",
        opts={"as_sql": True, "output_buffer": buffer},
    )
    with Operations.context(context):
        migration.upgrade()
    return buffer.getvalue()


def test_creates_every_platform_table(upgrade_sql):
    for table in PlatformBase.metadata.sorted_tables:
        assert f"CREATE TABLE saas02.{table.name} " in upgrade_sql


def test_indexes_match_models(upgrade_sql):
    created = set(re.findall(r"CREATE (UNIQUE )?INDEX \S+ ON saas02\.(\w+) \(([^)]*)\)", upgrade_sql))
    expected = {
        ("UNIQUE " if index.unique else "", table.name, ", ".join(c.name for c in index.columns))
        for table in PlatformBase.metadata.sorted_tables
        for index in table.indexes
    }

    assert expected
    assert created == expected
