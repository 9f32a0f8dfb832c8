"""
Database configuration and session management

Tables are declared against two symbolic schemas: ``platform`` for the global
registry and ``tenant`` for the per-company data partition. Sessions resolve
the symbols to real schema names through ``schema_translate_map``, so one set
of models serves every company schema.
"""
import logging
import re
from contextlib import contextmanager
from typing import Callable, ContextManager, Dict, Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.schema import CreateSchema

from saas_console.core.config import settings
from saas_console.core.exceptions import TenantSchemaError

logger = logging.getLogger(__name__)

PLATFORM = "platform"
TENANT = "tenant"

SCHEMA_NAME_RE = re.compile(r"^[a-z_][a-z0-9_]{0,62}$")

TenantSessionFactory = Callable[[str], ContextManager[Session]]

# Convert async URL to sync URL
database_url = settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://")

engine_kwargs = {"echo": settings.DEBUG, "pool_pre_ping": True}
if database_url.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    engine_kwargs.update(
        {
            "pool_size": settings.DATABASE_POOL_SIZE,
            "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        }
    )

engine = create_engine(database_url, **engine_kwargs)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

# Declarative bases, one per schema family
PlatformBase = declarative_base()
TenantBase = declarative_base()


def schema_map(tenant_schema: Optional[str] = None) -> Dict[str, Optional[str]]:
    """Translate map for the platform schema, plus a tenant schema if given"""
    mapping: Dict[str, Optional[str]] = {PLATFORM: settings.PLATFORM_SCHEMA}
    if tenant_schema is not None:
        mapping[TENANT] = tenant_schema
    return mapping


def validate_schema_name(schema_name: str) -> str:
    if not schema_name or not SCHEMA_NAME_RE.match(schema_name):
        raise TenantSchemaError(f"Invalid schema name: {schema_name!r}")
    return schema_name


def _bind(bind: Engine, tenant_schema: Optional[str] = None) -> Engine:
    return bind.execution_options(schema_translate_map=schema_map(tenant_schema))


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get a platform (global schema) session

    Usage:
        @router.get("/")
        def read_data(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal(bind=_bind(engine))
    try:
        yield db
    except Exception as e:
        db.rollback()
        logger.error("Database error in platform session: %s", e)
        raise
    finally:
        db.close()


@contextmanager
def tenant_session(schema_name: str) -> Generator[Session, None, None]:
    """Open a session pinned to one company's isolated schema"""
    validate_schema_name(schema_name)
    db = SessionLocal(bind=_bind(engine, schema_name))
    try:
        yield db
    except Exception as e:
        db.rollback()
        logger.error("Database error in tenant schema %s: %s", schema_name, e)
        raise
    finally:
        db.close()


def get_tenant_session_factory() -> TenantSessionFactory:
    """Dependency returning the schema-scoped session opener"""
    return tenant_session


def create_tenant_tables(connection: Connection, schema_name: str) -> None:
    """Create the tenant tables inside ``schema_name`` on an open connection"""
    validate_schema_name(schema_name)
    scoped = connection.execution_options(schema_translate_map=schema_map(schema_name))
    TenantBase.metadata.create_all(scoped)


def provision_tenant_schema(schema_name: str) -> None:
    """Create a company's isolated schema and its tables"""
    validate_schema_name(schema_name)
    try:
        with engine.begin() as conn:
            if engine.dialect.name == "postgresql":
                conn.execute(CreateSchema(schema_name, if_not_exists=True))
            create_tenant_tables(conn, schema_name)
    except Exception as e:
        logger.error("Provisioning schema %s failed: %s", schema_name, e)
        raise TenantSchemaError(f"Could not provision schema {schema_name}") from e
    logger.info("Provisioned tenant schema %s", schema_name)


def test_connection() -> bool:
    """Check that the backend answers a trivial query"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error("Database connection check failed: %s", e)
        return False


def init_db():
    """Create the platform schema and tables (for development only)"""
    # Registers every model on its metadata
    import saas_console.models  # noqa: F401

    with engine.begin() as conn:
        if engine.dialect.name == "postgresql":
            conn.execute(CreateSchema(settings.PLATFORM_SCHEMA, if_not_exists=True))
        scoped = conn.execution_options(schema_translate_map=schema_map())
        PlatformBase.metadata.create_all(scoped)
    logger.info("Platform schema %s ready", settings.PLATFORM_SCHEMA)
