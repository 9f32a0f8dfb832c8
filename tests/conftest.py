"""
Shared fixtures

The platform registry lives in one in-memory SQLite database; every company
schema gets its own in-memory database so membership stays isolated per
company the way separate PostgreSQL schemas are.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from contextlib import contextmanager  # noqa: E402
from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import saas_console.models  # noqa: E402,F401
from saas_console.core.database import (  # noqa: E402
    PLATFORM,
    TENANT,
    PlatformBase,
    SessionLocal,
    TenantBase,
    get_db,
    get_tenant_session_factory,
)
from saas_console.core.security import hash_password  # noqa: E402
from saas_console.models.company import Company  # noqa: E402
from saas_console.models.tenant import User  # noqa: E402
from saas_console.models.user import AuthAccount, SuperAdmin  # noqa: E402
from main import app  # noqa: E402

SQLITE_SCHEMAS = {PLATFORM: None, TENANT: None}
PASSWORD = "Secret123!"


def _memory_engine(metadata):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    with engine.begin() as conn:
        metadata.create_all(conn.execution_options(schema_translate_map=SQLITE_SCHEMAS))
    return engine


def _session(engine):
    return SessionLocal(bind=engine.execution_options(schema_translate_map=SQLITE_SCHEMAS))


class TenantDatabases:
    """One database per company schema, created on first use"""

    def __init__(self):
        self.engines = {}
        self.opened = []

    def provision(self, schema_name):
        if schema_name not in self.engines:
            self.engines[schema_name] = _memory_engine(TenantBase.metadata)
        return self.engines[schema_name]

    @contextmanager
    def open(self, schema_name):
        self.opened.append(schema_name)
        db = _session(self.provision(schema_name))
        try:
            yield db
        finally:
            db.close()

    def dispose(self):
        for engine in self.engines.values():
            engine.dispose()


@pytest.fixture
def platform_engine():
    engine = _memory_engine(PlatformBase.metadata)
    yield engine
    engine.dispose()


@pytest.fixture
def db(platform_engine):
    session = _session(platform_engine)
    yield session
    session.close()


@pytest.fixture
def tenants():
    databases = TenantDatabases()
    yield databases
    databases.dispose()


@pytest.fixture
def client(platform_engine, tenants, monkeypatch):
    def override_get_db():
        session = _session(platform_engine)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_tenant_session_factory] = lambda: tenants.open
    monkeypatch.setattr(
        "saas_console.api.v1.endpoints.companies.provision_tenant_schema",
        tenants.provision,
    )

    yield TestClient(app)

    app.dependency_overrides.clear()


# -------------------------
# DATA BUILDERS
# -------------------------
@pytest.fixture
def make_account(db):
    def _make(email, password=PASSWORD, is_active=True):
        account = AuthAccount(email=email, password_hash=hash_password(password), is_active=is_active)
        db.add(account)
        db.commit()
        return account

    return _make


@pytest.fixture
def make_superadmin(db, make_account):
    def _make(email="root@platform.io", password=PASSWORD):
        db.add(SuperAdmin(email=email, name="Root", is_active=True))
        db.commit()
        return make_account(email, password)

    return _make


@pytest.fixture
def make_company(db, tenants):
    def _make(slug, verified=True, created_at=None, name=None):
        company = Company(
            name=name or slug.title(),
            slug=slug,
            schema_name=f"saas01_{slug.replace('-', '_')}",
            admin_email=f"admin@{slug}.com",
            is_verified=verified,
            created_at=created_at or datetime.utcnow(),
        )
        db.add(company)
        db.commit()
        tenants.provision(company.schema_name)
        return company

    return _make


@pytest.fixture
def add_tenant_user(tenants):
    def _add(company, email, role="user", is_active=True):
        with tenants.open(company.schema_name) as tenant_db:
            tenant_db.add(User(name=email.split("@")[0], email=email, role=role, is_active=is_active))
            tenant_db.commit()

    return _add


@pytest.fixture
def login(client):
    def _login(email, password=PASSWORD):
        return client.post("/api/v1/auth/login", json={"email": email, "password": password})

    return _login


def bearer(response):
    return {"Authorization": f"Bearer {response.json()['tokens']['access_token']}"}


@pytest.fixture
def superadmin_headers(make_superadmin, login):
    make_superadmin()
    return bearer(login("root@platform.io"))


@pytest.fixture
def company_context(make_company, make_account, add_tenant_user, login):
    """A verified company with one admin who is signed in"""
    company = make_company("acme")
    make_account("owner@acme.com")
    add_tenant_user(company, "owner@acme.com", role="admin")
    return company, bearer(login("owner@acme.com"))
