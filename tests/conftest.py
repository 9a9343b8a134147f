"""Shared fixtures: in-memory SQLite store, fresh route cache, test client.

Every test gets its own database; StaticPool keeps the single in-memory
connection alive across the TestClient's worker threads.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from cache import RouteCache, get_route_cache
from db import get_session
from main import app
from models import Customer, Invoice
from store import InvoiceStore


@pytest.fixture
def engine():
  engine = create_engine(
    "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool,
  )
  SQLModel.metadata.create_all(engine)
  yield engine
  SQLModel.metadata.drop_all(engine)
  engine.dispose()


@pytest.fixture
def session(engine):
  with Session(engine) as session:
    yield session


@pytest.fixture
def store(session):
  return InvoiceStore(session)


@pytest.fixture
def cache():
  return RouteCache()


@pytest.fixture
def customer(session):
  c = Customer(name="Lee Robinson", email="lee@robinson.com")
  session.add(c)
  session.commit()
  session.refresh(c)
  return c


@pytest.fixture
def invoice(session, customer):
  inv = Invoice(customer_id=customer.id, amount=15795, status="pending", date="2022-12-06")
  session.add(inv)
  session.commit()
  session.refresh(inv)
  return inv


def _refuse_commit():
  raise OperationalError("COMMIT", {}, Exception("connection refused"))


@pytest.fixture
def failing_store(session, invoice, monkeypatch):
  """Store whose every commit fails, as if the database went away mid-request."""
  monkeypatch.setattr(session, "commit", _refuse_commit)
  return InvoiceStore(session)


@pytest.fixture
def client(engine, cache):
  """Client with DB session and route cache dependencies overridden."""
  def override_get_session():
    with Session(engine) as s:
      yield s

  app.dependency_overrides[get_session] = override_get_session
  app.dependency_overrides[get_route_cache] = lambda: cache
  yield TestClient(app, follow_redirects=False)
  app.dependency_overrides.clear()
