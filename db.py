# db.py
import os
from typing import Optional
from dotenv import load_dotenv
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()

_engine: Optional[Engine] = None

def get_engine() -> Engine:
  global _engine
  if _engine is None:
    if not DATABASE_URL:
      raise RuntimeError("DATABASE_URL must be set (environment or .env) to reach the invoices database")
    _engine = create_engine(DATABASE_URL, echo=False, pool_pre_ping=True)
  return _engine

def init_db() -> None:
  SQLModel.metadata.create_all(get_engine())

def get_session():
  with Session(get_engine()) as session:
    yield session
