# store.py
import logging
from contextlib import contextmanager

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from models import Invoice

logger = logging.getLogger(__name__)


class StoreError(Exception):
  """A write against the invoices table was rejected or never reached the database."""

  def __init__(self, operation: str, detail: str = ""):
    self.operation = operation
    self.detail = detail
    super().__init__(f"{operation} failed: {detail}" if detail else f"{operation} failed")


class InvoiceStore:
  """One statement per call, committed on its own. Values are always bound parameters."""

  def __init__(self, session: Session):
    self.session = session

  @contextmanager
  def _write(self, operation: str):
    try:
      yield
      self.session.commit()
    except (SQLAlchemyError, OverflowError, ValueError) as e:
      self.session.rollback()
      logger.exception("invoice %s failed", operation)
      raise StoreError(operation, str(e)) from e

  def insert(self, customer_id: str, amount: int, status: str, date: str) -> str:
    inv = Invoice(customer_id=customer_id, amount=amount, status=status, date=date)
    invoice_id = inv.id
    with self._write("insert"):
      self.session.add(inv)
    return invoice_id

  def update(self, invoice_id: str, customer_id: str, amount: int, status: str) -> int:
    stmt = (
      update(Invoice)
      .where(Invoice.id == invoice_id)
      .values(customer_id=customer_id, amount=amount, status=status)
    )
    with self._write("update"):
      result = self.session.exec(stmt)
    return result.rowcount

  def delete(self, invoice_id: str) -> int:
    stmt = delete(Invoice).where(Invoice.id == invoice_id)
    with self._write("delete"):
      result = self.session.exec(stmt)
    return result.rowcount
