# actions.py
"""Invoice form actions: validate, write one row, invalidate the listing, redirect.

Every action gets the store and route cache passed in and reports back with a
``State`` (errors and/or a message for the form to show) or a ``Redirect`` the
HTTP layer has to follow.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field

from cache import INVOICES_PATH, RouteCache
from schemas import CreateInvoice, UpdateInvoice, safe_parse
from store import InvoiceStore, StoreError

logger = logging.getLogger(__name__)

FORM_FIELDS = ("customerId", "amount", "status")


class State(BaseModel):
  errors: Optional[Dict[str, List[str]]] = None
  message: Optional[str] = None
  ok: bool = Field(default=True, exclude=True)


class Redirect(BaseModel):
  location: str


ActionResult = Union[State, Redirect]


def amount_in_cents(amount: Decimal) -> int:
  return int((amount * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def today() -> str:
  return datetime.now(timezone.utc).date().isoformat()


def _form_fields(form: Mapping[str, Any]) -> Dict[str, Any]:
  return {name: form.get(name) for name in FORM_FIELDS}


def create_invoice(
  prev_state: Optional[State],
  form: Mapping[str, Any],
  store: InvoiceStore,
  cache: RouteCache,
) -> ActionResult:
  parsed = safe_parse(CreateInvoice, _form_fields(form))
  if not parsed.success:
    logger.warning("create invoice rejected: %s", sorted(parsed.errors))
    return State(
      errors=parsed.errors,
      message="Missing Fields. Failed to Create Invoice.",
      ok=False,
    )

  data = parsed.data
  try:
    invoice_id = store.insert(data.customer_id, amount_in_cents(data.amount), data.status, today())
  except StoreError:
    return State(message="Database Error: Failed to Create Invoice.", ok=False)

  logger.info("created invoice %s", invoice_id)
  cache.revalidate_path(INVOICES_PATH)
  return Redirect(location=INVOICES_PATH)


def update_invoice(
  invoice_id: str,
  form: Mapping[str, Any],
  store: InvoiceStore,
  cache: RouteCache,
) -> ActionResult:
  parsed = safe_parse(UpdateInvoice, _form_fields(form))
  if not parsed.success:
    logger.warning("update invoice %s rejected: %s", invoice_id, sorted(parsed.errors))
    return State(
      errors=parsed.errors,
      message="Missing Fields. Failed to Update Invoice.",
      ok=False,
    )

  data = parsed.data
  try:
    store.update(invoice_id, data.customer_id, amount_in_cents(data.amount), data.status)
  except StoreError:
    return State(message="Database Error: Failed to Update Invoice.", ok=False)

  logger.info("updated invoice %s", invoice_id)
  cache.revalidate_path(INVOICES_PATH)
  return Redirect(location=INVOICES_PATH)


def delete_invoice(invoice_id: str, store: InvoiceStore, cache: RouteCache) -> State:
  try:
    store.delete(invoice_id)
  except StoreError:
    return State(message="Database Error: Failed to Delete Invoice.", ok=False)

  logger.info("deleted invoice %s", invoice_id)
  cache.revalidate_path(INVOICES_PATH)
  return State(message="Deleted Invoice.")
