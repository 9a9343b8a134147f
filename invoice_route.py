# invoice_route.py
from typing import List, Optional, Union
from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import JSONResponse, RedirectResponse
from sqlmodel import Session, col, select

import actions
from actions import Redirect, State
from cache import INVOICES_PATH, RouteCache, get_route_cache
from db import get_session
from models import Customer, Invoice, InvoiceEdit, InvoiceRow
from store import InvoiceStore

router = APIRouter(tags=["invoices"])

def get_store(session: Session = Depends(get_session)) -> InvoiceStore:
  return InvoiceStore(session)

def _match(q: str, *values: str) -> bool:
  ql = q.strip().lower()
  return any(ql in (v or "").lower() for v in values)

def _respond(result: Union[State, Redirect]):
  if isinstance(result, Redirect):
    return RedirectResponse(result.location, status_code=303)
  if result.ok:
    status_code = 200
  elif result.errors:
    status_code = 422
  else:
    status_code = 500
  return JSONResponse(result.model_dump(), status_code=status_code)

# ---- form actions ----

@router.post("/dashboard/invoices/create")
def create_invoice(
  customerId: Optional[str] = Form(None),
  amount: Optional[str] = Form(None),
  status: Optional[str] = Form(None),
  store: InvoiceStore = Depends(get_store),
  cache: RouteCache = Depends(get_route_cache),
):
  form = {"customerId": customerId, "amount": amount, "status": status}
  return _respond(actions.create_invoice(None, form, store, cache))

@router.post("/dashboard/invoices/{invoice_id}/edit")
def update_invoice(
  invoice_id: str,
  customerId: Optional[str] = Form(None),
  amount: Optional[str] = Form(None),
  status: Optional[str] = Form(None),
  store: InvoiceStore = Depends(get_store),
  cache: RouteCache = Depends(get_route_cache),
):
  form = {"customerId": customerId, "amount": amount, "status": status}
  return _respond(actions.update_invoice(invoice_id, form, store, cache))

@router.post("/dashboard/invoices/{invoice_id}/delete")
def delete_invoice(
  invoice_id: str,
  store: InvoiceStore = Depends(get_store),
  cache: RouteCache = Depends(get_route_cache),
):
  return _respond(actions.delete_invoice(invoice_id, store, cache))

# ---- reads backing the dashboard pages ----

def _invoice_rows(session: Session) -> List[dict]:
  stmt = (
    select(Invoice, Customer)
    .join(Customer, Customer.id == Invoice.customer_id)
    .order_by(col(Invoice.date).desc())
  )
  return [
    InvoiceRow(
      id=inv.id, customer_id=inv.customer_id, name=c.name, email=c.email,
      image_url=c.image_url, amount=inv.amount, status=inv.status, date=inv.date,
    ).model_dump()
    for inv, c in session.exec(stmt).all()
  ]

@router.get("/api/invoices", response_model=List[InvoiceRow])
def list_invoices(
  q: Optional[str] = None,
  session: Session = Depends(get_session),
  cache: RouteCache = Depends(get_route_cache),
):
  rows = cache.get(INVOICES_PATH)
  if rows is None:
    rows = _invoice_rows(session)
    cache.put(INVOICES_PATH, rows)
  if not q:
    return rows
  return [
    r for r in rows
    if _match(q, r["name"], r["email"], r["status"], r["date"], str(r["amount"] / 100))
  ]

@router.get("/api/invoices/{invoice_id}", response_model=InvoiceEdit)
def get_invoice(invoice_id: str, session: Session = Depends(get_session)):
  inv = session.get(Invoice, invoice_id)
  if not inv:
    raise HTTPException(status_code=404, detail="Invoice not found")
  return InvoiceEdit(id=inv.id, customer_id=inv.customer_id, amount=inv.amount / 100, status=inv.status)

@router.get("/api/customers", response_model=List[Customer])
def list_customers(session: Session = Depends(get_session)):
  return session.exec(select(Customer).order_by(col(Customer.name))).all()

@router.post("/api/seed")
def seed_if_empty(
  session: Session = Depends(get_session),
  cache: RouteCache = Depends(get_route_cache),
):
  # Seed only if DB is empty
  any_customer = session.exec(select(Customer)).first()
  if any_customer:
    return {"ok": True, "seeded": False}

  customers = [
    Customer(name="Delba de Oliveira", email="delba@oliveira.com", image_url="/customers/delba-de-oliveira.png"),
    Customer(name="Lee Robinson", email="lee@robinson.com", image_url="/customers/lee-robinson.png"),
    Customer(name="Michael Novotny", email="michael@novotny.com", image_url="/customers/michael-novotny.png"),
  ]
  session.add_all(customers)
  session.add_all([
    Invoice(customer_id=customers[0].id, amount=15795, status="pending", date="2022-12-06"),
    Invoice(customer_id=customers[1].id, amount=20348, status="pending", date="2022-11-14"),
    Invoice(customer_id=customers[2].id, amount=3040, status="paid", date="2022-10-29"),
  ])
  session.commit()
  cache.revalidate_path(INVOICES_PATH)
  return {"ok": True, "seeded": True}
