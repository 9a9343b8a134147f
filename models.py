# models.py
from uuid import uuid4
from sqlmodel import SQLModel, Field

class Customer(SQLModel, table=True):
  __tablename__ = "customers"

  id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True, index=True)
  name: str
  email: str
  image_url: str = ""

class Invoice(SQLModel, table=True):
  __tablename__ = "invoices"

  id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True, index=True)
  customer_id: str = Field(foreign_key="customers.id", index=True)
  amount: int  # cents
  status: str = "pending"  # pending|paid
  date: str  # YYYY-MM-DD

class InvoiceRow(SQLModel):
  id: str
  customer_id: str
  name: str
  email: str
  image_url: str
  amount: int
  status: str
  date: str

class InvoiceEdit(SQLModel):
  id: str
  customer_id: str
  amount: float  # dollars
  status: str
