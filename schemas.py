# schemas.py
"""Invoice form schemas.

Form submissions carry every field as text (or nothing at all when a field
was left out), so each field is coerced and checked in a ``before`` validator
that raises one fixed, user-facing message. ``safe_parse`` turns a failed
validation into a field -> messages mapping instead of raising.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Literal, Mapping, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

STATUSES = ("pending", "paid")

# amount is stored as cents in a signed 64-bit integer column
MAX_CENTS = 2**63 - 1
MAX_AMOUNT = Decimal(MAX_CENTS) / 100

CUSTOMER_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than $0."
STATUS_MESSAGE = "Please select an invoice status."

# fallback for errors pydantic raises before our validators run (e.g. missing keys)
FIELD_MESSAGES = {
  "customerId": CUSTOMER_MESSAGE,
  "amount": AMOUNT_MESSAGE,
  "status": STATUS_MESSAGE,
}

FieldErrors = Dict[str, List[str]]


class InvoiceFields(BaseModel):
  """The caller-editable part of an invoice."""
  model_config = ConfigDict(populate_by_name=True, frozen=True)

  customer_id: str = Field(alias="customerId")
  amount: Decimal
  status: Literal["pending", "paid"]

  @field_validator("customer_id", mode="before")
  @classmethod
  def _customer_selected(cls, v: Any) -> str:
    if not isinstance(v, str) or not v.strip():
      raise PydanticCustomError("customer_invalid", CUSTOMER_MESSAGE)
    return v.strip()

  @field_validator("amount", mode="before")
  @classmethod
  def _coerce_amount(cls, v: Any) -> Decimal:
    if isinstance(v, bool):
      raise PydanticCustomError("amount_invalid", AMOUNT_MESSAGE)
    if v is None or (isinstance(v, str) and not v.strip()):
      v = 0
    try:
      amount = Decimal(str(v).strip())
    except InvalidOperation:
      raise PydanticCustomError("amount_invalid", AMOUNT_MESSAGE)
    if not amount.is_finite() or amount <= 0 or amount > MAX_AMOUNT:
      raise PydanticCustomError("amount_invalid", AMOUNT_MESSAGE)
    return amount

  @field_validator("status", mode="before")
  @classmethod
  def _known_status(cls, v: Any) -> str:
    if v not in STATUSES:
      raise PydanticCustomError("status_invalid", STATUS_MESSAGE)
    return v


class InvoiceForm(InvoiceFields):
  id: str
  date: str


# id and date are system-generated, so neither variant accepts them
class CreateInvoice(InvoiceFields):
  pass


class UpdateInvoice(InvoiceFields):
  pass


@dataclass(frozen=True)
class ParseSuccess:
  data: InvoiceFields
  success: Literal[True] = True


@dataclass(frozen=True)
class ParseFailure:
  errors: FieldErrors
  success: Literal[False] = False


ParseResult = Union[ParseSuccess, ParseFailure]


def _form_name(schema: Type[BaseModel], loc: Any) -> str:
  field = schema.model_fields.get(loc)
  if field is not None and field.alias:
    return field.alias
  return str(loc)


def field_errors(schema: Type[BaseModel], exc: ValidationError) -> FieldErrors:
  errors: FieldErrors = {}
  for err in exc.errors():
    name = _form_name(schema, err["loc"][0]) if err["loc"] else "form"
    if err["type"].endswith("_invalid"):
      msg = err["msg"]
    else:
      msg = FIELD_MESSAGES.get(name, err["msg"])
    messages = errors.setdefault(name, [])
    if msg not in messages:
      messages.append(msg)
  return errors


def parse(schema: Type[InvoiceFields], fields: Mapping[str, Any]) -> InvoiceFields:
  return schema.model_validate(dict(fields))


def safe_parse(schema: Type[InvoiceFields], fields: Mapping[str, Any]) -> ParseResult:
  try:
    return ParseSuccess(data=parse(schema, fields))
  except ValidationError as e:
    return ParseFailure(errors=field_errors(schema, e))
