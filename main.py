import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from db import init_db
from invoice_route import router as invoice_router

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip()
CORS_ORIGINS = [
  x.strip()
  for x in os.getenv("CORS_ORIGINS", "http://127.0.0.1:3000,http://localhost:3000").split(",")
  if x.strip()
]


def setup_logging(level: str = "INFO") -> None:
  logging.basicConfig(
    level=getattr(logging, level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
  )


@asynccontextmanager
async def lifespan(app: FastAPI):
  init_db()
  yield


setup_logging(LOG_LEVEL)

app = FastAPI(title="Invoice Dashboard Backend", version="1.0.0", lifespan=lifespan)
app.add_middleware(
  CORSMiddleware,
  allow_origins=CORS_ORIGINS,
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)
app.include_router(invoice_router)


@app.get("/health")
def health():
  return {"ok": True}
