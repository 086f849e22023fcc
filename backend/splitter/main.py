"""FastAPI app entrypoint."""
import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from splitter.database import engine, Base
from splitter.routers import participants, expenses, summary

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

Base.metadata.create_all(bind=engine)

_origins_env = os.getenv("ALLOWED_ORIGINS", "")
allowed_origins = [o.strip() for o in _origins_env.split(",") if o.strip()] if _origins_env else ["*"]

app = FastAPI(
    title="Smart Expense Splitter API",
    description="Record shared expenses between participants, then see per-person owed totals and net balances.",
    version="1.0.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(participants.router, prefix="/api")
app.include_router(expenses.router, prefix="/api")
app.include_router(summary.router, prefix="/api")


@app.get("/")
def root():
    return {"message": "Smart Expense Splitter API", "docs": "/docs"}
