"""ElectroMind Backend — FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.routes import tools

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    from backend.instance_store import InMemoryInstanceStore
    ttl_hours = int(os.getenv("INSTANCE_TTL_HOURS", "24"))
    app.state.instance_store = InMemoryInstanceStore(ttl_hours=ttl_hours)
    yield


app = FastAPI(
    title="ElectroMind API",
    description="Electrical engineering calculator engine",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS — allow frontend origins
_frontend_url = os.getenv("FRONTEND_URL")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[_frontend_url] if _frontend_url else [],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(tools.router, prefix="/api", tags=["Calculators"])


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "electromind-backend"}
