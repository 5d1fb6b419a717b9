"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from provision.api.v1 import router as v1_router
from provision.core.config import settings

app = FastAPI(
    title="Provision User API",
    description="User identity records: upsert with bcrypt credentials, redacted lookup and password authentication.",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; points clients at the user and health endpoints."""
    return {
        "message": "Provision User API",
        "users": f"{settings.API_PREFIX}/user",
        "health": f"{settings.API_PREFIX}/health/",
    }
