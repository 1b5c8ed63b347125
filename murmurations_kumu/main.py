from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from murmurations_kumu.services.http_client import close_client

# Routers
from murmurations_kumu.api.routers.parse import router as parse_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Ensure the shared HTTP client is closed on shutdown."""
    try:
        yield
    finally:
        close_client()


app = FastAPI(title="Murmurations Kumu Map", version="0.1", lifespan=lifespan)


@app.middleware("http")
async def allow_any_origin(request: Request, call_next):
    response = await call_next(request)
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


app.include_router(parse_router)
