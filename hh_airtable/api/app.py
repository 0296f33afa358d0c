"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from slowapi.errors import RateLimitExceeded
from starlette.middleware.sessions import SessionMiddleware

from hh_airtable.api.limiter import limiter
from hh_airtable.config import settings
from hh_airtable.errors import ContactsUnavailable, PayloadError, Unauthenticated, UpstreamError

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    yield


app = FastAPI(
    title="HH → Airtable API",
    description="Search HeadHunter resumes and sync candidates into Airtable",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


@app.exception_handler(Unauthenticated)
async def unauthenticated_handler(request: Request, exc: Unauthenticated):
    """No usable token: back to the landing page."""
    return RedirectResponse("/", status_code=302)


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    logger.error(f"{request.url.path}: {exc} {exc.body[:500]}")
    return JSONResponse(
        status_code=502,
        content={"detail": str(exc), "service": exc.service, "upstream_status": exc.status},
    )


@app.exception_handler(PayloadError)
async def payload_error_handler(request: Request, exc: PayloadError):
    logger.error(f"{request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(ContactsUnavailable)
async def contacts_unavailable_handler(request: Request, exc: ContactsUnavailable):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    max_age=settings.session_ttl,
    same_site="lax",
)


# Import and include routers
from hh_airtable.api.routes import auth, resumes, search, sync  # noqa: E402

app.include_router(auth.router, tags=["Auth"])
app.include_router(search.router, tags=["Search"])
app.include_router(resumes.router, tags=["Resumes"])
app.include_router(sync.router, tags=["Sync"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "hh_configured": bool(settings.hh_client_id),
        "airtable_configured": bool(settings.airtable_api_key and settings.airtable_base_id),
    }
