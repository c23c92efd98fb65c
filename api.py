from fastapi import FastAPI, Depends, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from typing import Optional
import os

# Rate Limiting
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from dotenv import load_dotenv

from resolver_module.dns_records import DEFAULT_WEB_TYPES, WEB_RECORD_TYPES
from resolver_module.dns_utils import is_valid_domain
from resolver_module.errors import QueryValidationError, UnsupportedRecordTypeError
from resolver_module.logger import configure_logging, get_child_logger
from resolver_module.orchestrator import resolve_all
from resolver_module.query_executor import ResolveFn

load_dotenv()

MISSING_INPUT = "Missing domain or record type"
UNSUPPORTED_TYPE = "Unsupported DNS record type"
INVALID_DOMAIN = "Invalid domain name"

RATE_LIMIT = os.getenv("RATE_LIMIT", "60/minute")

# single-type endpoint accepts the exact tags only
WEB_TYPE_TAGS = {t.value for t in WEB_RECORD_TYPES}

# Setup Limiter (using X-Forwarded-For if available via ProxyHeaders)
limiter = Limiter(key_func=get_remote_address)
app = FastAPI(title="DNS Resolver & Query Analyzer")

# Add Rate Limit Exception Handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS (the browser client runs on another origin)
origins = os.getenv("CORS_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

log = get_child_logger("api")


def get_resolve_fn() -> Optional[ResolveFn]:
    """Resolver used by the endpoints; None selects the dnspython default."""
    return None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.on_event("startup")
async def startup_event():
    configure_logging()
    log.info("Starting up API (cors_origins={} rate_limit={})", origins, RATE_LIMIT)


@app.get("/health")
@limiter.exempt
def health_check():
    return {"status": "ok"}


@app.get("/api/resolve")
@limiter.limit(RATE_LIMIT)
async def resolve_record(
    request: Request,
    domain: Optional[str] = None,
    type: Optional[str] = None,
    resolve: Optional[ResolveFn] = Depends(get_resolve_fn),
):
    if not domain or not type:
        return _error(400, MISSING_INPUT)

    if type not in WEB_TYPE_TAGS:
        return _error(400, UNSUPPORTED_TYPE)

    try:
        envelope = await resolve_all(domain, [type], resolve=resolve)
    except UnsupportedRecordTypeError:
        return _error(400, UNSUPPORTED_TYPE)
    except QueryValidationError:
        return _error(400, MISSING_INPUT)

    result = envelope.results[0]
    if not result.ok:
        return _error(500, result.error)
    return result.to_dict()


@app.get("/api/resolve-all")
@limiter.limit(RATE_LIMIT)
async def resolve_many(
    request: Request,
    domain: Optional[str] = None,
    types: Optional[str] = None,
    resolve: Optional[ResolveFn] = Depends(get_resolve_fn),
):
    """Query several record types at once and return the whole envelope."""
    if not domain:
        return _error(400, MISSING_INPUT)
    if not is_valid_domain(domain):
        return _error(400, INVALID_DOMAIN)

    try:
        envelope = await resolve_all(domain, types or DEFAULT_WEB_TYPES, resolve=resolve)
    except UnsupportedRecordTypeError:
        return _error(400, UNSUPPORTED_TYPE)
    except QueryValidationError:
        return _error(400, MISSING_INPUT)

    return envelope.to_dict()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "3000")))
