# api/app.py
"""
FastAPI application factory
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from api.v1.router import api_router
from core.config import get_settings
from core.exceptions import KnowledgeBaseError

logger = logging.getLogger(__name__)

# Request sections FastAPI prefixes onto error locations
REQUEST_SECTIONS = ("body", "query", "path")

def describe_validation_errors(errors) -> str:
    """One readable line: 'Validation error: <msg> at "<field>"; ...'"""
    parts = []
    for issue in errors:
        loc = [str(p) for p in issue.get("loc", ())]
        if loc and loc[0] in REQUEST_SECTIONS:
            loc = loc[1:]
        parts.append(f"{issue.get('msg', 'Invalid value')} at \"{'.'.join(loc) or 'body'}\"")
    return "Validation error: " + "; ".join(parts)

def create_app(lifespan=None) -> FastAPI:
    """Create FastAPI application"""
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Malformed input is rejected before any agent runs
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        detail = describe_validation_errors(exc.errors())
        logger.info(f"Rejected {request.method} {request.url.path}: {detail}")
        return JSONResponse(status_code=400, content={"detail": detail})

    @app.exception_handler(KnowledgeBaseError)
    async def knowledge_base_error_handler(request: Request, exc: KnowledgeBaseError):
        logger.error(f"Knowledge base unavailable for {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    # Include routers
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root(request: Request):
        store = getattr(request.app.state, "knowledge_store", None)
        return {
            "service": settings.api_title,
            "version": settings.api_version,
            "status": "healthy" if store is not None else "degraded",
            "knowledge": store.summary() if store is not None else None
        }

    return app
