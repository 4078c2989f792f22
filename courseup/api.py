"""
HTTP surface (FastAPI).

    GET /semester
    GET /semester/{term}/courses?subject=&code=&page=&limit=
    GET /semester/{term}/courses/{subject}/{code}
    GET /semester/{term}/courses/{subject}/{code}/{section}

Path parameters are checked by courseup.validate, page/limit by FastAPI. Either
way a rejected request answers 400 {"error": ...} before the provider is called.
The provider is injected through create_app() and stored on app.state.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from courseup import __version__
from courseup.catalog import CatalogResolver
from courseup.config import Settings, get_settings
from courseup.detail import DetailResolver
from courseup.errors import NotFoundError, UpstreamError, ValidationError
from courseup.logging_config import configure_logging
from courseup.provider import CourseDataProvider, build_provider
from courseup.validate import validate_course_key, validate_course_query

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog_resolver(request: Request) -> CatalogResolver:
    settings = request.app.state.settings
    return CatalogResolver(request.app.state.provider, strict=settings.strict_identifiers)


def get_detail_resolver(request: Request) -> DetailResolver:
    return DetailResolver(request.app.state.provider)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/")
async def root(settings: Settings = Depends(get_app_settings)) -> dict[str, str]:
    return {"service": settings.app_name, "version": __version__}


@router.get("/semester", summary="Get the list of available semesters")
async def list_terms(settings: Settings = Depends(get_app_settings)) -> dict[str, list[str]]:
    return {"terms": list(settings.terms)}


@router.get("/semester/{term}/courses", summary="Get the list of courses for a given semester", tags=["courses"])
async def list_courses(
    term: str,
    subject: Optional[str] = None,
    code: Optional[str] = None,
    page: Optional[int] = Query(default=None, ge=1, description="Page number, starting at 1"),
    limit: Optional[int] = Query(default=None, ge=1, description="Page size"),
    settings: Settings = Depends(get_app_settings),
    resolver: CatalogResolver = Depends(get_catalog_resolver),
) -> list[dict[str, str]]:
    query = validate_course_query(
        term, subject, code, page, limit, terms=settings.terms, default_limit=settings.default_limit
    )
    courses = await resolver.list_courses(query)
    return [c.to_dict() for c in courses]


@router.get("/semester/{term}/courses/{subject}/{code}", summary="Get one course with its sections", tags=["courses"])
async def get_course(
    term: str,
    subject: str,
    code: str,
    settings: Settings = Depends(get_app_settings),
    resolver: DetailResolver = Depends(get_detail_resolver),
) -> dict[str, Any]:
    key = validate_course_key(term, subject, code, terms=settings.terms)
    detail = await resolver.get_course_detail(key)
    return detail.to_dict()


@router.get(
    "/semester/{term}/courses/{subject}/{code}/{section}",
    summary="Get one section of a course",
    tags=["courses"],
)
async def get_section(
    term: str,
    subject: str,
    code: str,
    section: str,
    settings: Settings = Depends(get_app_settings),
    resolver: DetailResolver = Depends(get_detail_resolver),
) -> dict[str, str]:
    key = validate_course_key(term, subject, code, terms=settings.terms, section=section)
    summary = await resolver.get_section(key)
    return summary.to_dict()


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


async def _validation_error(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _request_validation_error(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    message = "; ".join(str(e.get("msg", "")) for e in errors) or "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


async def _not_found(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def _upstream_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Upstream failure on %s %s: %s", request.method, request.url.path, exc, exc_info=exc
    )
    return JSONResponse(status_code=502, content={"error": str(exc)})


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[CourseDataProvider] = None,
) -> FastAPI:
    """
    Build the application. Tests pass their own settings and a stub provider.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Normalized, paginated course catalog queries",
        version=__version__,
        docs_url="/documentation",
    )
    app.state.settings = settings
    app.state.provider = provider if provider is not None else build_provider(settings)

    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(UpstreamError, _upstream_error)
    app.add_exception_handler(Exception, _unhandled_error)

    app.include_router(router)
    return app
