import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from page_analyzer.checker.fetcher import PageFetcher
from page_analyzer.common.db import Database
from page_analyzer.common.errors import (
    DuplicateUrlError,
    FetchError,
    InvalidUrlError,
    StorageError,
    UrlNotFoundError,
)
from page_analyzer.service import PageAnalyzer
from page_analyzer.storage.checks import CheckRepository
from page_analyzer.storage.urls import UrlRepository

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = Database.connect()
    fetcher = PageFetcher()
    app.state.analyzer = PageAnalyzer(UrlRepository(db), CheckRepository(db), fetcher)
    try:
        yield
    finally:
        fetcher.close()
        db.close()


app = FastAPI(title="Page Analyzer API", lifespan=lifespan)


class UrlCreate(BaseModel):
    url: str = Field(..., max_length=2048)


class UrlOut(BaseModel):
    id: int
    name: str
    created_at: datetime


class CheckOut(BaseModel):
    id: int
    url_id: int
    status_code: int
    title: str
    h1: str
    description: str
    created_at: datetime


class UrlSummaryOut(BaseModel):
    url: UrlOut
    last_status_code: int | None
    last_checked_at: datetime | None


class UrlDetailOut(BaseModel):
    url: UrlOut
    checks: list[CheckOut]


def get_analyzer(request: Request) -> PageAnalyzer:
    return request.app.state.analyzer


@app.exception_handler(InvalidUrlError)
async def invalid_url_handler(_request: Request, exc: InvalidUrlError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": "Invalid URL", "reason": exc.reason},
    )


@app.exception_handler(DuplicateUrlError)
async def duplicate_url_handler(_request: Request, exc: DuplicateUrlError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Page already exists", "id": exc.existing.id},
    )


@app.exception_handler(UrlNotFoundError)
async def not_found_handler(_request: Request, exc: UrlNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": f"Url with id={exc.url_id} not found"},
    )


@app.exception_handler(FetchError)
async def fetch_error_handler(_request: Request, exc: FetchError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Could not check the page", "reason": exc.reason},
    )


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("storage error path=%s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal storage error"},
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/urls", response_model=UrlOut, status_code=status.HTTP_201_CREATED)
def create_url(payload: UrlCreate, analyzer: PageAnalyzer = Depends(get_analyzer)):
    return analyzer.add_url(payload.url)


@app.get("/urls", response_model=list[UrlSummaryOut])
def list_urls(analyzer: PageAnalyzer = Depends(get_analyzer)):
    return analyzer.list_urls()


@app.get("/urls/{url_id}", response_model=UrlDetailOut)
def show_url(url_id: int, analyzer: PageAnalyzer = Depends(get_analyzer)):
    url = analyzer.get_url(url_id)
    return {"url": url, "checks": analyzer.list_checks(url_id)}


@app.post("/urls/{url_id}/checks", response_model=CheckOut, status_code=status.HTTP_201_CREATED)
def create_check(url_id: int, analyzer: PageAnalyzer = Depends(get_analyzer)):
    return analyzer.run_check(url_id)
