"""FastAPI HTTP endpoints for Feedlizer.

This module exposes the review service to the swipe front end. The service
instance lives on ``app.state`` and is handed to each route through a
dependency, so tests can mount the router around a stub.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

try:
    from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Query, Request
except ImportError:
    raise ImportError(
        "FastAPI is required for HTTP endpoints. "
        "Please install with: pip install feedlizer"
    )
from pydantic import BaseModel, Field

from ..api.client import FeedlizerClient
from ..errors import ProviderError
from ..providers.errors import ErrorMapper


router = APIRouter(prefix="/api")


class MarkReadRequest(BaseModel):
    call_id: Optional[str] = Field(None, alias="callId")


class SaveRequest(BaseModel):
    """Save payload as sent by the front end."""
    id: str
    url: Optional[str] = None
    origin_url: Optional[str] = Field(None, alias="originUrl")
    title: Optional[str] = None
    description: Optional[str] = None
    summary: Optional[str] = None
    call_id: Optional[str] = Field(None, alias="callId")


def get_client(request: Request) -> FeedlizerClient:
    return request.app.state.feedlizer


def _provider_http_error(error: ProviderError) -> HTTPException:
    return HTTPException(status_code=ErrorMapper.http_status(error), detail=str(error))


@router.get("/feedly/stream")
async def feedly_stream(
    count: int = Query(200, ge=1, le=1000),
    refresh: bool = False,
    client: FeedlizerClient = Depends(get_client)
) -> Dict[str, Any]:
    """Articles for review, newest first."""
    try:
        articles = await client.get_articles(count=count, refresh=refresh)
    except ProviderError as e:
        raise _provider_http_error(e)
    return {"items": [article.model_dump(mode="json") for article in articles]}


@router.post("/feedly/mark-read/{article_id:path}")
async def feedly_mark_read(
    article_id: str,
    payload: Optional[MarkReadRequest] = Body(None),
    client: FeedlizerClient = Depends(get_client)
) -> Dict[str, Any]:
    try:
        result = await client.mark_read(article_id, call_id=payload.call_id if payload else None)
    except ProviderError as e:
        raise _provider_http_error(e)
    return {"success": result.success, "duplicate": result.duplicate, "message": result.message}


@router.get("/feedly/mark-read/{article_id:path}")
async def feedly_mark_read_get(
    article_id: str,
    client: FeedlizerClient = Depends(get_client)
) -> Dict[str, Any]:
    """Mark-as-read over GET, kept for older front-end builds."""
    return await feedly_mark_read(article_id, None, client)


@router.post("/instapaper/add")
async def instapaper_add(
    payload: SaveRequest,
    client: FeedlizerClient = Depends(get_client)
) -> Dict[str, Any]:
    try:
        result = await client.save_article(
            payload.id,
            payload.url or payload.origin_url,
            title=payload.title,
            description=payload.description or payload.summary,
            call_id=payload.call_id
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProviderError as e:
        raise _provider_http_error(e)
    return {"success": result.success, "duplicate": result.duplicate, "message": result.message}


@router.get("/feedly/subscriptions")
async def feedly_subscriptions(client: FeedlizerClient = Depends(get_client)) -> Dict[str, Any]:
    try:
        subscriptions = await client.list_subscriptions()
    except ProviderError as e:
        raise _provider_http_error(e)
    return {"subscriptions": [sub.model_dump(mode="json") for sub in subscriptions]}


@router.get("/instapaper/bookmarks")
async def instapaper_bookmarks(
    folder: str = "unread",
    limit: int = Query(25, ge=1, le=500),
    client: FeedlizerClient = Depends(get_client)
) -> Dict[str, Any]:
    try:
        bookmarks = await client.list_bookmarks(folder, limit)
    except ProviderError as e:
        raise _provider_http_error(e)
    return {"bookmarks": [b.model_dump(mode="json") for b in bookmarks]}


def create_app(client: Optional[FeedlizerClient] = None) -> FastAPI:
    """
    Build the FastAPI application around one review service.

    Args:
        client: Service instance; built from the environment when omitted

    Returns:
        FastAPI app with the API router mounted
    """
    service = client if client is not None else FeedlizerClient()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await service.aclose()

    app = FastAPI(title="Feedlizer", lifespan=lifespan)
    app.state.feedlizer = service
    app.include_router(router)
    return app
