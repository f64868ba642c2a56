"""
Pykeyset with FastAPI Example

Demonstrates a keyset-paginated REST endpoint backed by MongoDB.

Features covered:
- KeysetParams dependency (cursor, limit, direction query parameters)
- KeysetQuerySet over a pymongo async collection
- KeysetResponse with next/prev cursors
- Exception handling

Run with:
  pip install uvicorn
  uvicorn example_fastapi:app --reload

Then visit: http://localhost:8000/posts?limit=5
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI
from pydantic import BaseModel, Field
from pymongo import AsyncMongoClient

from pykeyset import KeysetQuerySet, Order, encode_time_and_int64_cursor
from pykeyset.integrations.fastapi import KeysetParams, KeysetResponse, register_exception_handlers

MONGO_URI = "mongodb://localhost:27017"

logging.basicConfig(level=logging.INFO)


# ============================================================================
# 1. DEFINE MODELS
# ============================================================================


class Post(BaseModel):
    """Blog post keyed by (created_at, integer id)."""

    model_config = {"populate_by_name": True}

    id: int = Field(alias="_id")
    title: str
    created_at: datetime


# ============================================================================
# 2. APP SETUP
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = AsyncMongoClient(MONGO_URI)
    app.state.posts = client["pykeyset_demo"]["posts"]
    yield
    await client.close()


app = FastAPI(title="Pykeyset Blog API", lifespan=lifespan)
register_exception_handlers(app)


# ============================================================================
# 3. ROUTES
# ============================================================================


@app.get("/posts", response_model=KeysetResponse[Post])
async def list_posts(params: KeysetParams = Depends()):
    """List posts newest first. Invalid cursors restart from the first page."""
    result = await (
        KeysetQuerySet(app.state.posts)
        .as_model(Post.model_validate)
        .page_by_time_and_id(params.page, Order.DESCENDING, "created_at", "_id")
        .keyset_page(lambda p: encode_time_and_int64_cursor(p.created_at, p.id))
    )
    return KeysetResponse[Post].from_page(result)
