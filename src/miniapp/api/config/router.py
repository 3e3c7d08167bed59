"""Configuration API Routes - Route registration only."""

from fastapi import APIRouter

from miniapp.api import API_PREFIX
from miniapp.api.config import api

router = APIRouter()
router.include_router(api.router, prefix=API_PREFIX, tags=["Configuration"])
