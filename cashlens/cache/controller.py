from fastapi import APIRouter, status

from .category_cache import CategoryCacheDep
from .hierarchy_cache import get_cache_stats, invalidate_category_hierarchy_cache
from . import model

router = APIRouter(prefix="/cache", tags=["Cache"])


@router.get("/")
async def get_cache_overview(cache: CategoryCacheDep):
    return get_cache_stats(cache)


@router.get("/categories/stats", response_model=model.CategoryCacheStatsResponse)
async def get_category_cache_stats(cache: CategoryCacheDep):
    return cache.get_stats()


@router.post("/categories/stats/reset", response_model=model.CategoryCacheStatsResponse)
async def reset_category_cache_stats(cache: CategoryCacheDep):
    cache.reset_stats()
    return cache.get_stats()


@router.post("/categories/clear", status_code=status.HTTP_204_NO_CONTENT)
async def clear_category_cache(cache: CategoryCacheDep):
    cache.clear()


@router.post("/categories/enable", response_model=model.CategoryCacheStatsResponse)
async def enable_category_cache(cache: CategoryCacheDep):
    cache.enable()
    return cache.get_stats()


@router.post("/categories/disable", response_model=model.CategoryCacheStatsResponse)
async def disable_category_cache(cache: CategoryCacheDep):
    cache.disable()
    return cache.get_stats()


@router.post("/hierarchy/clear", status_code=status.HTTP_204_NO_CONTENT)
async def clear_category_hierarchy_cache():
    invalidate_category_hierarchy_cache()
