"""
Cache de hierarquia de categorias (IDs descendentes de cada categoria).
"""
from cachetools import TTLCache
import logging
import threading

from ..config import settings
from .category_cache import CategoryCache

logger = logging.getLogger(__name__)

# Cache para descendentes de categorias
# Chave: hashkey(ID da categoria); valor: tupla com o ID da própria categoria e de
# todos os seus descendentes
category_descendants_cache: TTLCache = TTLCache(
    maxsize=settings.CATEGORY_HIERARCHY_CACHE_MAXSIZE,
    ttl=settings.CATEGORY_HIERARCHY_CACHE_TTL,
)
category_descendants_lock = threading.Lock()


def invalidate_category_hierarchy_cache() -> None:
    """
    Invalida o cache de hierarquia de categorias.
    Deve ser chamado quando categorias são criadas, movidas ou deletadas.
    """
    with category_descendants_lock:
        category_descendants_cache.clear()
    logger.info("Cache de hierarquia de categorias invalidado")


def get_cache_stats(category_cache: CategoryCache) -> dict:
    """
    Retorna estatísticas sobre os caches de categorias.
    Útil para monitoramento e debugging.
    """
    return {
        "category_cache": category_cache.get_stats().as_dict(),
        "category_descendants_cache": {
            "current_size": len(category_descendants_cache),
            "max_size": category_descendants_cache.maxsize,
            "ttl_seconds": category_descendants_cache.ttl,
            # Primeiros 10 para preview
            "items": [str(key[0]) for key in list(category_descendants_cache.keys())[:10]],
        },
    }
