"""
Cache read-through de categorias, indexado por nome e por ID.

O cache não acessa o banco de dados. Em caso de miss, quem chama busca a
categoria no banco e popula o cache com ``set``. Toda escrita em categorias
(criação, atualização, exclusão) deve invalidar as entradas afetadas ou
limpar o cache, já que o cache não observa o banco.

Não há deduplicação de misses concorrentes: duas requisições podem errar a
mesma chave ao mesmo tempo e as duas chamarem ``set`` (vence a última escrita).
"""
from dataclasses import dataclass, asdict
from typing import Annotated, Any, NamedTuple, Protocol
from fastapi import Depends
import logging
import threading

from ..config import settings

logger = logging.getLogger(__name__)


class CachedCategory(Protocol):
    id: Any
    name: str


class _Entry(NamedTuple):
    name: str
    id_key: str
    value: CachedCategory


@dataclass(frozen=True)
class CategoryCacheStats:
    size: int
    hits: int
    misses: int
    hit_rate: float
    enabled: bool

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class CategoryCache:
    """
    Os dois índices (nome e ID) apontam para a mesma entrada e só são
    alterados juntos, sob o mesmo lock. Os contadores de hit/miss têm lock
    próprio e não são zerados por ``clear``.
    """

    def __init__(self, enabled: bool = True):
        self._by_name: dict[str, _Entry] = {}
        self._by_id: dict[str, _Entry] = {}
        self._lock = threading.Lock()

        self._hits = 0
        self._misses = 0
        self._stats_lock = threading.Lock()

        self._enabled = enabled

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_name)

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        with self._lock:
            self._enabled = True
        logger.info("Cache de categorias habilitado")

    def disable(self) -> None:
        with self._lock:
            self._enabled = False
        logger.info("Cache de categorias desabilitado")

    def get_by_name(self, name: str) -> tuple[CachedCategory | None, bool]:
        return self._lookup(self._by_name, name)

    def get_by_id(self, category_id: str) -> tuple[CachedCategory | None, bool]:
        return self._lookup(self._by_id, category_id)

    def set(self, category: CachedCategory) -> None:
        entry = _Entry(category.name, str(category.id), category)
        with self._lock:
            # Escritas com o cache desabilitado são descartadas; o flag é lido
            # sob o mesmo lock que disable() usa
            if not self._enabled:
                return
            # Remove entradas antigas que compartilham o nome ou o ID
            self._remove(self._by_name.get(entry.name))
            self._remove(self._by_id.get(entry.id_key))
            self._by_name[entry.name] = entry
            self._by_id[entry.id_key] = entry
        logger.debug(f"Categoria '{entry.name}' ({entry.id_key}) armazenada no cache")

    def invalidate(self, name: str) -> None:
        with self._lock:
            entry = self._by_name.get(name)
            self._remove(entry)
        if entry is not None:
            logger.debug(f"Categoria '{name}' removida do cache")

    def invalidate_by_id(self, category_id: str) -> None:
        with self._lock:
            entry = self._by_id.get(category_id)
            self._remove(entry)
        if entry is not None:
            logger.debug(f"Categoria de ID {category_id} removida do cache")

    def clear(self) -> None:
        with self._lock:
            self._by_name.clear()
            self._by_id.clear()
        logger.info("Cache de categorias limpo")

    def get_stats(self) -> CategoryCacheStats:
        with self._lock:
            size = len(self._by_name)
        with self._stats_lock:
            hits, misses = self._hits, self._misses

        total = hits + misses
        hit_rate = hits / total * 100 if total > 0 else 0.0
        return CategoryCacheStats(
            size=size,
            hits=hits,
            misses=misses,
            hit_rate=hit_rate,
            enabled=self._enabled,
        )

    def reset_stats(self) -> None:
        with self._stats_lock:
            self._hits = 0
            self._misses = 0

    def _lookup(
        self, index: dict[str, _Entry], key: str
    ) -> tuple[CachedCategory | None, bool]:
        entry = None
        if self._enabled:
            with self._lock:
                entry = index.get(key)

        # Com o cache desabilitado a consulta ainda conta como miss
        with self._stats_lock:
            if entry is None:
                self._misses += 1
            else:
                self._hits += 1

        if entry is None:
            return None, False
        return entry.value, True

    def _remove(self, entry: _Entry | None) -> None:
        # Deve ser chamado com self._lock adquirido
        if entry is None:
            return
        if self._by_name.get(entry.name) is entry:
            del self._by_name[entry.name]
        if self._by_id.get(entry.id_key) is entry:
            del self._by_id[entry.id_key]


_category_cache: CategoryCache | None = None
_category_cache_lock = threading.Lock()


def get_category_cache() -> CategoryCache:
    """
    Retorna a instância do cache compartilhada pelo processo, criando-a no
    primeiro uso.
    """
    global _category_cache
    if _category_cache is None:
        with _category_cache_lock:
            if _category_cache is None:
                _category_cache = CategoryCache(
                    enabled=settings.CATEGORY_CACHE_ENABLED
                )
    return _category_cache


CategoryCacheDep = Annotated[CategoryCache, Depends(get_category_cache)]
