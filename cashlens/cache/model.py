from pydantic import BaseModel, ConfigDict


class CategoryCacheStatsResponse(BaseModel):
    size: int
    hits: int
    misses: int
    hit_rate: float
    enabled: bool

    model_config = ConfigDict(from_attributes=True)
