"""Base pydantic infradrift model classes"""
from pydantic import BaseModel, ConfigDict


class BaseImmutableModel(BaseModel):
    """Base immutable pydantic infradrift model"""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)
