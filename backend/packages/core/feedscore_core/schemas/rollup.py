"""Article rollup schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ItemRollup(BaseModel):
    """Full counter triple for one article. Always written as a whole."""

    model_config = ConfigDict(frozen=True)

    impressions: int = 0
    clicks: int = 0
    success_score: float = 0.0


class BulkRecomputeResult(BaseModel):
    """Outcome of a bulk counter recomputation."""

    updated: list[int] = Field(default_factory=list)
    skipped: list[int] = Field(default_factory=list)
    failed: dict[int, str] = Field(default_factory=dict)

    @property
    def success(self) -> bool:
        """True when no article failed."""
        return not self.failed
