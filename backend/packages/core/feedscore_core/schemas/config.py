"""
Typed scoring configuration.

Weights are passed explicitly into the score calculator rather than read
from module globals, so callers (and tests) can score with any weights.
"""

from pydantic import BaseModel, ConfigDict, Field


class ScoreWeights(BaseModel):
    """Per distinct user weights used by the success score."""

    model_config = ConfigDict(frozen=True)

    reaction_multiplier: float = Field(default=5.0, ge=0.0)
    comment_multiplier: float = Field(default=10.0, ge=0.0)
