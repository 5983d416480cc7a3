from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

MAX_QUALITY = 100


class OversizePolicy(str, Enum):
    """
    What to do when the maximum-quality encode is already larger than `max_bytes`.

    PASSTHROUGH emits the baseline encode unchanged (may exceed `max_bytes`).
    REDUCE_QUALITY searches for the highest JPEG quality fitting `preferred_bytes`
    and then pads the result up to exactly `preferred_bytes`.
    """

    PASSTHROUGH = "passthrough"
    REDUCE_QUALITY = "reduce_quality"


@dataclass(frozen=True, slots=True)
class SizeTargetConfig:
    """
    Stage 1 configuration. No environment reads; callers pass everything explicitly.
    """

    oversize_policy: OversizePolicy = OversizePolicy.PASSTHROUGH
    min_quality: int = 60  # lower bound for REDUCE_QUALITY only
    verify_trailing_data: bool = True

    def __post_init__(self) -> None:
        if not 1 <= self.min_quality < MAX_QUALITY:
            raise ValueError(f"min_quality must be within [1, {MAX_QUALITY - 1}]")
