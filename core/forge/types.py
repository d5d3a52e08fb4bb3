"""Forge Theory types — pure value objects and lookup tables.

These are the data contracts for the decay engine.
No I/O, no datetime.now(), no imports from api/ or infrastructure/.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Literal, get_args

ContentType = Literal["image", "text", "model3d", "pattern", "architecture", "audio", "data"]
QualityLabel = Literal["high", "medium", "low"]
BuildType = Literal["mosaic", "sculpture"]

CONTENT_TYPES: tuple[str, ...] = get_args(ContentType)
QUALITY_LABELS: tuple[str, ...] = get_args(QualityLabel)

DECAY_CONSTANTS: Mapping[str, float] = MappingProxyType(
    {
        "image": 0.15,  # colour/detail
        "text": 0.10,  # readability
        "model3d": 0.20,  # geometric complexity
        "pattern": 0.12,  # pattern fidelity
        "architecture": 0.18,  # structural detail
        "audio": 0.25,  # frequency resolution
        "data": 0.14,  # information clarity
    }
)

QUALITY_TARGETS: Mapping[str, float] = MappingProxyType(
    {
        "high": 0.90,
        "medium": 0.75,
        "low": 0.60,
    }
)

DEFAULT_QUALITY_TARGET = 0.75


class InvalidTargetRetentionError(ValueError):
    """Raised when an inverse lookup is asked for a retention of zero or less.

    ln(target) is undefined for target <= 0, so no step count exists.

    Args:
        target: The rejected target retention.
    """

    def __init__(self, target: float) -> None:
        """Initialize with the offending target."""
        self.target = target
        super().__init__(f"target_retention must be in (0, 1], got {target!r}")


def parse_content_type(value: str) -> ContentType:
    """Validate free-form input into a ContentType tag.

    Surrounding whitespace and case are ignored.

    Raises:
        ValueError: If value names no known content type.
    """
    normalized = value.strip().lower()
    if normalized not in CONTENT_TYPES:
        raise ValueError(
            f"Unknown content_type {value!r}, valid options: {sorted(CONTENT_TYPES)}"
        )
    return normalized  # type: ignore[return-value]


def parse_quality(value: str) -> QualityLabel:
    """Validate free-form input into a QualityLabel tag.

    Raises:
        ValueError: If value is not one of high | medium | low.
    """
    normalized = value.strip().lower()
    if normalized not in QUALITY_LABELS:
        raise ValueError(f"Unknown quality {value!r}, valid options: {list(QUALITY_LABELS)}")
    return normalized  # type: ignore[return-value]


@dataclass(frozen=True)
class DecayPoint:
    """One sample of a retention curve.

    Attributes:
        step: Quantization step, 0-based.
        retention: e^(−λ·step), in (0, 1].
        retention_percent: retention * 100 formatted with one decimal.
    """

    step: int
    retention: float
    retention_percent: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "step": self.step,
            "retention": self.retention,
            "retention_percent": self.retention_percent,
        }


@dataclass(frozen=True)
class OptimizationResult:
    """Recommended quantization for a quality label.

    Attributes:
        quantization_steps: Rounded step count reaching expected_retention.
        expected_retention: Target retention the steps were solved for.
        decay_constant: Table λ for the content type, None when the type is
            unknown (the computation then used the fallback rate).
        quality: The quality label as requested.
    """

    quantization_steps: int
    expected_retention: float
    decay_constant: float | None
    quality: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "quantization_steps": self.quantization_steps,
            "expected_retention": self.expected_retention,
            "decay_constant": self.decay_constant,
            "quality": self.quality,
        }


@dataclass(frozen=True)
class BrickEstimate:
    """Brick count estimate for a build of the given stud dimensions."""

    total_studs: int
    estimated_bricks: int
    width: int
    height: int
    depth: int
    type: BuildType

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_studs": self.total_studs,
            "estimated_bricks": self.estimated_bricks,
            "width": self.width,
            "height": self.height,
            "depth": self.depth,
            "type": self.type,
        }


@dataclass(frozen=True)
class QualityValidation:
    """Advisory verdict on a retention value.

    Attributes:
        passes: retention >= minimum threshold.
        recommended: retention >= recommended threshold.
        retention: The evaluated retention.
        message: Human-readable verdict.
    """

    passes: bool
    recommended: bool
    retention: float
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "passes": self.passes,
            "recommended": self.recommended,
            "retention": self.retention,
            "message": self.message,
        }


@dataclass(frozen=True)
class RetentionSummary:
    """Retention reached by an optimization, in three renderings."""

    mathematical: float
    perceptual: int
    percentage: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "mathematical": self.mathematical,
            "perceptual": self.perceptual,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class OptimizationReport:
    """Complete optimization analysis for one build request.

    Attributes:
        optimization: Quantization recommendation.
        retention: Retention actually reached at the rounded step count.
        bricks: Brick estimate for the requested dimensions.
        decay_curve: Full retention curve for the content type.
        content_type: The content type as requested.
        timestamp: ISO-8601 UTC creation time. Diagnostic only.
    """

    optimization: OptimizationResult
    retention: RetentionSummary
    bricks: BrickEstimate
    decay_curve: tuple[DecayPoint, ...]
    content_type: str
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "optimization": self.optimization.to_dict(),
            "retention": self.retention.to_dict(),
            "bricks": self.bricks.to_dict(),
            "decay_curve": [p.to_dict() for p in self.decay_curve],
            "content_type": self.content_type,
            "timestamp": self.timestamp,
        }
