"""Forge Theory — exponential information-retention model for brick builds.

Public API::

    from core.forge import calculate_retention, generate_optimization_report

    calculate_retention(1.0, 5, "image")          # 0.472...
    generate_optimization_report("image", "high", width=48, height=48)
"""

from core.forge.decay import (
    calculate_optimal_steps,
    calculate_perceptual_quality,
    calculate_retention,
    decay_constant,
    estimate_brick_count,
    generate_decay_curve,
    generate_optimization_report,
    optimize_for_quality,
    validate_quality,
)
from core.forge.types import (
    CONTENT_TYPES,
    DECAY_CONSTANTS,
    QUALITY_LABELS,
    QUALITY_TARGETS,
    BrickEstimate,
    ContentType,
    DecayPoint,
    InvalidTargetRetentionError,
    OptimizationReport,
    OptimizationResult,
    QualityLabel,
    QualityValidation,
    RetentionSummary,
    parse_content_type,
    parse_quality,
)

__all__ = [
    "CONTENT_TYPES",
    "DECAY_CONSTANTS",
    "QUALITY_LABELS",
    "QUALITY_TARGETS",
    "BrickEstimate",
    "ContentType",
    "DecayPoint",
    "InvalidTargetRetentionError",
    "OptimizationReport",
    "OptimizationResult",
    "QualityLabel",
    "QualityValidation",
    "RetentionSummary",
    "calculate_optimal_steps",
    "calculate_perceptual_quality",
    "calculate_retention",
    "decay_constant",
    "estimate_brick_count",
    "generate_decay_curve",
    "generate_optimization_report",
    "optimize_for_quality",
    "parse_content_type",
    "parse_quality",
    "validate_quality",
]
