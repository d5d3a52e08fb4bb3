"""Forge Theory decay engine — pure, deterministic.

Information retention follows one exponential law::

    I(t) = I0 · e^(−λt)

where t is the number of quantization steps applied and λ is the decay
constant of the content type. Everything else here (inverse lookup, quality
optimization, perceptual mapping, brick estimates, validation) is derived
from that formula.

Unknown content types and quality labels fall back to the configured
defaults with a logged warning; they never raise. The only time-sensitive
function, generate_optimization_report(), takes `now` as a parameter.
"""

from __future__ import annotations

import logging
import math
import numbers
from datetime import UTC, datetime

import numpy as np

from core.config import DEFAULT_CONFIG, ForgeConfig
from core.forge.types import (
    DECAY_CONSTANTS,
    DEFAULT_QUALITY_TARGET,
    QUALITY_TARGETS,
    BrickEstimate,
    DecayPoint,
    InvalidTargetRetentionError,
    OptimizationReport,
    OptimizationResult,
    QualityValidation,
    RetentionSummary,
)

logger = logging.getLogger(__name__)

MSG_TOO_LOW = "Quality too low - increase resolution or reduce complexity"
MSG_ACCEPTABLE = "Quality acceptable but below recommended threshold"
MSG_RECOMMENDED = "Quality meets recommended standards"


def _round_half_up(value: float) -> int:
    # Math.round semantics: .5 rounds towards +inf; round() is banker's rounding
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


def decay_constant(content_type: str, config: ForgeConfig = DEFAULT_CONFIG) -> float:
    """Return λ for a content type, falling back to config.default_decay_constant."""
    lam = DECAY_CONSTANTS.get(content_type)
    if lam is None:
        logger.warning(
            "Unknown content_type %r — using default decay constant %.2f",
            content_type,
            config.default_decay_constant,
        )
        return config.default_decay_constant
    return lam


def calculate_retention(
    initial_info: float,
    steps: float,
    content_type: str,
    *,
    config: ForgeConfig = DEFAULT_CONFIG,
) -> float:
    """Compute information retained after a number of quantization steps.

    Args:
        initial_info: Initial information content in [0, 1].
        steps: Quantization steps applied (>= 0). Fractional values are
            accepted so results of calculate_optimal_steps() can be fed back.
        content_type: Content type tag selecting λ.
        config: Calibration constants.

    Returns:
        initial_info · e^(−λ·steps), in [0, initial_info] for steps >= 0.
    """
    lam = decay_constant(content_type, config)
    return initial_info * math.exp(-lam * steps)


def calculate_optimal_steps(
    target_retention: float,
    content_type: str,
    *,
    config: ForgeConfig = DEFAULT_CONFIG,
) -> float:
    """Find the step count at which retention drops to target_retention.

    Inverse of calculate_retention() with I0 = 1: t = −ln(target) / λ.
    The result is continuous; rounding is the caller's job.

    Args:
        target_retention: Desired retention in (0, 1]. 1.0 yields 0 steps.
        content_type: Content type tag selecting λ.
        config: Calibration constants.

    Returns:
        Step count as a float.

    Raises:
        InvalidTargetRetentionError: If target_retention <= 0 or is not finite.
    """
    if not math.isfinite(target_retention) or target_retention <= 0:
        raise InvalidTargetRetentionError(target_retention)
    lam = decay_constant(content_type, config)
    return -math.log(target_retention) / lam


def generate_decay_curve(
    content_type: str,
    max_steps: int | None = None,
    *,
    config: ForgeConfig = DEFAULT_CONFIG,
) -> tuple[DecayPoint, ...]:
    """Sample the retention curve for visualization.

    Args:
        content_type: Content type tag selecting λ.
        max_steps: Last step to include. Defaults to config.curve_steps (20).
        config: Calibration constants.

    Returns:
        max_steps + 1 DecayPoints for steps 0..max_steps, in order.

    Raises:
        ValueError: If max_steps is not an integer or is negative.
    """
    if max_steps is None:
        max_steps = config.curve_steps
    if isinstance(max_steps, bool) or not isinstance(max_steps, numbers.Integral):
        raise ValueError(f"max_steps must be an integer, got {max_steps!r}")
    if max_steps < 0:
        raise ValueError(f"max_steps must be non-negative, got {max_steps}")

    lam = decay_constant(content_type, config)
    steps = np.arange(max_steps + 1)
    retentions = np.exp(-lam * steps)

    return tuple(
        DecayPoint(step=int(t), retention=float(r), retention_percent=f"{r * 100:.1f}")
        for t, r in zip(steps, retentions, strict=True)
    )


def optimize_for_quality(
    content_type: str,
    quality: str = "medium",
    *,
    config: ForgeConfig = DEFAULT_CONFIG,
) -> OptimizationResult:
    """Recommend a quantization level for a quality label.

    high → 90 %, medium → 75 %, low → 60 % retention. Unknown labels use
    the medium target.
    """
    target = QUALITY_TARGETS.get(quality)
    if target is None:
        logger.warning(
            "Unknown quality %r — using default target %.2f", quality, DEFAULT_QUALITY_TARGET
        )
        target = DEFAULT_QUALITY_TARGET

    steps = calculate_optimal_steps(target, content_type, config=config)
    return OptimizationResult(
        quantization_steps=_round_half_up(steps),
        expected_retention=target,
        decay_constant=DECAY_CONSTANTS.get(content_type),
        quality=quality,
    )


def calculate_perceptual_quality(
    retention: float,
    *,
    config: ForgeConfig = DEFAULT_CONFIG,
) -> int:
    """Map retention in [0, 1] to a 0–100 perceived quality score.

    Perception is not linear: retention ** 0.7 lifts the middle of the
    range, so 50 % retention reads as roughly 62 % quality.

    Raises:
        ValueError: If retention is negative or NaN.
    """
    if not retention >= 0:
        raise ValueError(f"retention must be non-negative, got {retention!r}")
    return _round_half_up(100 * retention**config.perceptual_exponent)


def estimate_brick_count(
    width: int,
    height: int,
    depth: int = 1,
    *,
    config: ForgeConfig = DEFAULT_CONFIG,
) -> BrickEstimate:
    """Estimate bricks needed for a build measured in studs.

    A single layer is a mosaic where almost every stud gets its own brick;
    deeper builds are sculptures that can use larger bricks.

    Raises:
        ValueError: If width or height is not positive or depth < 1.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"width and height must be positive, got {width}x{height}")
    if depth < 1:
        raise ValueError(f"depth must be >= 1, got {depth}")

    total_studs = width * height * depth
    is_mosaic = depth == 1
    efficiency = config.mosaic_efficiency if is_mosaic else config.sculpture_efficiency

    return BrickEstimate(
        total_studs=total_studs,
        estimated_bricks=_round_half_up(total_studs * efficiency),
        width=width,
        height=height,
        depth=depth,
        type="mosaic" if is_mosaic else "sculpture",
    )


def validate_quality(
    retention: float,
    content_type: str,
    *,
    config: ForgeConfig = DEFAULT_CONFIG,
) -> QualityValidation:
    """Check a retention value against the minimum and recommended thresholds.

    content_type is accepted for API symmetry; thresholds are the same for
    every type.
    """
    passes = retention >= config.minimum_retention
    recommended = retention >= config.recommended_retention

    if not passes:
        message = MSG_TOO_LOW
    elif not recommended:
        message = MSG_ACCEPTABLE
    else:
        message = MSG_RECOMMENDED

    return QualityValidation(
        passes=passes,
        recommended=recommended,
        retention=retention,
        message=message,
    )


def generate_optimization_report(
    content_type: str,
    quality: str,
    width: int,
    height: int,
    depth: int = 1,
    *,
    now: datetime | None = None,
    config: ForgeConfig = DEFAULT_CONFIG,
) -> OptimizationReport:
    """Run the full analysis for one build request.

    Args:
        content_type: Content type tag.
        quality: high | medium | low.
        width: Build width in studs.
        height: Build height in studs.
        depth: Build depth in layers (1 = mosaic).
        now: Report creation time. Must be timezone-aware. Defaults to the
            current UTC time.
        config: Calibration constants.

    Returns:
        OptimizationReport combining the optimization, the retention reached at
        the rounded step count, its perceptual score, the brick estimate and
        the default-length decay curve.

    Raises:
        ValueError: If now has no timezone info or the dimensions are invalid.
    """
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        raise ValueError("now must be timezone-aware (use datetime.now(UTC))")

    optimization = optimize_for_quality(content_type, quality, config=config)
    retention = calculate_retention(
        1.0, optimization.quantization_steps, content_type, config=config
    )

    return OptimizationReport(
        optimization=optimization,
        retention=RetentionSummary(
            mathematical=retention,
            perceptual=calculate_perceptual_quality(retention, config=config),
            percentage=f"{retention * 100:.1f}",
        ),
        bricks=estimate_brick_count(width, height, depth, config=config),
        decay_curve=generate_decay_curve(content_type, config=config),
        content_type=content_type,
        timestamp=now.astimezone(UTC).isoformat(),
    )
