"""
Calibration configuration for the Forge Theory engine.

These immutable config objects hold every tunable constant of the decay model
(fallback decay rate, quality thresholds, brick efficiencies, perceptual
exponent) so the formulas in core.forge.decay stay free of magic numbers and
alternative calibrations can be passed explicitly.
"""

import math
from dataclasses import dataclass

PERCEPTUAL_EXPONENT: float = 0.7
"""Power-law exponent approximating non-linear human perception of quality loss."""


@dataclass(frozen=True)
class ForgeConfig:
    """
    Calibration constants for retention, quality and brick estimation.

    Immutable configuration object that can be reused across any number of
    engine calls. Defaults reproduce the reference BlockForge calibration.

    Attributes:
        default_decay_constant: λ used when a content type has no table entry.
            Defaults to 0.15 (the image rate).
        minimum_retention: Retention below which a result fails validation.
            Defaults to 0.50.
        recommended_retention: Retention at or above which a result is
            recommended. Defaults to 0.70.
        mosaic_efficiency: Fraction of studs needing their own brick for a
            single-layer mosaic. Defaults to 0.95.
        sculpture_efficiency: Same fraction for multi-layer builds, which can
            use larger bricks. Defaults to 0.70.
        perceptual_exponent: Exponent of the perceptual quality curve.
            Defaults to PERCEPTUAL_EXPONENT (0.7).
        curve_steps: Default maximum step of generated decay curves.
            Defaults to 20.

    Example:
        >>> config = ForgeConfig(minimum_retention=0.6, recommended_retention=0.8)
        >>> validate_quality(0.65, "image", config=config).recommended
        False
    """

    default_decay_constant: float = 0.15
    minimum_retention: float = 0.50
    recommended_retention: float = 0.70
    mosaic_efficiency: float = 0.95
    sculpture_efficiency: float = 0.70
    perceptual_exponent: float = PERCEPTUAL_EXPONENT
    curve_steps: int = 20

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not math.isfinite(self.default_decay_constant) or self.default_decay_constant <= 0:
            raise ValueError(
                f"default_decay_constant must be positive, got {self.default_decay_constant}"
            )
        for name in ("minimum_retention", "recommended_retention"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.minimum_retention > self.recommended_retention:
            raise ValueError(
                f"minimum_retention ({self.minimum_retention}) must not exceed "
                f"recommended_retention ({self.recommended_retention})"
            )
        for name in ("mosaic_efficiency", "sculpture_efficiency"):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {value}")
        if self.perceptual_exponent <= 0:
            raise ValueError(
                f"perceptual_exponent must be positive, got {self.perceptual_exponent}"
            )
        if self.curve_steps < 0:
            raise ValueError(f"curve_steps must be non-negative, got {self.curve_steps}")


# Pre-defined configurations for common use cases

DEFAULT_CONFIG = ForgeConfig()
"""Reference calibration: λ fallback 0.15, thresholds 0.50 / 0.70."""

STRICT_CONFIG = ForgeConfig(minimum_retention=0.60, recommended_retention=0.80)
"""Tighter validation thresholds for display pieces."""

LENIENT_CONFIG = ForgeConfig(minimum_retention=0.40, recommended_retention=0.60)
"""Looser thresholds for rough prototypes and large sculptures."""
