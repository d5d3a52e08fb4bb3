"""
api/schemas/forge.py — Pydantic request models for the /forge endpoints.

content_type and quality are closed Literal tags, so unknown values are
rejected with 422 here and the engine never sees them.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from core.forge.types import ContentType, QualityLabel


class RetentionRequest(BaseModel):
    """POST /forge/retention — information retained after N steps."""

    content_type: ContentType = Field(..., description="Content type selecting the decay rate")
    steps: float = Field(..., ge=0, description="Quantization steps applied")
    initial_info: float = Field(1.0, ge=0, le=1, description="Initial information (0-1)")


class OptimalStepsRequest(BaseModel):
    """POST /forge/optimal-steps — inverse lookup for a target retention."""

    content_type: ContentType
    target_retention: float = Field(..., gt=0, le=1, description="Desired retention in (0, 1]")


class OptimizeRequest(BaseModel):
    """POST /forge/optimize — recommended quantization for a quality label."""

    content_type: ContentType
    quality: QualityLabel = "medium"


class PerceptualRequest(BaseModel):
    """POST /forge/perceptual — perceived quality score for a retention."""

    retention: float = Field(..., ge=0, le=1)


class BrickCountRequest(BaseModel):
    """POST /forge/bricks — brick estimate for stud dimensions."""

    width: int = Field(..., gt=0, description="Width in studs")
    height: int = Field(..., gt=0, description="Height in studs")
    depth: int = Field(1, ge=1, description="Depth in layers (1 = mosaic)")


class ValidateRequest(BaseModel):
    """POST /forge/validate — advisory quality verdict."""

    content_type: ContentType
    retention: float = Field(..., ge=0, le=1)


class ReportRequest(BaseModel):
    """POST /forge/report — complete optimization report."""

    content_type: ContentType
    quality: QualityLabel = "medium"
    width: int = Field(..., gt=0, description="Width in studs")
    height: int = Field(..., gt=0, description="Height in studs")
    depth: int = Field(1, ge=1, description="Depth in layers (1 = mosaic)")
