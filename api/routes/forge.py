"""
api/routes/forge.py — Forge Theory engine endpoints.

Endpoints
=========
    POST /forge/retention       — Retention after N quantization steps
    POST /forge/optimal-steps   — Steps needed to reach a target retention
    GET  /forge/curve/{type}    — Retention curve for plotting
    POST /forge/optimize        — Recommended quantization for a quality label
    POST /forge/perceptual      — Perceived quality score (0-100)
    POST /forge/bricks          — Brick count estimate
    POST /forge/validate        — Advisory quality verdict
    POST /forge/report          — All of the above combined

Thin HTTP controllers — the math lives in core/forge/decay.py.

Error codes
===========
    422  — Unknown content type or quality, out-of-range values
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from api.schemas.forge import (
    BrickCountRequest,
    OptimalStepsRequest,
    OptimizeRequest,
    PerceptualRequest,
    ReportRequest,
    RetentionRequest,
    ValidateRequest,
)
from core.forge import decay
from core.forge.types import parse_content_type
from infrastructure.metrics import LatencyTimer, record_forge_request, record_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forge", tags=["forge"])


@router.post("/retention")
def retention(body: RetentionRequest) -> dict[str, Any]:
    """Return I0 · e^(−λ·steps) for the content type."""
    record_forge_request(operation="retention", content_type=body.content_type)
    value = decay.calculate_retention(body.initial_info, body.steps, body.content_type)
    return {
        "content_type": body.content_type,
        "steps": body.steps,
        "retention": value,
        "retention_percent": f"{value * 100:.1f}",
    }


@router.post("/optimal-steps")
def optimal_steps(body: OptimalStepsRequest) -> dict[str, Any]:
    """Return the continuous step count reaching the target retention."""
    record_forge_request(operation="optimal_steps", content_type=body.content_type)
    try:
        steps = decay.calculate_optimal_steps(body.target_retention, body.content_type)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {
        "content_type": body.content_type,
        "target_retention": body.target_retention,
        "steps": steps,
    }


@router.get("/curve/{content_type}")
def curve(
    content_type: str,
    max_steps: int = Query(20, ge=0, le=500),
) -> dict[str, Any]:
    """Return the retention curve for steps 0..max_steps."""
    try:
        content_type = parse_content_type(content_type)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    record_forge_request(operation="curve", content_type=content_type)
    points = decay.generate_decay_curve(content_type, max_steps)
    return {"content_type": content_type, "curve": [p.to_dict() for p in points]}


@router.post("/optimize")
def optimize(body: OptimizeRequest) -> dict[str, Any]:
    """Return the recommended quantization for a quality label."""
    record_forge_request(operation="optimize", content_type=body.content_type)
    return decay.optimize_for_quality(body.content_type, body.quality).to_dict()


@router.post("/perceptual")
def perceptual(body: PerceptualRequest) -> dict[str, Any]:
    """Return the perceived quality score for a retention value."""
    record_forge_request(operation="perceptual", content_type="none")
    return {
        "retention": body.retention,
        "perceptual_quality": decay.calculate_perceptual_quality(body.retention),
    }


@router.post("/bricks")
def bricks(body: BrickCountRequest) -> dict[str, Any]:
    """Return the brick estimate for the given dimensions."""
    record_forge_request(operation="bricks", content_type="none")
    try:
        estimate = decay.estimate_brick_count(body.width, body.height, body.depth)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return estimate.to_dict()


@router.post("/validate")
def validate(body: ValidateRequest) -> dict[str, Any]:
    """Return the advisory verdict for a retention value."""
    record_forge_request(operation="validate", content_type=body.content_type)
    return decay.validate_quality(body.retention, body.content_type).to_dict()


@router.post("/report")
def report(body: ReportRequest) -> dict[str, Any]:
    """Return the complete optimization report."""
    record_forge_request(operation="report", content_type=body.content_type)
    try:
        with LatencyTimer() as t:
            result = decay.generate_optimization_report(
                body.content_type, body.quality, body.width, body.height, body.depth
            )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    record_report(
        quality=body.quality, build_type=result.bricks.type, latency_seconds=t.elapsed
    )
    logger.info(
        "Report: %s/%s %dx%dx%d → %d steps, %d bricks",
        body.content_type,
        body.quality,
        body.width,
        body.height,
        body.depth,
        result.optimization.quantization_steps,
        result.bricks.estimated_bricks,
    )
    return result.to_dict()
