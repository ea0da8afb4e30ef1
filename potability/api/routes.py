"""
API Routes — Endpoint Definitions

Thin wrapper: exactly one engine call per prediction request.
Engine errors are mapped to HTTP responses by the handlers in main.py.
"""

import random
from functools import lru_cache
from typing import List

from fastapi import APIRouter, status

from potability.config import settings
from potability.engine import ClassificationEngine, describe_confidence, summarize
from potability.rules import RuleRegistry, RuleSet, get_registry

from .schemas import (
    ParameterInfo,
    PredictionRequest,
    PredictionResponse,
    ValidationErrorResponse,
    VariantInfo,
)


router = APIRouter()


def get_rules() -> RuleRegistry:
    """Registry for the configured tables directory (built once)."""
    return get_registry(settings.RULES_DIR)


@lru_cache(maxsize=None)
def _engine_for(variant: str, strict: bool, rules_dir: str) -> ClassificationEngine:
    registry = get_registry(rules_dir or None)
    return ClassificationEngine(registry.get(variant), strict=strict)


def get_engine(variant: str) -> ClassificationEngine:
    """Engine for a variant. Raises UnknownVariantError if not configured."""
    return _engine_for(variant, settings.STRICT_VALIDATION, settings.RULES_DIR or "")


def _variant_info(rule_set: RuleSet) -> VariantInfo:
    return VariantInfo(
        variant=rule_set.variant,
        version=rule_set.version,
        description=rule_set.description,
        policy=rule_set.policy,
        threshold=rule_set.threshold,
        algorithm_label=rule_set.algorithm_label,
        parameters=[
            ParameterInfo(
                name=rule.name,
                label=rule.display_name,
                unit=rule.unit,
                optimal_low=rule.optimal_low,
                optimal_high=rule.optimal_high,
                weight=rule.weight,
                curve=rule.curve,
            )
            for rule in rule_set.rules
        ],
    )


def _predict(variant: str, request: PredictionRequest) -> PredictionResponse:
    engine = get_engine(variant)
    rng = random.Random(request.seed) if request.seed is not None else None

    result = engine.predict(request.measurements, rng=rng)

    return PredictionResponse(
        **result.model_dump(),
        summary=summarize(result),
        confidence_band=describe_confidence(result.confidence),
    )


@router.get(
    "/variants",
    response_model=List[VariantInfo],
    summary="List scoring variants",
    description="Parameters, optimal ranges, policy and threshold of every configured variant."
)
async def list_variants() -> List[VariantInfo]:
    return [_variant_info(rule_set) for rule_set in get_rules()]


@router.get(
    "/variants/{variant}",
    response_model=VariantInfo,
    responses={404: {"description": "Unknown variant"}},
    summary="Describe one scoring variant",
)
async def get_variant(variant: str) -> VariantInfo:
    return _variant_info(get_rules().get(variant))


@router.post(
    "/predict",
    response_model=PredictionResponse,
    status_code=status.HTTP_200_OK,
    responses={
        422: {"model": ValidationErrorResponse, "description": "Missing or non-numeric parameters"},
    },
    summary="Predict potability with the default variant",
)
async def predict_default(request: PredictionRequest) -> PredictionResponse:
    return _predict(settings.DEFAULT_VARIANT, request)


@router.post(
    "/predict/{variant}",
    response_model=PredictionResponse,
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Unknown variant"},
        422: {"model": ValidationErrorResponse, "description": "Missing or non-numeric parameters"},
    },
    summary="Predict potability with a specific variant",
    description="Validates all parameters, scores them, and returns verdict plus risk factors."
)
async def predict_variant(variant: str, request: PredictionRequest) -> PredictionResponse:
    """
    Score one measurement set.

    - All missing parameters are reported together (422)
    - Non-numeric values are rejected when strict validation is on (422)
    - Risk factors are returned in rule-table order
    """
    return _predict(variant, request)
