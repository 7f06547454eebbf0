from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException

from .llm.config import DEFAULT_LLM_CONFIG
from .llm.groq_client import CompletionClient
from .recommendations.models import (
    MealPlanRecommendationRequest,
    MealPlanRecommendationResult,
    RecipeRecommendationRequest,
    RecipeRecommendationResult,
)
from .recommendations.outcomes import CompletionOutcome, DomainRefusal, MalformedOutput, TransportFailure
from .recommendations.service import RecommendationService, to_meal_plan_result, to_recipe_result
from .reference.config import DEFAULT_REFERENCE_CONFIG
from .reference.data_store import CsvReferenceDataProvider

app = FastAPI(title="Kitchen Companion AI API", version="1.0.0")


def get_recommendation_service() -> RecommendationService:
    return RecommendationService(
        reference_data=CsvReferenceDataProvider(DEFAULT_REFERENCE_CONFIG),
        completion_client=CompletionClient(DEFAULT_LLM_CONFIG),
        image_urls=DEFAULT_LLM_CONFIG.image_urls,
    )


def _raise_for_failure(outcome: CompletionOutcome) -> None:
    if isinstance(outcome, TransportFailure):
        raise HTTPException(
            status_code=503,
            detail=f"Recommendation engine unavailable: {outcome.message}",
        )
    if isinstance(outcome, MalformedOutput):
        raise HTTPException(
            status_code=502,
            detail="Recommendation engine returned an unusable response.",
        )
    if isinstance(outcome, DomainRefusal):
        raise HTTPException(
            status_code=422,
            detail={"success": False, "reasonForFail": outcome.reason},
        )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post(
    "/recipe/ai-recipe-recommend",
    response_model=RecipeRecommendationResult,
    response_model_by_alias=True,
)
def recommend_recipe(
    body: RecipeRecommendationRequest,
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecipeRecommendationResult:
    outcome = service.recommend_recipe(body)
    _raise_for_failure(outcome)
    return to_recipe_result(outcome)


@app.post(
    "/meal-plan/ai-recommend",
    response_model=MealPlanRecommendationResult,
    response_model_by_alias=True,
)
def recommend_meal_plan(
    body: MealPlanRecommendationRequest,
    service: RecommendationService = Depends(get_recommendation_service),
) -> MealPlanRecommendationResult:
    outcome = service.recommend_meal_plan(body)
    _raise_for_failure(outcome)
    return to_meal_plan_result(outcome)
