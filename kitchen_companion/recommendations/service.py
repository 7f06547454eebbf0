from __future__ import annotations

import logging
from typing import Protocol

from ..reference.data_store import ReferenceDataProvider, take_snapshot
from .interpreter import interpret
from .models import (
    MealPlanRecommendationRequest,
    MealPlanRecommendationResult,
    RecipeRecommendationRequest,
    RecipeRecommendationResult,
)
from .outcomes import CompletionOutcome, DomainRefusal, Success, TransportFailure
from .prompts import build_prompt, code_books_for

logger = logging.getLogger(__name__)


class CompletionBackend(Protocol):
    def complete(self, prompt: str) -> str | TransportFailure:
        ...


class RecommendationService:
    """
    Turns recipe and meal-plan requests into classified completion outcomes.

    Holds only its collaborators; every call takes a fresh reference
    snapshot and makes exactly one completion round trip, never retried.
    """

    def __init__(
        self,
        reference_data: ReferenceDataProvider,
        completion_client: CompletionBackend,
        image_urls: tuple[str, ...] = (),
    ) -> None:
        self.reference_data = reference_data
        self.completion_client = completion_client
        self.image_urls = image_urls

    def recommend_recipe(self, request: RecipeRecommendationRequest) -> CompletionOutcome:
        return self._recommend(request)

    def recommend_meal_plan(self, request: MealPlanRecommendationRequest) -> CompletionOutcome:
        return self._recommend(request)

    def _recommend(
        self,
        request: RecipeRecommendationRequest | MealPlanRecommendationRequest,
    ) -> CompletionOutcome:
        request_type = request.request_type
        snapshot = take_snapshot(self.reference_data, code_books_for(request_type))
        prompt = build_prompt(request, snapshot, self.image_urls)
        logger.debug("Built %s prompt:\n%s", request_type.value, prompt)

        completion = self.completion_client.complete(prompt)
        if isinstance(completion, TransportFailure):
            outcome: CompletionOutcome = completion
        else:
            outcome = interpret(completion, request_type, snapshot)

        logger.info("%s recommendation finished: %s", request_type.value, outcome.kind.value)
        return outcome


def to_recipe_result(outcome: CompletionOutcome) -> RecipeRecommendationResult:
    if isinstance(outcome, Success):
        return RecipeRecommendationResult(success=True, recipe=outcome.payload)
    if isinstance(outcome, DomainRefusal):
        return RecipeRecommendationResult(success=False, reason_for_fail=outcome.reason)
    raise ValueError(f"{outcome.kind.value} outcome has no recipe result")


def to_meal_plan_result(outcome: CompletionOutcome) -> MealPlanRecommendationResult:
    if isinstance(outcome, Success):
        return MealPlanRecommendationResult(success=True, meal_plan=outcome.payload)
    if isinstance(outcome, DomainRefusal):
        return MealPlanRecommendationResult(success=False, reason_for_fail=outcome.reason)
    raise ValueError(f"{outcome.kind.value} outcome has no meal plan result")
