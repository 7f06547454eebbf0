"""
Output contracts shown to the completion model.

Each schema is the example JSON document the model must imitate, with
placeholder values. Bump ``version`` whenever the shape changes so prompt
text and payload validation can be tested against the same revision.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .models import RequestType


@dataclass(frozen=True)
class OutputSchema:
    request_type: RequestType
    version: int
    example: str


def _recipe_example() -> dict[str, Any]:
    return {
        "title": "string",
        "summary": "string",
        "prepTime": 1,
        "prepTimeUnitCd": 1,
        "cookTime": 1,
        "cookTimeUnitCd": 1,
        "servings": 1,
        "yield": "string",
        "imageUrl": "string",
        "thumbnailUrl": "string",
        "calories": 0,
        "carbsG": 0,
        "sugarsG": 0,
        "fatG": 0,
        "categoryIds": [0],
        "ingredientGroups": [
            {
                "ingredientGroupOrder": 1,
                "label": "string",
                "ingredients": [
                    {"ingredientOrder": 1, "imageUrl": "string", "label": "string"},
                ],
            },
        ],
        "stepGroups": [
            {
                "stepGroupOrder": 1,
                "label": "string",
                "steps": [
                    {"stepOrder": 1, "label": "string", "imageUrl": "string"},
                ],
            },
        ],
    }


def _render(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


RECIPE_SCHEMA = OutputSchema(
    request_type=RequestType.recipe,
    version=1,
    example=_render({
        "success": True,
        "reasonForFail": "string",
        "recipe": _recipe_example(),
    }),
)

MEAL_PLAN_SCHEMA = OutputSchema(
    request_type=RequestType.meal_plan,
    version=1,
    example=_render({
        "success": True,
        "reasonForFail": "string",
        "mealPlanTitle": "string",
        "mealPlanDays": [
            {
                "breakfastRecipe": _recipe_example(),
                "lunchRecipe": _recipe_example(),
                "dinnerRecipe": _recipe_example(),
                "breakfastRecipeSubstituteCd": 0,
                "lunchRecipeSubstituteCd": 0,
                "dinnerRecipeSubstituteCd": 0,
                "daysOfWeekCd": 0,
            },
        ],
    }),
)

_SCHEMAS = {
    RequestType.recipe: RECIPE_SCHEMA,
    RequestType.meal_plan: MEAL_PLAN_SCHEMA,
}


def schema_for(request_type: RequestType) -> OutputSchema:
    return _SCHEMAS[request_type]
