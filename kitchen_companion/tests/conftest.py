from __future__ import annotations

import copy

import pytest

from kitchen_companion.recommendations.outcomes import TransportFailure
from kitchen_companion.reference.data_store import (
    DAYS_OF_WEEK_CODE_BOOK_ID,
    NON_RECIPE_SUBSTITUTION_CODE_BOOK_ID,
    TIME_UNIT_CODE_BOOK_ID,
    Category,
    CodeValue,
    take_snapshot,
)

CATEGORIES = [
    Category(1, "Breakfast"),
    Category(2, "Lunch"),
    Category(3, "Dinner"),
    Category(6, "Vegetarian"),
]

CODE_BOOKS = {
    TIME_UNIT_CODE_BOOK_ID: [CodeValue(1, "Minutes"), CodeValue(2, "Hours")],
    DAYS_OF_WEEK_CODE_BOOK_ID: [
        CodeValue(10, "Monday"),
        CodeValue(11, "Tuesday"),
        CodeValue(12, "Wednesday"),
        CodeValue(13, "Thursday"),
        CodeValue(14, "Friday"),
        CodeValue(15, "Saturday"),
        CodeValue(16, "Sunday"),
    ],
    NON_RECIPE_SUBSTITUTION_CODE_BOOK_ID: [CodeValue(20, "Eat Out"), CodeValue(21, "Leftovers")],
}

ALL_CODE_BOOKS = (
    TIME_UNIT_CODE_BOOK_ID,
    DAYS_OF_WEEK_CODE_BOOK_ID,
    NON_RECIPE_SUBSTITUTION_CODE_BOOK_ID,
)

RECIPE = {
    "title": "Chicken Fried Rice",
    "summary": "A quick weeknight fried rice with chicken and vegetables.",
    "prepTime": 15,
    "prepTimeUnitCd": 1,
    "cookTime": 20,
    "cookTimeUnitCd": 1,
    "servings": 4,
    "yield": "4 bowls",
    "imageUrl": "https://img.example.com/fried-rice.jpg",
    "thumbnailUrl": "https://img.example.com/fried-rice-thumb.jpg",
    "calories": 520.5,
    "carbsG": 62.0,
    "sugarsG": 3.5,
    "fatG": 14.0,
    "categoryIds": [2, 3],
    "ingredientGroups": [
        {
            "ingredientGroupOrder": 1,
            "label": "Main",
            "ingredients": [
                {"ingredientOrder": 1, "imageUrl": None, "label": "2 cups cooked rice"},
                {"ingredientOrder": 2, "imageUrl": None, "label": "300 g chicken breast, diced"},
            ],
        },
    ],
    "stepGroups": [
        {
            "stepGroupOrder": 1,
            "label": "Cook",
            "steps": [
                {"stepOrder": 1, "label": "Brown the chicken in a hot wok.", "imageUrl": None},
                {"stepOrder": 2, "label": "Add the rice and stir-fry until crisp.", "imageUrl": None},
            ],
        },
    ],
}


class FakeReferenceData:
    """In-memory reference data that counts how often it is read."""

    def __init__(self, categories=None, code_books=None):
        self.categories = list(CATEGORIES if categories is None else categories)
        self.code_books = dict(CODE_BOOKS if code_books is None else code_books)
        self.category_reads = 0

    def list_categories(self):
        self.category_reads += 1
        return list(self.categories)

    def list_code_values(self, code_book_id):
        values = self.code_books.get(code_book_id)
        return None if values is None else list(values)


class FakeCompletionClient:
    """Returns a canned reply (or failure) and records every prompt it was sent."""

    def __init__(self, reply: str | TransportFailure):
        self.reply = reply
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str | TransportFailure:
        self.prompts.append(prompt)
        return self.reply


def make_meal_plan_day(day_code: int, *, dinner_substitute: int | None = None) -> dict:
    dinner = None if dinner_substitute is not None else copy.deepcopy(RECIPE)
    return {
        "breakfastRecipe": copy.deepcopy(RECIPE),
        "lunchRecipe": copy.deepcopy(RECIPE),
        "dinnerRecipe": dinner,
        "breakfastRecipeSubstituteCd": None,
        "lunchRecipeSubstituteCd": None,
        "dinnerRecipeSubstituteCd": dinner_substitute,
        "daysOfWeekCd": day_code,
    }


@pytest.fixture
def reference_data() -> FakeReferenceData:
    return FakeReferenceData()


@pytest.fixture
def snapshot(reference_data):
    return take_snapshot(reference_data, ALL_CODE_BOOKS)


@pytest.fixture
def recipe_payload() -> dict:
    return copy.deepcopy(RECIPE)


@pytest.fixture
def meal_plan_payload() -> dict:
    days = [make_meal_plan_day(code) for code in range(10, 17)]
    days[5] = make_meal_plan_day(15, dinner_substitute=20)
    return {"mealPlanTitle": "High-protein week", "mealPlanDays": days}


@pytest.fixture
def fake_client():
    """Factory for ``FakeCompletionClient`` so tests can pick the reply."""
    return FakeCompletionClient
