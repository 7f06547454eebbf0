from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..reference.data_store import (
    DAYS_OF_WEEK_CODE_BOOK_ID,
    NON_RECIPE_SUBSTITUTION_CODE_BOOK_ID,
    TIME_UNIT_CODE_BOOK_ID,
    ReferenceSnapshot,
)
from .models import (
    DAYS_PER_MEAL_PLAN,
    MealPlanRecommendationRequest,
    RecipeRecommendationRequest,
    RequestType,
)
from .schemas import schema_for

COMMA = ", "
NEW_LINE = "\n"
SECTION_BREAK = "\n\n"

MEALS_PER_DAY = 3

# ---------------------------------------------------------------------------
# Prompt text
# ---------------------------------------------------------------------------

RECIPE_SCHEMA_PROMPT = "Please create a JSON recipe based on the following schema:"
MEAL_PLAN_INTRO_PROMPT = (
    f"Please generate a 1 week meal plan ({DAYS_PER_MEAL_PLAN} days) "
    "using the following instructions."
)
MEAL_PLAN_SCHEMA_PROMPT = "Generate your response as JSON using the following schema:"
MEAL_PLAN_SIZE_PROMPT = (
    f"Provide {MEALS_PER_DAY} recipes for each day (breakfast, lunch and dinner), "
    f"{MEALS_PER_DAY * DAYS_PER_MEAL_PLAN} recipes in total for the week."
)

INGREDIENTS_PROMPT = "Base the recipe on the following ingredients:"
GOAL_PROMPT = "Please tailor the meal plan to this particular goal:"
PREFERENCES_PROMPT = "Please tailor the recipe to the following dietary preferences:"
RESTRICTIONS_PROMPT = "Here are the allergies and dietary restrictions to respect:"

CATEGORIES_PROMPT = "Here are the categoryIds and categories available:"
TIME_UNITS_PROMPT = "These are the only valid values for prepTimeUnitCd and cookTimeUnitCd:"
DAYS_OF_WEEK_PROMPT = "These are the only valid values for daysOfWeekCd:"
SUBSTITUTIONS_PROMPT = (
    "These are the only valid values for breakfastRecipeSubstituteCd, "
    "lunchRecipeSubstituteCd and dinnerRecipeSubstituteCd:"
)
SUBSTITUTION_NOTE = (
    "You may occasionally use one of these substitution codes for a meal "
    "instead of an actual recipe; leave that meal's recipe null when you do."
)

IMAGE_URLS_PROMPT = "For each recipe imageUrl, pick one of the following URLs:"
COMPLETENESS_PROMPT = "Ensure every recipe is complete with:"
COMPLETENESS_CHECKLIST = (
    "A meaningful title and summary.",
    "Calories and nutritional information filled with realistic values.",
    "Step-by-step instructions grouped logically.",
    "Ingredient groups clearly labeled.",
)

RULES_PROMPT = "Follow these rules exactly:"
RECIPE_REFUSAL_RULES = (
    "If the ingredients provided are nonsense, set success to false and explain why "
    "the recipe could not be generated in reasonForFail.",
    "If the ingredient list contains items from the allergies and dietary restrictions, "
    "set success to false and explain the conflict in reasonForFail.",
)
MEAL_PLAN_REFUSAL_RULES = (
    "If the goal or dietary preferences provided are nonsense, set success to false and "
    "explain why the meal plan could not be generated in reasonForFail.",
    "If the dietary preferences contain items from the allergies and dietary restrictions, "
    "set success to false and explain the conflict in reasonForFail.",
)
FORMAT_RULES = (
    "Respond with the JSON result only. Do not include any explanation or other text.",
    "Do not include comments in the JSON.",
    "The JSON must be valid and deserialize strictly into the schema above.",
)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PromptSection:
    label: str
    lines: tuple[str, ...] = ()
    separator: str = NEW_LINE

    def render(self) -> str:
        if not self.lines:
            return self.label
        return f"{self.label}{NEW_LINE}{self.separator.join(self.lines)}"


def _list_section(label: str, items: Sequence[str], separator: str) -> PromptSection | None:
    """An empty list means "no constraint", so it gets no section at all."""
    if not items:
        return None
    return PromptSection(label, tuple(items), separator)


def _category_section(snapshot: ReferenceSnapshot) -> PromptSection | None:
    return _list_section(CATEGORIES_PROMPT, [str(c) for c in snapshot.categories], NEW_LINE)


def _code_book_section(
    label: str,
    snapshot: ReferenceSnapshot,
    code_book_id: int,
) -> PromptSection | None:
    values = snapshot.code_values(code_book_id) or ()
    return _list_section(label, [str(v) for v in values], NEW_LINE)


def _closing_sections(
    image_urls: Sequence[str],
    refusal_rules: Sequence[str],
) -> list[PromptSection | None]:
    return [
        _list_section(IMAGE_URLS_PROMPT, image_urls, NEW_LINE),
        PromptSection(COMPLETENESS_PROMPT, COMPLETENESS_CHECKLIST),
        PromptSection(RULES_PROMPT, tuple(refusal_rules) + FORMAT_RULES),
    ]


def _recipe_sections(
    request: RecipeRecommendationRequest,
    snapshot: ReferenceSnapshot,
    image_urls: Sequence[str],
) -> list[PromptSection | None]:
    return [
        PromptSection(RECIPE_SCHEMA_PROMPT, (schema_for(RequestType.recipe).example,)),
        _list_section(INGREDIENTS_PROMPT, request.ingredient_list, COMMA),
        _list_section(PREFERENCES_PROMPT, request.meal_preferences, COMMA),
        _list_section(RESTRICTIONS_PROMPT, request.allergies_and_restrictions, COMMA),
        _category_section(snapshot),
        _code_book_section(TIME_UNITS_PROMPT, snapshot, TIME_UNIT_CODE_BOOK_ID),
        *_closing_sections(image_urls, RECIPE_REFUSAL_RULES),
    ]


def _meal_plan_sections(
    request: MealPlanRecommendationRequest,
    snapshot: ReferenceSnapshot,
    image_urls: Sequence[str],
) -> list[PromptSection | None]:
    goal = request.goal_or_purpose
    substitutions = _code_book_section(
        SUBSTITUTIONS_PROMPT, snapshot, NON_RECIPE_SUBSTITUTION_CODE_BOOK_ID
    )
    return [
        PromptSection(MEAL_PLAN_INTRO_PROMPT),
        PromptSection(MEAL_PLAN_SCHEMA_PROMPT, (schema_for(RequestType.meal_plan).example,)),
        PromptSection(MEAL_PLAN_SIZE_PROMPT),
        _list_section(GOAL_PROMPT, [goal] if goal else [], COMMA),
        _list_section(PREFERENCES_PROMPT, request.meal_preferences, COMMA),
        _list_section(RESTRICTIONS_PROMPT, request.allergies_and_restrictions, COMMA),
        _category_section(snapshot),
        _code_book_section(TIME_UNITS_PROMPT, snapshot, TIME_UNIT_CODE_BOOK_ID),
        _code_book_section(DAYS_OF_WEEK_PROMPT, snapshot, DAYS_OF_WEEK_CODE_BOOK_ID),
        substitutions,
        PromptSection(SUBSTITUTION_NOTE) if substitutions else None,
        *_closing_sections(image_urls, MEAL_PLAN_REFUSAL_RULES),
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def code_books_for(request_type: RequestType) -> tuple[int, ...]:
    """Code books whose values a prompt of ``request_type`` lists."""
    if request_type is RequestType.meal_plan:
        return (
            TIME_UNIT_CODE_BOOK_ID,
            DAYS_OF_WEEK_CODE_BOOK_ID,
            NON_RECIPE_SUBSTITUTION_CODE_BOOK_ID,
        )
    return (TIME_UNIT_CODE_BOOK_ID,)


def build_sections(
    request: RecipeRecommendationRequest | MealPlanRecommendationRequest,
    snapshot: ReferenceSnapshot,
    image_urls: Sequence[str] = (),
) -> list[PromptSection]:
    if isinstance(request, RecipeRecommendationRequest):
        sections = _recipe_sections(request, snapshot, image_urls)
    elif isinstance(request, MealPlanRecommendationRequest):
        sections = _meal_plan_sections(request, snapshot, image_urls)
    else:
        raise TypeError(f"Unsupported recommendation request: {type(request).__name__}")
    return [section for section in sections if section is not None]


def build_prompt(
    request: RecipeRecommendationRequest | MealPlanRecommendationRequest,
    snapshot: ReferenceSnapshot,
    image_urls: Sequence[str] = (),
) -> str:
    """
    Compose the full instruction text sent to the completion model.

    Pure: identical ``request``, ``snapshot`` and ``image_urls`` always yield
    byte-identical text.
    """
    sections = build_sections(request, snapshot, image_urls)
    return SECTION_BREAK.join(section.render() for section in sections)
