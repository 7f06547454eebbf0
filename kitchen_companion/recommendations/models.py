from __future__ import annotations

from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from ..reference.data_store import (
    DAYS_OF_WEEK_CODE_BOOK_ID,
    NON_RECIPE_SUBSTITUTION_CODE_BOOK_ID,
    TIME_UNIT_CODE_BOOK_ID,
    ReferenceSnapshot,
)

DAYS_PER_MEAL_PLAN = 7


class RequestType(str, Enum):
    recipe = "recipe"
    meal_plan = "meal_plan"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _snapshot(info: ValidationInfo) -> ReferenceSnapshot | None:
    if isinstance(info.context, dict):
        return info.context.get("snapshot")
    return None


def _check_codes(value: int | None, info: ValidationInfo, code_book_id: int) -> int | None:
    """Reject codes missing from the snapshot's code book, if one was listed."""
    snapshot = _snapshot(info)
    if value is None or snapshot is None:
        return value
    allowed = snapshot.codes(code_book_id)
    if allowed and value not in allowed:
        raise ValueError(f"{value} is not a listed code for {info.field_name}")
    return value


# ── Inbound requests ─────────────────────────────────────────────────────

_LIST_FIELDS = ("ingredient_list", "meal_preferences", "allergies_and_restrictions")


class _RecommendationRequest(_CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        str_strip_whitespace=True,
    )

    meal_preferences: list[str] = Field(default_factory=list)
    allergies_and_restrictions: list[str] = Field(default_factory=list)

    @field_validator(*_LIST_FIELDS, mode="before", check_fields=False)
    @classmethod
    def _null_list_is_empty(cls, value):
        return [] if value is None else value

    @field_validator(*_LIST_FIELDS, mode="after", check_fields=False)
    @classmethod
    def _drop_blank_items(cls, items: list[str]) -> list[str]:
        # Items arrive whitespace-stripped, so blanks are empty strings here
        return [item for item in items if item]


class RecipeRecommendationRequest(_RecommendationRequest):
    ingredient_list: list[str] = Field(default_factory=list)

    @property
    def request_type(self) -> RequestType:
        return RequestType.recipe


class MealPlanRecommendationRequest(_RecommendationRequest):
    goal_or_purpose: str = Field(default="", max_length=500)

    @field_validator("goal_or_purpose", mode="before")
    @classmethod
    def _null_goal_is_blank(cls, value):
        return "" if value is None else value

    @property
    def request_type(self) -> RequestType:
        return RequestType.meal_plan


# ── Generated payloads ───────────────────────────────────────────────────


class Ingredient(_CamelModel):
    ingredient_order: int = Field(..., ge=1)
    image_url: str | None = Field(default=None, max_length=500)
    label: str = Field(..., min_length=1, max_length=255)


class IngredientGroup(_CamelModel):
    ingredient_group_order: int = Field(..., ge=1)
    label: str | None = Field(default=None, max_length=255)
    ingredients: list[Ingredient] = Field(..., min_length=1)


class Step(_CamelModel):
    step_order: int = Field(..., ge=1)
    label: str = Field(..., min_length=1, max_length=255)
    image_url: str | None = Field(default=None, max_length=500)


class StepGroup(_CamelModel):
    step_group_order: int = Field(..., ge=1)
    label: str | None = Field(default=None, max_length=255)
    steps: list[Step] = Field(..., min_length=1)


class Recipe(_CamelModel):
    title: str = Field(..., min_length=1, max_length=256)
    summary: str | None = Field(default=None, min_length=1, max_length=255)
    prep_time: int = Field(..., ge=1)
    prep_time_unit_cd: int
    cook_time: int = Field(..., ge=1)
    cook_time_unit_cd: int
    servings: int = Field(..., ge=1)
    yield_: str | None = Field(default=None, alias="yield", max_length=255)
    image_url: str | None = Field(default=None, max_length=500)
    thumbnail_url: str | None = Field(default=None, max_length=500)
    calories: float = Field(..., ge=0, allow_inf_nan=False)
    carbs_g: float = Field(..., ge=0, allow_inf_nan=False)
    sugars_g: float = Field(..., ge=0, allow_inf_nan=False)
    fat_g: float = Field(..., ge=0, allow_inf_nan=False)
    category_ids: list[int] = Field(..., min_length=1)
    ingredient_groups: list[IngredientGroup] = Field(..., min_length=1)
    step_groups: list[StepGroup] = Field(..., min_length=1)

    @field_validator("prep_time_unit_cd", "cook_time_unit_cd")
    @classmethod
    def _listed_time_unit(cls, value: int, info: ValidationInfo) -> int:
        return _check_codes(value, info, TIME_UNIT_CODE_BOOK_ID)

    @field_validator("category_ids")
    @classmethod
    def _listed_categories(cls, value: list[int], info: ValidationInfo) -> list[int]:
        snapshot = _snapshot(info)
        known = snapshot.category_ids() if snapshot else frozenset()
        unknown = [cid for cid in value if known and cid not in known]
        if unknown:
            raise ValueError(f"unknown category ids: {unknown}")
        # A set of ids; repeats collapse, first occurrence wins
        return list(dict.fromkeys(value))


class MealPlanDay(_CamelModel):
    breakfast_recipe: Recipe | None = None
    lunch_recipe: Recipe | None = None
    dinner_recipe: Recipe | None = None
    breakfast_recipe_substitute_cd: int | None = None
    lunch_recipe_substitute_cd: int | None = None
    dinner_recipe_substitute_cd: int | None = None
    days_of_week_cd: int

    @field_validator("days_of_week_cd")
    @classmethod
    def _listed_day(cls, value: int, info: ValidationInfo) -> int:
        return _check_codes(value, info, DAYS_OF_WEEK_CODE_BOOK_ID)

    @field_validator(
        "breakfast_recipe_substitute_cd",
        "lunch_recipe_substitute_cd",
        "dinner_recipe_substitute_cd",
    )
    @classmethod
    def _listed_substitution(cls, value: int | None, info: ValidationInfo) -> int | None:
        return _check_codes(value, info, NON_RECIPE_SUBSTITUTION_CODE_BOOK_ID)

    @model_validator(mode="after")
    def _every_meal_filled(self) -> MealPlanDay:
        for meal in ("breakfast", "lunch", "dinner"):
            recipe = getattr(self, f"{meal}_recipe")
            substitute = getattr(self, f"{meal}_recipe_substitute_cd")
            if recipe is None and substitute is None:
                raise ValueError(f"{meal} needs either a recipe or a substitute code")
        return self


class MealPlan(_CamelModel):
    meal_plan_title: str = Field(..., min_length=1, max_length=256)
    meal_plan_days: list[MealPlanDay] = Field(
        ..., min_length=DAYS_PER_MEAL_PLAN, max_length=DAYS_PER_MEAL_PLAN
    )

    @field_validator("meal_plan_days")
    @classmethod
    def _distinct_days(cls, days: list[MealPlanDay]) -> list[MealPlanDay]:
        codes = [day.days_of_week_cd for day in days]
        if len(set(codes)) != len(codes):
            raise ValueError("each day of the week may appear only once")
        return days


# ── Model reply envelopes ────────────────────────────────────────────────


class ReplyStatus(_CamelModel):
    """The part of every reply that decides refusal vs. success."""

    success: bool
    reason_for_fail: str | None = None

    @field_validator("reason_for_fail", mode="before")
    @classmethod
    def _non_text_reason_is_missing(cls, value):
        return value if isinstance(value, str) else None


class RecipeReply(ReplyStatus):
    recipe: Recipe


# ── Outbound results ─────────────────────────────────────────────────────


class RecipeRecommendationResult(_CamelModel):
    success: bool
    reason_for_fail: str | None = None
    recipe: Recipe | None = None


class MealPlanRecommendationResult(_CamelModel):
    success: bool
    reason_for_fail: str | None = None
    meal_plan: MealPlan | None = None
