"""
Daily calorie and macro targets from activity expenditure, allocated across a
fixed four-meal template.

Calories: round(1800 + calories_burned * 0.5). Macros 25/45/30 % (protein/carbs/fats)
at 4/4/9 kcal per gram, each rounded on its own. On a low-recovery day 5 % of
calories move from carbs to protein; total calories and meals are unaffected.
"""
from dataclasses import dataclass

from vitalcore.core.numeric import round_half_up
from vitalcore.schemas.nutrition import Meal, NutritionPlan
from vitalcore.schemas.recovery import RecoverySnapshot
from vitalcore.schemas.telemetry import ActivityRecord

BASE_CALORIES = 1800
ACTIVITY_CALORIE_FACTOR = 0.5
HYDRATION_LITERS = 2.5

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9

PROTEIN_SHARE = 0.25
CARBS_SHARE = 0.45
FATS_SHARE = 0.30

# Same threshold as the recovery-day insight
LOW_RECOVERY_BELOW = 75
RECOVERY_PROTEIN_SHIFT = 0.05


@dataclass(frozen=True)
class MealSlot:
    name: str
    time: str
    share: float
    description: str


MEAL_SCHEDULE: list[MealSlot] = [
    MealSlot("Breakfast", "7:30 AM", 0.25, "Oatmeal with berries, nuts, and Greek yogurt"),
    MealSlot("Lunch", "12:30 PM", 0.35, "Grilled chicken salad with quinoa and avocado"),
    MealSlot("Snack", "3:30 PM", 0.10, "Apple with almond butter"),
    MealSlot("Dinner", "7:00 PM", 0.30, "Salmon with roasted vegetables and brown rice"),
]


def total_calories(activity: ActivityRecord) -> int:
    return round_half_up(BASE_CALORIES + activity.calories_burned * ACTIVITY_CALORIE_FACTOR)


def macro_shares(recovery: RecoverySnapshot) -> tuple[float, float, float]:
    """(protein, carbs, fats) calorie shares for the day."""
    if recovery.recovery_score < LOW_RECOVERY_BELOW:
        return (
            PROTEIN_SHARE + RECOVERY_PROTEIN_SHIFT,
            CARBS_SHARE - RECOVERY_PROTEIN_SHIFT,
            FATS_SHARE,
        )
    return PROTEIN_SHARE, CARBS_SHARE, FATS_SHARE


def plan(activity: ActivityRecord, recovery: RecoverySnapshot) -> NutritionPlan:
    calories = total_calories(activity)
    protein_share, carbs_share, fats_share = macro_shares(recovery)
    meals = tuple(
        Meal(
            name=slot.name,
            time=slot.time,
            calories=round_half_up(calories * slot.share),
            description=slot.description,
        )
        for slot in MEAL_SCHEDULE
    )
    return NutritionPlan(
        calories=calories,
        protein=round_half_up(calories * protein_share / KCAL_PER_GRAM_PROTEIN),
        carbs=round_half_up(calories * carbs_share / KCAL_PER_GRAM_CARBS),
        fats=round_half_up(calories * fats_share / KCAL_PER_GRAM_FAT),
        hydration=HYDRATION_LITERS,
        meals=meals,
    )
