from pydantic import BaseModel, ConfigDict, Field


class Meal(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    time: str
    calories: int
    description: str


class NutritionPlan(BaseModel):
    """Daily calorie/macro targets. Macros in grams, hydration in liters."""

    model_config = ConfigDict(frozen=True)

    calories: int = Field(..., ge=0)
    protein: int = Field(..., ge=0)
    carbs: int = Field(..., ge=0)
    fats: int = Field(..., ge=0)
    hydration: float = Field(..., ge=0)
    meals: tuple[Meal, ...] = ()
