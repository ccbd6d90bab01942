"""Domain models for logged and staged foods."""

from dataclasses import dataclass, replace
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from caloritons.domain.units import MAX_PER_100G, MAX_PORTION_GRAMS, round_half_up


def new_entry_id() -> str:
    """Return a fresh opaque entry id."""
    return uuid4().hex


@dataclass(frozen=True)
class NutritionFacts:
    """Calories and macros normalized to 100 grams."""

    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class FoodEntry:
    """A logged food with its portion weight and derived absolute macros.

    ``per100g`` is authoritative; ``calories``, ``protein``, ``carbs`` and
    ``fat`` are cached values always recomputable from it and ``weight``.
    """

    id: str
    name: str
    weight: float
    per100g: NutritionFacts
    calories: int
    protein: int
    carbs: int
    fat: int
    portion_name: str | None = None

    @classmethod
    def build(
        cls,
        *,
        name: str,
        weight: float,
        per100g: NutritionFacts,
        portion_name: str | None = None,
        entry_id: str | None = None,
    ) -> "FoodEntry":
        """Create an entry, deriving absolute macros from per-100 g facts."""
        ratio = weight / 100
        return cls(
            id=entry_id or new_entry_id(),
            name=name,
            weight=weight,
            per100g=per100g,
            calories=round_half_up(per100g.calories * ratio),
            protein=round_half_up(per100g.protein * ratio),
            carbs=round_half_up(per100g.carbs * ratio),
            fat=round_half_up(per100g.fat * ratio),
            portion_name=portion_name,
        )


@dataclass(frozen=True)
class StagedFood:
    """Candidate shown to the user before it is saved to a day log.

    An ``id`` means an existing entry is being edited.
    """

    name: str
    per100g: NutritionFacts
    weight: float
    portion_name: str
    id: str | None = None

    def with_weight(self, weight: float) -> "StagedFood":
        """Return a copy with a new portion weight."""
        return replace(self, weight=weight)

    def to_entry(self) -> FoodEntry:
        """Materialize the candidate as a food entry."""
        if self.weight <= 0:
            raise ValueError("Portion weight must be positive")
        return FoodEntry.build(
            name=self.name,
            weight=self.weight,
            per100g=self.per100g,
            portion_name=self.portion_name,
            entry_id=self.id,
        )

    @classmethod
    def from_entry(cls, entry: FoodEntry) -> "StagedFood":
        """Stage an existing entry for editing."""
        return cls(
            id=entry.id,
            name=entry.name,
            per100g=entry.per100g,
            weight=entry.weight,
            portion_name=entry.portion_name or "Portion",
        )


class FoodLookupResult(BaseModel):
    """Normalized nutrition record returned by the food lookup."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    name: str = Field(min_length=1)
    calories_per_100g: float = Field(alias="calories100g", ge=0, le=MAX_PER_100G)
    protein_per_100g: float = Field(alias="protein100g", ge=0, le=MAX_PER_100G)
    carbs_per_100g: float = Field(alias="carbs100g", ge=0, le=MAX_PER_100G)
    fat_per_100g: float = Field(alias="fat100g", ge=0, le=MAX_PER_100G)
    standard_portion_grams: float = Field(
        alias="standardPortionGrams", ge=0, le=MAX_PORTION_GRAMS
    )
    standard_portion_name: str = Field(alias="standardPortionName")

    def per100g(self) -> NutritionFacts:
        """Return the per-100 g facts as a domain value."""
        return NutritionFacts(
            calories=self.calories_per_100g,
            protein=self.protein_per_100g,
            carbs=self.carbs_per_100g,
            fat=self.fat_per_100g,
        )

    def is_blank(self) -> bool:
        """Return True when every nutrition value is zero."""
        facts = self.per100g()
        return not any((facts.calories, facts.protein, facts.carbs, facts.fat))

    def to_staged(self) -> StagedFood:
        """Stage the record with its standard portion."""
        return StagedFood(
            name=self.name,
            per100g=self.per100g(),
            weight=self.standard_portion_grams,
            portion_name=self.standard_portion_name,
        )
