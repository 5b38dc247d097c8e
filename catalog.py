"""Static exercise catalog for the CKD daily checklist."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class Phase(str, Enum):
    """Session phase an exercise belongs to."""

    WARM_UP = "Warm-Up"
    MAIN = "Main Phase"
    COOL_DOWN = "Cool-Down"


@dataclass(frozen=True)
class ExerciseDefinition:
    id: str
    label: str
    phase: Phase
    duration: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "phase": self.phase.value,
            "duration": self.duration,
        }


class ExerciseCatalog:
    """Immutable, ordered collection of exercise definitions."""

    def __init__(self, exercises: Iterable[ExerciseDefinition]) -> None:
        self._exercises = tuple(exercises)
        if not self._exercises:
            raise ValueError("exercise catalog must not be empty")
        seen: set[str] = set()
        for ex in self._exercises:
            if ex.id in seen:
                raise ValueError(f"duplicate exercise id: {ex.id}")
            seen.add(ex.id)
        self._by_id = {ex.id: ex for ex in self._exercises}

    def __len__(self) -> int:
        return len(self._exercises)

    def __iter__(self):
        return iter(self._exercises)

    def __contains__(self, exercise_id: object) -> bool:
        return exercise_id in self._by_id

    def ids(self) -> frozenset[str]:
        return frozenset(self._by_id)

    def get(self, exercise_id: str) -> ExerciseDefinition | None:
        return self._by_id.get(exercise_id)

    def by_phase(self, phase: Phase) -> list[ExerciseDefinition]:
        """Return exercises of ``phase`` in display order."""
        return [ex for ex in self._exercises if ex.phase == phase]


EXERCISES = ExerciseCatalog(
    [
        ExerciseDefinition("warmup_rotation", "Shoulder Rotations", Phase.WARM_UP, "2-3 mins"),
        ExerciseDefinition("warmup_walk", "Gentle Walk in Place", Phase.WARM_UP, "2-3 mins"),
        ExerciseDefinition("main_walk", "Brisk Walk (Talk Test)", Phase.MAIN, "10-30 mins"),
        ExerciseDefinition(
            "main_strength",
            "Seated Leg Lifts / Wall Push-ups",
            Phase.MAIN,
            "1 set (10-15 reps)",
        ),
        ExerciseDefinition("cool_stretch", "Leg Stretches", Phase.COOL_DOWN, "3-5 mins"),
        ExerciseDefinition("cool_breathe", "Deep Breathing", Phase.COOL_DOWN, "2 mins"),
    ]
)

SAFETY_TIPS = (
    ("The Talk Test", "If you can't speak comfortably while moving, slow down."),
    ("Stop if", "You feel dizzy, chest pain, or nausea."),
    ("Hydration", "Stick to your fluid limits."),
)

DISCLAIMER = (
    "This tool is for tracking purposes only. Always follow the specific advice "
    "of your nephrologist regarding fluid intake and exercise intensity."
)
