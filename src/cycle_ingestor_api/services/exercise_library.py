"""Exercise library collaborator and name resolution.

The parser never touches storage directly. It asks an ``ExerciseLibrary`` for
a case-insensitive lookup and, on a miss, inserts a synthesized custom
exercise whose category and equipment are guessed from the name.
"""
import logging
import threading
import uuid
from typing import Callable, Dict, Iterable, List, Optional, Protocol

from ..models import Equipment, Exercise, ExerciseCategory

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def default_id_factory() -> str:
    return uuid.uuid4().hex


class ExerciseLibrary(Protocol):
    """Lookup-or-create capability the parser needs from exercise storage."""

    def find_by_name(self, name: str) -> Optional[Exercise]:
        ...

    def insert(self, exercise: Exercise) -> None:
        ...


class InMemoryExerciseLibrary:
    """Dict-backed library keyed by lower-cased name."""

    def __init__(self, exercises: Optional[Iterable[Exercise]] = None):
        self._lock = threading.RLock()
        self._by_name: Dict[str, Exercise] = {}
        for exercise in exercises or []:
            self.insert(exercise)

    def find_by_name(self, name: str) -> Optional[Exercise]:
        with self._lock:
            return self._by_name.get(name.strip().lower())

    def insert(self, exercise: Exercise) -> None:
        with self._lock:
            self._by_name.setdefault(exercise.name.strip().lower(), exercise)

    def all(self) -> List[Exercise]:
        with self._lock:
            return list(self._by_name.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_name)


# Priority-ordered keyword rules; first hit wins.
_CATEGORY_RULES = [
    (ExerciseCategory.CHEST, lambda n: any(k in n for k in ("bench", "chest", "fly"))),
    (ExerciseCategory.BACK, lambda n: any(k in n for k in ("pull", "row", "lat"))),
    (ExerciseCategory.LEGS, lambda n: any(k in n for k in ("squat", "leg", "lunge"))),
    (ExerciseCategory.SHOULDERS, lambda n: "press" in n and ("overhead" in n or "shoulder" in n)),
    (ExerciseCategory.ARMS, lambda n: any(k in n for k in ("curl", "tricep", "extension"))),
    (ExerciseCategory.BACK, lambda n: "dead" in n or "rdl" in n),
    (ExerciseCategory.LEGS, lambda n: "calf" in n),
]

_EQUIPMENT_RULES = [
    (Equipment.BARBELL, ("bench press", "squat", "deadlift", "overhead press", "barbell", "row")),
    (Equipment.BODYWEIGHT, ("pull-up", "chin-up", "dip", "push-up", "bodyweight")),
    (Equipment.DUMBBELL, ("dumbbell", "curl", "lunge")),
    (Equipment.MACHINE, ("cable", "machine", "leg press")),
]


def categorize_exercise(name: str) -> ExerciseCategory:
    lower = name.lower()
    for category, rule in _CATEGORY_RULES:
        if rule(lower):
            return category
    return ExerciseCategory.OTHER


def infer_equipment(name: str) -> Equipment:
    lower = name.lower()
    for equipment, keywords in _EQUIPMENT_RULES:
        if any(k in lower for k in keywords):
            return equipment
    return Equipment.DUMBBELL


class ExerciseResolver:
    """Maps parsed exercise names to library entries, creating them on a miss.

    ``resolve`` holds a lock around the lookup and insert, so parses sharing
    one resolver (and library) never insert the same new name twice.
    """

    def __init__(self, library: ExerciseLibrary, id_factory: Optional[IdFactory] = None):
        self.library = library
        self.id_factory = id_factory or default_id_factory
        self._lock = threading.Lock()

    def resolve(self, name: str) -> Exercise:
        name = name.strip()
        with self._lock:
            existing = self.library.find_by_name(name)
            if existing is not None:
                return existing

            exercise = Exercise(
                id=f"ex-{self.id_factory()}",
                name=name,
                category=categorize_exercise(name),
                equipment=infer_equipment(name),
                is_custom=True,
            )
            self.library.insert(exercise)

        logger.info(
            f"Created custom exercise '{name}' "
            f"(category={exercise.category}, equipment={exercise.equipment})"
        )
        return exercise
