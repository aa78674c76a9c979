# timetable_ga/model.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

DayIdx = int
PeriodIdx = int

DAYS: Tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


@dataclass(frozen=True)
class Teacher:
    id: str
    name: str
    department: str = ""
    subjects: Tuple[str, ...] = ()   # informativo, el motor no lo usa


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    teacher_id: str
    periods_per_week: int
    is_lab: bool = False
    heavy: bool = False              # solo para la regla de materias pesadas adyacentes


@dataclass(frozen=True)
class Classroom:
    id: str
    name: str
    capacity: int = 0
    is_lab: bool = False


@dataclass(frozen=True)
class TimingConfig:
    start_time: str = "09:00"
    end_time: str = "17:00"
    short_break: int = 10            # minutos
    long_break: int = 45             # minutos
    periods_before_long_break: int = 4


@dataclass(frozen=True)
class RuleSet:
    no_teacher_continuous_periods: bool = True
    max_classes_per_teacher_per_day: int = 6
    labs_once_per_week: bool = True
    daily_max_periods_per_class: int = 8
    avoid_heavy_subjects_adjacent: bool = True
    balanced_workload: bool = True
    # dia -> periodos (0-based) vetados para materias regulares
    restricted_periods: Dict[str, Set[int]] = field(default_factory=dict)

    def is_restricted(self, day_name: str, period: PeriodIdx) -> bool:
        return period in self.restricted_periods.get(day_name, ())


@dataclass(frozen=True)
class Assignment:
    # Un "gen" = una materia dictada en un periodo concreto
    subject_id: str
    teacher_id: str
    room_id: str
    day: DayIdx
    period: PeriodIdx


@dataclass(frozen=True)
class Candidate:
    schedule: Tuple[Assignment, ...]
    fitness: Optional[float] = None

    @property
    def scored(self) -> bool:
        return self.fitness is not None


@dataclass
class OutputSlot:
    subject: str = ""
    subject_id: str = ""
    teacher: str = ""
    teacher_id: str = ""
    room: str = ""
    room_id: str = ""
    is_break: bool = False           # siempre False; solo is_long_break tiene significado
    is_long_break: bool = False
    is_lab: bool = False
    color: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.subject_id


@dataclass
class OutputTimetable:
    days: List[str]
    periods: List[str]
    grid: Dict[str, List[OutputSlot]]
    conflicts: List[str]
    warnings: List[str] = field(default_factory=list)
    violations: List[str] = field(default_factory=list)   # reglas extendidas incumplidas (no son conflictos)
    fitness: Optional[float] = None
    generations: int = 0
    history: List[Dict] = field(default_factory=list)   # mejor/promedio por generación


def day_names(working_days: int) -> List[str]:
    if not 1 <= working_days <= len(DAYS):
        raise ValueError(f"working_days debe estar entre 1 y {len(DAYS)}: {working_days}")
    return list(DAYS[:working_days])
