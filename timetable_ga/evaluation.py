# timetable_ga/evaluation.py
from collections import defaultdict
from dataclasses import dataclass, field, replace
from typing import DefaultDict, Dict, List, Sequence, Set

import numpy as np

from .encoding import DAY_COL, PERIOD_COL, ROOM_COL, TEACHER_COL, EntityIndex, encode_schedule
from .model import DAYS, Assignment, Candidate, Classroom, RuleSet, Subject, Teacher

BASE_FITNESS = 1000.0
CLASH_PENALTY = 100
CONTINUOUS_PENALTY = 20
WORKLOAD_WEIGHT = 5
RULE_PENALTY = 10


@dataclass(frozen=True)
class EvaluationContext:
    teachers: Dict[str, Teacher]
    rooms: Dict[str, Classroom]
    subjects: Dict[str, Subject]
    index: EntityIndex

    @classmethod
    def build(
        cls,
        teachers: Sequence[Teacher],
        subjects: Sequence[Subject],
        rooms: Sequence[Classroom],
    ) -> "EvaluationContext":
        return cls(
            teachers={t.id: t for t in teachers},
            rooms={r.id: r for r in rooms},
            subjects={s.id: s for s in subjects},
            index=EntityIndex.build(teachers, rooms),
        )

    def teacher_name(self, teacher_id: str) -> str:
        t = self.teachers.get(teacher_id)
        return t.name if t else teacher_id

    def room_name(self, room_id: str) -> str:
        r = self.rooms.get(room_id)
        return r.name if r else room_id


@dataclass
class EvaluationResult:
    fitness: float
    conflicts: List[str]
    teacher_clashes: int = 0
    room_clashes: int = 0
    continuous_penalty: float = 0.0
    workload_penalty: float = 0.0
    rule_penalty: float = 0.0
    violations: List[str] = field(default_factory=list)


def day_label(day: int) -> str:
    return DAYS[day] if 0 <= day < len(DAYS) else f"Day {day + 1}"


def continuous_excess(periods: np.ndarray) -> int:
    """Periodos que exceden el segundo de cada racha consecutiva (lista ordenada)."""
    run = 1
    excess = 0
    for step in np.diff(periods):
        if step == 1:
            run += 1
            if run > 2:
                excess += 1
        else:
            run = 1
    return excess


def evaluate(
    schedule: Sequence[Assignment],
    ctx: EvaluationContext,
    rules: RuleSet,
    extended_rules: bool = False,
) -> EvaluationResult:
    enc = encode_schedule(schedule, ctx.index)
    result = EvaluationResult(fitness=BASE_FITNESS, conflicts=[])
    if len(enc) == 0:
        return result

    n_teachers = max(len(ctx.index.teacher_idx), int(enc[:, TEACHER_COL].max()) + 1)
    n_rooms = max(len(ctx.index.room_idx), int(enc[:, ROOM_COL].max()) + 1)
    n_days = int(enc[:, DAY_COL].max()) + 1
    n_periods = int(enc[:, PERIOD_COL].max()) + 1

    # Matrices [entidad][día][periodo]
    ch_teach = np.zeros((n_teachers, n_days, n_periods), dtype=int)
    ch_room = np.zeros((n_rooms, n_days, n_periods), dtype=int)

    for a, (t, r, d, p) in zip(schedule, enc):
        ch_teach[t, d, p] += 1
        if ch_teach[t, d, p] > 1:
            result.teacher_clashes += 1
            result.conflicts.append(
                f"Teacher {ctx.teacher_name(a.teacher_id)} has conflicting classes "
                f"at {day_label(d)} period {p + 1}"
            )
        ch_room[r, d, p] += 1
        if ch_room[r, d, p] > 1:
            result.room_clashes += 1
            result.conflicts.append(
                f"Room {ctx.room_name(a.room_id)} is double-booked at {day_label(d)} period {p + 1}"
            )

    busy_teachers = np.unique(enc[:, TEACHER_COL])

    if rules.no_teacher_continuous_periods:
        excess = 0
        for t in busy_teachers:
            for d in range(n_days):
                # lista ordenada de periodos, con repeticiones
                periods = np.repeat(np.arange(n_periods), ch_teach[t, d])
                excess += continuous_excess(periods)
        result.continuous_penalty = float(CONTINUOUS_PENALTY * excess)

    if rules.balanced_workload:
        total = 0.0
        for t in busy_teachers:
            daily = ch_teach[t].sum(axis=1)
            total += float(np.var(daily[daily > 0]))
        result.workload_penalty = WORKLOAD_WEIGHT * total

    if extended_rules:
        result.rule_penalty = _extended_rule_penalty(schedule, enc, ch_teach, ctx, rules, result.violations)

    penalty = (
        CLASH_PENALTY * (result.teacher_clashes + result.room_clashes)
        + result.continuous_penalty
        + result.workload_penalty
        + result.rule_penalty
    )
    result.fitness = BASE_FITNESS - penalty
    return result


def _extended_rule_penalty(
    schedule: Sequence[Assignment],
    enc: np.ndarray,
    ch_teach: np.ndarray,
    ctx: EvaluationContext,
    rules: RuleSet,
    violations: List[str],
) -> float:
    units = 0
    teacher_ids = {idx: tid for tid, idx in ctx.index.teacher_idx.items()}

    if rules.max_classes_per_teacher_per_day > 0:
        per_day = ch_teach.sum(axis=2)
        for t, d in zip(*np.nonzero(per_day > rules.max_classes_per_teacher_per_day)):
            extra = int(per_day[t, d]) - rules.max_classes_per_teacher_per_day
            units += extra
            violations.append(
                f"Teacher {ctx.teacher_name(teacher_ids.get(t, str(t)))} has {per_day[t, d]} classes "
                f"on {day_label(d)} (max {rules.max_classes_per_teacher_per_day})"
            )

    if rules.daily_max_periods_per_class > 0:
        per_day = np.bincount(enc[:, DAY_COL])
        for d in np.nonzero(per_day > rules.daily_max_periods_per_class)[0]:
            units += int(per_day[d]) - rules.daily_max_periods_per_class
            violations.append(
                f"{day_label(d)} has {per_day[d]} periods (max {rules.daily_max_periods_per_class})"
            )

    if rules.labs_once_per_week:
        lab_days: DefaultDict[str, Set[int]] = defaultdict(set)
        for a in schedule:
            subj = ctx.subjects.get(a.subject_id)
            if subj is not None and subj.is_lab:
                lab_days[a.subject_id].add(a.day)
        for sid, days in lab_days.items():
            if len(days) > 1:
                units += len(days) - 1
                violations.append(f"Lab {ctx.subjects[sid].name} is spread over {len(days)} days")

    if rules.avoid_heavy_subjects_adjacent:
        heavy: DefaultDict[tuple, Set[str]] = defaultdict(set)
        for a in schedule:
            subj = ctx.subjects.get(a.subject_id)
            if subj is not None and subj.heavy:
                heavy[(a.day, a.period)].add(a.subject_id)
        for (d, p), here in sorted(heavy.items()):
            after = heavy.get((d, p + 1), set())
            if any(x != y for x in here for y in after):
                units += 1
                violations.append(f"Heavy subjects back to back at {day_label(d)} period {p + 1}")

    return float(RULE_PENALTY * units)


def score(
    cand: Candidate,
    ctx: EvaluationContext,
    rules: RuleSet,
    extended_rules: bool = False,
) -> Candidate:
    return replace(cand, fitness=evaluate(cand.schedule, ctx, rules, extended_rules).fitness)
