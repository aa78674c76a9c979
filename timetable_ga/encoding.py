"""
Representación plana del cromosoma.

Un candidato es una secuencia de asignaciones (materia, docente, aula, día,
periodo). Para evaluarlo lo codificamos como una matriz entera de n x 4:
Docente | Aula | Día | Periodo
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Sequence

import numpy as np

from .model import Assignment, Classroom, Teacher

TEACHER_COL, ROOM_COL, DAY_COL, PERIOD_COL = range(4)


@dataclass
class EntityIndex:
    teacher_idx: Dict[str, int] = field(default_factory=dict)
    room_idx: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def build(cls, teachers: Iterable[Teacher], rooms: Iterable[Classroom]) -> "EntityIndex":
        index = cls()
        for t in teachers:
            index.teacher_idx.setdefault(t.id, len(index.teacher_idx))
        for r in rooms:
            index.room_idx.setdefault(r.id, len(index.room_idx))
        return index


def _lookup(known: Dict[str, int], extra: Dict[str, int], key: str) -> int:
    # ids desconocidos van a un índice local; el índice compartido no se toca
    idx = known.get(key)
    if idx is None:
        idx = extra.setdefault(key, len(known) + len(extra))
    return idx


def encode_schedule(schedule: Sequence[Assignment], index: EntityIndex) -> np.ndarray:
    extra_teachers: Dict[str, int] = {}
    extra_rooms: Dict[str, int] = {}
    rows = [
        (
            _lookup(index.teacher_idx, extra_teachers, a.teacher_id),
            _lookup(index.room_idx, extra_rooms, a.room_id),
            a.day,
            a.period,
        )
        for a in schedule
    ]
    if not rows:
        return np.zeros((0, 4), dtype=int)
    return np.array(rows, dtype=int)
