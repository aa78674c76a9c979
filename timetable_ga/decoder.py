"""
Decodifica el mejor candidato en la grilla día x periodo que consume la capa
de presentación.
"""
from typing import Dict, List, Sequence

import pandas as pd

from .model import Candidate, Classroom, OutputSlot, OutputTimetable, Subject, Teacher, TimingConfig
from .periods import long_break_after

N_COLORS = 8


def subject_colors(subjects: Sequence[Subject]) -> Dict[str, int]:
    """Color 1..8 por materia en orden de aparición en la lista, cíclico."""
    colors: Dict[str, int] = {}
    for subj in subjects:
        if subj.id not in colors:
            colors[subj.id] = len(colors) % N_COLORS + 1
    return colors


def empty_grid(days: Sequence[str], n_periods: int, timing: TimingConfig) -> Dict[str, List[OutputSlot]]:
    return {
        day: [
            OutputSlot(is_long_break=long_break_after(i, n_periods, timing.periods_before_long_break))
            for i in range(n_periods)
        ]
        for day in days
    }


def decode_timetable(
    best: Candidate,
    days: Sequence[str],
    periods: Sequence[str],
    timing: TimingConfig,
    subjects: Sequence[Subject],
    teachers: Sequence[Teacher],
    rooms: Sequence[Classroom],
    conflicts: Sequence[str] = (),
) -> OutputTimetable:
    n_periods = len(periods)
    grid = empty_grid(days, n_periods, timing)
    colors = subject_colors(subjects)

    subject_by_id = {s.id: s for s in subjects}
    teacher_by_id = {t.id: t for t in teachers}
    room_by_id = {r.id: r for r in rooms}

    for a in best.schedule:
        if not (0 <= a.day < len(days) and 0 <= a.period < n_periods):
            continue
        subj = subject_by_id.get(a.subject_id)
        teacher = teacher_by_id.get(a.teacher_id)
        room = room_by_id.get(a.room_id)
        if subj is None or teacher is None or room is None:
            continue
        day = days[a.day]
        grid[day][a.period] = OutputSlot(
            subject=subj.name,
            subject_id=subj.id,
            teacher=teacher.name,
            teacher_id=teacher.id,
            room=room.name,
            room_id=room.id,
            is_break=False,  # no se usa; los recesos van en is_long_break
            is_long_break=grid[day][a.period].is_long_break,
            is_lab=subj.is_lab,
            color=colors.get(subj.id, 1),
        )

    return OutputTimetable(
        days=list(days),
        periods=list(periods),
        grid=grid,
        conflicts=list(conflicts),
        fitness=best.fitness,
    )


def timetable_to_frame(tt: OutputTimetable) -> pd.DataFrame:
    data = []
    for day in tt.days:
        for i, slot in enumerate(tt.grid.get(day, [])):
            if slot.is_empty:
                continue
            data.append(
                {
                    "Dia": day,
                    "Periodo": i + 1,
                    "Horario": tt.periods[i] if i < len(tt.periods) else "",
                    "Materia": slot.subject,
                    "Docente": slot.teacher,
                    "Aula": slot.room,
                    "Laboratorio": slot.is_lab,
                    "Receso_Largo": slot.is_long_break,
                    "Color": slot.color,
                }
            )
    columns = ["Dia", "Periodo", "Horario", "Materia", "Docente", "Aula", "Laboratorio", "Receso_Largo", "Color"]
    return pd.DataFrame(data, columns=columns)
