# timetable_ga/data_loader.py
from dataclasses import dataclass
from typing import Any, List

import pandas as pd

from .model import Classroom, Subject, Teacher

TRUE_VALUES = {"true", "yes", "si", "sí", "1", "y", "t"}


@dataclass(frozen=True)
class DataBundle:
    teachers: List[Teacher]
    subjects: List[Subject]
    rooms: List[Classroom]


def _as_bool(value: Any) -> bool:
    if pd.isna(value):
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def _as_int(value: Any, default: int = 0) -> int:
    return default if pd.isna(value) else int(float(value))


def _text(value: Any) -> str:
    return "" if pd.isna(value) else str(value).strip()


def teachers_from_frame(df: pd.DataFrame) -> List[Teacher]:
    out = []
    for r in df.itertuples(index=False):
        row = r._asdict()
        subjects = tuple(s.strip() for s in _text(row.get("subjects")).split(";") if s.strip())
        out.append(
            Teacher(
                id=_text(row["id"]),
                name=_text(row["name"]),
                department=_text(row.get("department")),
                subjects=subjects,
            )
        )
    return out


def subjects_from_frame(df: pd.DataFrame) -> List[Subject]:
    out = []
    for r in df.itertuples(index=False):
        row = r._asdict()
        is_lab = _as_bool(row.get("is_lab"))
        out.append(
            Subject(
                id=_text(row["id"]),
                name=_text(row["name"]),
                teacher_id=_text(row["teacher_id"]),
                # los laboratorios siempre ocupan 2 periodos
                periods_per_week=2 if is_lab else _as_int(row.get("periods_per_week"), 1),
                is_lab=is_lab,
                heavy=_as_bool(row.get("heavy")),
            )
        )
    return out


def rooms_from_frame(df: pd.DataFrame) -> List[Classroom]:
    out = []
    for r in df.itertuples(index=False):
        row = r._asdict()
        out.append(
            Classroom(
                id=_text(row["id"]),
                name=_text(row["name"]),
                capacity=_as_int(row.get("capacity"), 0),
                is_lab=_as_bool(row.get("is_lab")),
            )
        )
    return out


def load_data(data_dir: str) -> DataBundle:
    # ids como texto: "01" y "1" son docentes distintos
    teachers = pd.read_csv(f"{data_dir}/teachers.csv", dtype={"id": str})
    subjects = pd.read_csv(f"{data_dir}/subjects.csv", dtype={"id": str, "teacher_id": str})
    rooms = pd.read_csv(f"{data_dir}/rooms.csv", dtype={"id": str})

    return DataBundle(
        teachers=teachers_from_frame(teachers),
        subjects=subjects_from_frame(subjects),
        rooms=rooms_from_frame(rooms),
    )
