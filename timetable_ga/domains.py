# timetable_ga/domains.py
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .model import Classroom, Subject, Teacher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubjectDomain:
    subject: Subject
    teacher: Teacher
    room: Classroom


@dataclass
class DomainResolution:
    domains: List[SubjectDomain] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


def pick_room(
    subject: Subject,
    rooms: Sequence[Classroom],
    strict_lab_rooms: bool = False,
) -> Optional[Classroom]:
    """
    Primera aula cuyo tipo (laboratorio o no) coincide con la materia.
    Sin coincidencia: la primera aula de la lista, salvo en modo estricto.
    """
    for room in rooms:
        if room.is_lab == subject.is_lab:
            return room
    if strict_lab_rooms or not rooms:
        return None
    return rooms[0]


def resolve_domains(
    subjects: Sequence[Subject],
    teachers: Sequence[Teacher],
    rooms: Sequence[Classroom],
    strict_lab_rooms: bool = False,
) -> DomainResolution:
    teacher_by_id: Dict[str, Teacher] = {t.id: t for t in teachers}
    out = DomainResolution()

    for subj in subjects:
        teacher = teacher_by_id.get(subj.teacher_id)
        if teacher is None:
            out.warn(f"Materia {subj.name} ({subj.id}) omitida: docente {subj.teacher_id} no existe")
            continue

        room = pick_room(subj, rooms, strict_lab_rooms)
        if room is None:
            kind = "laboratorio" if subj.is_lab else "aula regular"
            out.warn(f"Materia {subj.name} ({subj.id}) omitida: no hay {kind} disponible")
            continue
        if room.is_lab != subj.is_lab:
            out.warn(
                f"Materia {subj.name} ({subj.id}) asignada a {room.name}, "
                f"que no coincide con su tipo de aula"
            )

        out.domains.append(SubjectDomain(subject=subj, teacher=teacher, room=room))

    return out
