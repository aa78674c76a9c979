from .generator import generate_timetable
from .model import Classroom, OutputSlot, OutputTimetable, RuleSet, Subject, Teacher, TimingConfig

__all__ = [
    "generate_timetable",
    "Classroom",
    "OutputSlot",
    "OutputTimetable",
    "RuleSet",
    "Subject",
    "Teacher",
    "TimingConfig",
]
