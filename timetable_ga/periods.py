"""
Construcción de la grilla de periodos a partir del horario de la institución.

Cada periodo dura 50 minutos; tras cada periodo se descansa el receso corto,
salvo cada N periodos, donde se usa el receso largo.
"""
from typing import List

from .model import TimingConfig

PERIOD_MINUTES = 50


def parse_clock(value: str) -> int:
    """'HH:MM' -> minutos desde medianoche."""
    try:
        hours, minutes = str(value).strip().split(":")
        return int(hours) * 60 + int(minutes)
    except ValueError:
        raise ValueError(f"Hora inválida (se espera HH:MM): {value!r}") from None


def format_clock(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def build_periods(timing: TimingConfig) -> List[str]:
    start = parse_clock(timing.start_time)
    end = parse_clock(timing.end_time)

    periods: List[str] = []
    current = start
    while current + PERIOD_MINUTES <= end:
        periods.append(f"{format_clock(current)} - {format_clock(current + PERIOD_MINUTES)}")
        current += PERIOD_MINUTES
        # recesos negativos se ignoran para que el reloj siempre avance
        if long_break_due(len(periods), timing.periods_before_long_break):
            current += max(0, timing.long_break)
        else:
            current += max(0, timing.short_break)
    return periods


def long_break_due(periods_done: int, periods_before_long_break: int) -> bool:
    # N <= 0: sin receso largo
    if periods_before_long_break <= 0:
        return False
    return periods_done % periods_before_long_break == 0


def long_break_after(index: int, n_periods: int, periods_before_long_break: int) -> bool:
    """True si el periodo `index` cierra un bloque y no es el último del día."""
    return long_break_due(index + 1, periods_before_long_break) and index < n_periods - 1
