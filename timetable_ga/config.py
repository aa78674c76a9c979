"""
Configuración del algoritmo genético.

Incluye un cargador desde YAML para dejar los parámetros de búsqueda, el
horario de la institución y las reglas en un solo archivo reproducible.
"""
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .model import RuleSet, TimingConfig


@dataclass
class SearchConfig:
    # Algoritmo genético
    population_size: int = 50
    generations: int = 100
    mutation_rate: float = 0.1
    elite_size: int = 1
    tournament_size: int = 5
    target_fitness: float = 1000.0
    seed: Optional[int] = None       # None: corridas no reproducibles
    workers: int = 1                 # >1: evaluación en paralelo con hilos

    # Dominio
    strict_lab_rooms: bool = False   # sin aula del tipo correcto: omitir en vez de usar la primera
    extended_rules: bool = False     # penalizar también las reglas de límites diarios, labs y pesadas

    def __post_init__(self):
        for name in ("population_size", "tournament_size"):
            if int(getattr(self, name)) < 1:
                raise ValueError(f"{name} debe ser >= 1: {getattr(self, name)}")
        if not 0.0 <= float(self.mutation_rate) <= 1.0:
            raise ValueError(f"mutation_rate debe estar en [0, 1]: {self.mutation_rate}")
        if int(self.generations) < 0 or int(self.elite_size) < 0:
            raise ValueError("generations y elite_size no pueden ser negativos")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchConfig":
        merged = asdict(cls())
        for k, v in data.items():
            if k in merged:
                merged[k] = v
        return cls(**merged)


@dataclass
class AppConfig:
    search: SearchConfig = field(default_factory=SearchConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    rules: RuleSet = field(default_factory=RuleSet)
    working_days: int = 5


def _known(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in names}


def rules_from_dict(data: Dict[str, Any]) -> RuleSet:
    kwargs = _known(RuleSet, data)
    if "restricted_periods" in kwargs:
        kwargs["restricted_periods"] = {
            str(day): {int(p) for p in (periods or [])}
            for day, periods in (kwargs["restricted_periods"] or {}).items()
        }
    return RuleSet(**kwargs)


def timing_from_dict(data: Dict[str, Any]) -> TimingConfig:
    kwargs = _known(TimingConfig, data)
    # YAML convierte 09:00 sin comillas en minutos (sexagesimal)
    for key in ("start_time", "end_time"):
        if isinstance(kwargs.get(key), int):
            kwargs[key] = f"{kwargs[key] // 60:02d}:{kwargs[key] % 60:02d}"
    return TimingConfig(**kwargs)


def config_from_dict(data: Dict[str, Any]) -> AppConfig:
    return AppConfig(
        search=SearchConfig.from_dict(data.get("search") or {}),
        timing=timing_from_dict(data.get("timing") or {}),
        rules=rules_from_dict(data.get("rules") or {}),
        working_days=int(data.get("working_days", 5)),
    )


def load_config(path: str = "config.yaml") -> AppConfig:
    cfg_path = Path(path)
    if not cfg_path.exists():
        return AppConfig()
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} debe contener un objeto mapeo")
    return config_from_dict(data)
