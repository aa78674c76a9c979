import argparse
import logging
from pathlib import Path

import pandas as pd

from timetable_ga.config import load_config
from timetable_ga.data_loader import load_data
from timetable_ga.decoder import timetable_to_frame
from timetable_ga.generator import generate_timetable
from timetable_ga.model import OutputTimetable


def grid_to_dataframe(tt: OutputTimetable) -> pd.DataFrame:
    """Tabla periodo x día con 'Materia / Docente / Aula' en cada celda."""
    table = {}
    for day in tt.days:
        column = []
        for slot in tt.grid.get(day, []):
            if slot.is_empty:
                column.append("-")
            else:
                column.append(f"{slot.subject} / {slot.teacher} / {slot.room}")
        table[day] = column
    if not table:
        return pd.DataFrame()
    return pd.DataFrame(table, index=tt.periods)


def export_outputs(tt: OutputTimetable, out_dir: Path):
    out_dir.mkdir(parents=True, exist_ok=True)
    timetable_to_frame(tt).to_csv(out_dir / "schedule.csv", index=False)
    conflicts = pd.DataFrame(
        [{"tipo": "conflicto", "detalle": c} for c in tt.conflicts]
        + [{"tipo": "aviso", "detalle": w} for w in tt.warnings]
        + [{"tipo": "violación", "detalle": v} for v in tt.violations],
        columns=["tipo", "detalle"],
    )
    conflicts.to_csv(out_dir / "conflicts.csv", index=False)
    if tt.history:
        pd.DataFrame(tt.history).to_csv(out_dir / "history.csv", index=False)


def main():
    parser = argparse.ArgumentParser(description="Generación de horarios con algoritmo genético")
    parser.add_argument("--config", default="config.yaml", help="Ruta al archivo de configuración")
    parser.add_argument("--data_dir", default="data", help="Directorio con los CSV de entrada")
    parser.add_argument("--out_dir", default="outputs", help="Directorio de salida")
    parser.add_argument("--seed", type=int, default=None, help="Semilla (sobrescribe la del config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log por generación")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config(args.config)
    if args.seed is not None:
        cfg.search.seed = args.seed

    print("Cargando datos...")
    bundle = load_data(args.data_dir)
    print(
        f"Docentes: {len(bundle.teachers)} | Materias: {len(bundle.subjects)} | Aulas: {len(bundle.rooms)}"
    )

    tt = generate_timetable(
        bundle.teachers,
        bundle.subjects,
        bundle.rooms,
        cfg.timing,
        cfg.working_days,
        cfg.rules,
        config=cfg.search,
    )

    print("\n--- MEJOR SOLUCIÓN ---")
    if tt.fitness is not None:
        print(f"Fitness: {tt.fitness:.2f} | Generaciones: {tt.generations}")
    with pd.option_context("display.max_columns", None, "display.width", 200):
        print(grid_to_dataframe(tt))
    for c in tt.conflicts:
        print(f"[conflicto] {c}")
    for v in tt.violations:
        print(f"[violación] {v}")
    for w in tt.warnings:
        print(f"[aviso] {w}")

    out_dir = Path(args.out_dir)
    export_outputs(tt, out_dir)
    print(f"Se guardaron resultados en {out_dir}/schedule.csv y {out_dir}/conflicts.csv")


if __name__ == "__main__":
    main()
