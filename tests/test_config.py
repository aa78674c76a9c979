import tempfile
import textwrap
import unittest
from pathlib import Path

from timetable_ga.config import AppConfig, SearchConfig, load_config
from timetable_ga.data_loader import load_data


class ConfigTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, name, text):
        path = self.dir / name
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path

    def test_missing_file_gives_defaults(self):
        cfg = load_config(str(self.dir / "nope.yaml"))
        self.assertEqual(cfg, AppConfig())
        self.assertEqual(cfg.search.population_size, 50)
        self.assertEqual(cfg.search.generations, 100)
        self.assertEqual(cfg.search.tournament_size, 5)
        self.assertIsNone(cfg.search.seed)

    def test_yaml_sections(self):
        path = self.write(
            "config.yaml",
            """
            working_days: 6
            timing:
              start_time: "08:00"
              end_time: 13:00
              periods_before_long_break: 3
            rules:
              balanced_workload: false
              restricted_periods:
                Friday: [5, 6]
            search:
              generations: 10
              seed: 42
              unknown_key: 1
            """,
        )
        cfg = load_config(str(path))
        self.assertEqual(cfg.working_days, 6)
        self.assertEqual(cfg.timing.start_time, "08:00")
        self.assertEqual(cfg.timing.end_time, "13:00")
        self.assertEqual(cfg.timing.periods_before_long_break, 3)
        self.assertFalse(cfg.rules.balanced_workload)
        self.assertTrue(cfg.rules.no_teacher_continuous_periods)
        self.assertEqual(cfg.rules.restricted_periods, {"Friday": {5, 6}})
        self.assertTrue(cfg.rules.is_restricted("Friday", 6))
        self.assertEqual(cfg.search.generations, 10)
        self.assertEqual(cfg.search.seed, 42)
        self.assertEqual(cfg.search.population_size, 50)

    def test_non_mapping_rejected(self):
        path = self.write("bad.yaml", "- 1\n- 2\n")
        with self.assertRaises(ValueError):
            load_config(str(path))

    def test_search_from_dict(self):
        cfg = SearchConfig.from_dict({"mutation_rate": 0.3, "foo": "bar"})
        self.assertEqual(cfg.mutation_rate, 0.3)
        self.assertEqual(cfg.elite_size, 1)

    def test_invalid_search_values_rejected(self):
        with self.assertRaises(ValueError):
            SearchConfig(tournament_size=0)
        with self.assertRaises(ValueError):
            SearchConfig.from_dict({"population_size": 0})
        with self.assertRaises(ValueError):
            SearchConfig(mutation_rate=1.5)
        with self.assertRaises(ValueError):
            SearchConfig(generations=-1)
        path = self.write("bad_search.yaml", "search:\n  tournament_size: 0\n")
        with self.assertRaises(ValueError):
            load_config(str(path))


class DataLoaderTests(unittest.TestCase):
    def test_load_csvs(self):
        with tempfile.TemporaryDirectory() as tmp:
            d = Path(tmp)
            (d / "teachers.csv").write_text(
                "id,name,department,subjects\n01,Ana,Matemática,S1;S2\n02,Luis,Física,\n", encoding="utf-8"
            )
            (d / "subjects.csv").write_text(
                "id,name,teacher_id,periods_per_week,is_lab\n"
                "S1,Cálculo,01,4,no\n"
                "S2,Lab Física,02,5,yes\n",
                encoding="utf-8",
            )
            (d / "rooms.csv").write_text(
                "id,name,capacity,is_lab\nR1,Aula 101,40,False\nL1,Lab 1,20,True\n", encoding="utf-8"
            )
            bundle = load_data(tmp)

        self.assertEqual([t.id for t in bundle.teachers], ["01", "02"])
        self.assertEqual(bundle.teachers[0].subjects, ("S1", "S2"))
        self.assertEqual(bundle.teachers[1].subjects, ())
        calc, lab = bundle.subjects
        self.assertEqual((calc.teacher_id, calc.periods_per_week, calc.is_lab), ("01", 4, False))
        self.assertEqual((lab.periods_per_week, lab.is_lab, lab.heavy), (2, True, False))
        self.assertEqual([(r.id, r.capacity, r.is_lab) for r in bundle.rooms], [("R1", 40, False), ("L1", 20, True)])


if __name__ == "__main__":
    unittest.main()
