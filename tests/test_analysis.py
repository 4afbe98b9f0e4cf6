import unittest

from gestao_scouter.analysis import UNKNOWN, generate_analysis, is_confirmed, parse_age, parse_number
from gestao_scouter.models import GeoPoint


def lead(pid, **fields) -> GeoPoint:
    return GeoPoint(id=pid, lat=-23.5, lng=-46.6, fields=fields)


class GenerateAnalysisTests(unittest.TestCase):
    def test_empty_input(self) -> None:
        summary = generate_analysis([])
        self.assertEqual(0, summary.total)
        self.assertEqual({}, summary.by_project)
        self.assertEqual(0, summary.confirmed)
        self.assertIsNone(summary.age_average)
        self.assertIsNone(summary.value_average)
        self.assertEqual(0.0, summary.value_total)

    def test_groups_by_exact_key(self) -> None:
        points = [
            lead(1, project="SELETIVA SÃO CARLOS", scouter="Rafaela", stage="Agendado", confirmed=True),
            lead(2, project="SELETIVA SÃO CARLOS", scouter="Carlos Antônio", stage="Agendado", confirmed="sim"),
            lead(3, project="seletiva são carlos", scouter="Rafaela", confirmed=False),
            lead(4),
        ]
        summary = generate_analysis(points)
        self.assertEqual(4, summary.total)
        self.assertEqual(
            {"SELETIVA SÃO CARLOS": 2, "seletiva são carlos": 1, UNKNOWN: 1},
            summary.by_project,
        )
        self.assertEqual({"Rafaela": 2, "Carlos Antônio": 1, UNKNOWN: 1}, summary.by_scouter)
        self.assertEqual({"Agendado": 2, UNKNOWN: 2}, summary.by_stage)
        self.assertEqual(2, summary.confirmed)
        self.assertEqual(2, summary.unconfirmed)

    def test_age_and_value_skip_bad_values(self) -> None:
        points = [
            lead(1, age=20, value="R$ 1.234,56"),
            lead(2, age="30", value=10),
            lead(3, age="abc", value="n/a"),
            lead(4, age=0, value=-5),
            lead(5, age=150, value=None),
            lead(6, age="25.9", value="12,5"),
        ]
        summary = generate_analysis(points)
        self.assertEqual(3, summary.age_count)
        self.assertAlmostEqual(25.0, summary.age_average)
        self.assertEqual(3, summary.value_count)
        self.assertAlmostEqual(1257.06, summary.value_total)
        self.assertAlmostEqual(419.02, summary.value_average)

    def test_thousands_separator_in_values(self) -> None:
        summary = generate_analysis([lead(1, value="R$ 2.500"), lead(2, value="R$ 1.500,50")])
        self.assertAlmostEqual(4000.5, summary.value_total)

    def test_age_range_is_configurable(self) -> None:
        summary = generate_analysis([lead(1, age=16), lead(2, age=30)], age_min=18, age_max=60)
        self.assertEqual(1, summary.age_count)


class ParsingTests(unittest.TestCase):
    def test_parse_number(self) -> None:
        self.assertEqual(10.5, parse_number("10.5"))
        self.assertEqual(10.5, parse_number("10,5"))
        self.assertEqual(1234.56, parse_number("1.234,56"))
        self.assertEqual(2500.0, parse_number("R$ 2.500"))
        self.assertEqual(1234.0, parse_number("R$ 1.234"))
        self.assertEqual(1234567.0, parse_number("1.234.567"))
        self.assertEqual(0.5, parse_number("0.5"))
        self.assertIsNone(parse_number(""))
        self.assertIsNone(parse_number(True))
        self.assertIsNone(parse_number(float("inf")))
        self.assertIsNone(parse_number([1]))

    def test_parse_age(self) -> None:
        self.assertEqual(1, parse_age(1))
        self.assertEqual(119, parse_age("119"))
        self.assertIsNone(parse_age(120))
        self.assertIsNone(parse_age(None))

    def test_is_confirmed(self) -> None:
        self.assertTrue(is_confirmed(True))
        self.assertTrue(is_confirmed(1))
        self.assertTrue(is_confirmed(" Sim "))
        self.assertFalse(is_confirmed("não"))
        self.assertFalse(is_confirmed(None))


if __name__ == "__main__":
    unittest.main()
