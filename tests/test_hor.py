import unittest

from asat_hor import HOR, Chimera, GrammarError, Monomer, Range, Single


LONG_HOR = (
    "S2C4H1L.5-14_8-9_3-14_8-9_3-14_8-14_8-9_3-14_8-9_3-14_8-9_3-14_8-9_3-14_8-10_4-14_8-9_3-14_8-14"
    "_8-9_3-14_8-9_3-14_8-9_3-14_8-9_3-14_8-9_3-19"
)


class HORParseTests(unittest.TestCase):
    def test_round_trip(self):
        for s in [
            "S01/1C3H1L.11",
            "S01/1C3H1L.11-6",
            "S2C16H2-A.4_7-8",
            LONG_HOR,
            "S4CYH1L.46-35_32/34_31/32_31-26_15-1",
            "S1C10H1L.1-5_6/2/4",
        ]:
            with self.subTest(s=s):
                self.assertEqual(str(HOR.parse(s)), s)

    def test_structure(self):
        hor = HOR.parse("S4CYH1L.46-35_32/34_31/32_31-26_15-1")
        self.assertEqual(
            hor.structure,
            [Range(46, 35), Chimera((32, 34)), Chimera((31, 32)), Range(31, 26), Range(15, 1)],
        )
        self.assertEqual(len(hor), 12 + 1 + 1 + 6 + 15)

    def test_single_monomer(self):
        hor = HOR.parse("S01/1C3H1L.11")
        self.assertEqual(hor.structure, [Single(11)])
        self.assertEqual(len(hor), 1)
        self.assertEqual(hor[0], Monomer.parse("S01/1C3H1L.11"))

    def test_descending_iteration(self):
        hor = HOR.parse("S01/1C3H1L.11-6")
        self.assertEqual([mon.numbers for mon in hor], [[11], [10], [9], [8], [7], [6]])
        for mon in hor:
            self.assertEqual(str(mon).split(".")[0], "S01/1C3H1L")

    def test_chimera_expands_to_one_monomer(self):
        hor = HOR.parse("S1C10H1L.1-5_6/2/4")
        self.assertEqual(len(hor), 6)
        self.assertEqual(hor[-1].numbers, [6, 2, 4])
        self.assertEqual(hor.monomer_labels(), ["1", "2", "3", "4", "5", "6/2/4"])

    def test_descriptor_header(self):
        hor = HOR.parse("S2C16H2-A.4_7-8")
        self.assertEqual(hor.structure, [Single(4), Range(7, 8)])
        self.assertTrue(all(mon.subtype_desc == "A" for mon in hor))

    def test_units_alias(self):
        hor = HOR.parse("S2C16H2-A.4_7-8")
        self.assertIs(hor.units, hor.structure)

    def test_invalid(self):
        for s in [
            "S1C10H1L._6/2/4",
            "S1C10H1L",
            "S1C10H1L.",
            "S1C10H1L.1-",
            "S1C10H1L.1/",
            "S1C10H1L.1-5_x",
            "S1C10H1L.1x",
            "S1C10H1L.1-5-6",
            "S1C10H1L.300",
            "S1C10.1-5",
        ]:
            with self.subTest(s=s):
                with self.assertRaises(GrammarError):
                    HOR.parse(s)

    def test_error_position_is_absolute(self):
        with self.assertRaises(GrammarError) as ctx:
            HOR.parse("S1C10H1L._6/2/4")
        self.assertEqual(ctx.exception.token, "_")
        self.assertEqual(ctx.exception.position, 9)


class HORReverseTests(unittest.TestCase):
    def test_reversed_strings(self):
        cases = {
            "S01/1C3H1L.11": "S01/1C3H1L.11",
            "S01/1C3H1L.11-6": "S01/1C3H1L.6-11",
            "S2C16H2-A.4_7-8": "S2C16H2-A.8-7_4",
            "S4CYH1L.46-35_32/34_31/32_31-26_15-1": "S4CYH1L.1-15_26-31_32/31_34/32_35-46",
            "S1C10H1L.1-5_6/2/4": "S1C10H1L.4/2/6_5-1",
        }
        for s, expected in cases.items():
            with self.subTest(s=s):
                self.assertEqual(str(HOR.parse(s).reversed()), expected)

    def test_reversed_instances(self):
        hor = HOR.parse("S1C10H1L.1-3_6/2/4").reversed()
        self.assertEqual([mon.numbers for mon in hor], [[4, 2, 6], [3], [2], [1]])

    def test_reverse_is_involution(self):
        for s in ["S01/1C3H1L.11-6", "S4CYH1L.46-35_32/34_31/32_31-26_15-1", LONG_HOR]:
            with self.subTest(s=s):
                hor = HOR.parse(s)
                self.assertEqual(hor.reversed().reversed(), hor)

    def test_reversed_matches_reparse(self):
        rev = HOR.parse("S4CYH1L.46-35_32/34_31/32_31-26_15-1").reversed()
        self.assertEqual(HOR.parse(str(rev)), rev)


if __name__ == "__main__":
    unittest.main()
