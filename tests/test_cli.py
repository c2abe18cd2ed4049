import contextlib
import io
import os
import tempfile
import unittest

from asat_hor import main


class CLITests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.bed = os.path.join(self.tmpdir.name, "monomers.bed")
        lines = []
        pos = 0
        for _ in range(2):
            for num in range(1, 6):
                lines.append(
                    f"chr2\t{pos}\t{pos + 170}\tS1C2H1L.{num}\t95.0\t+\t{pos}\t{pos + 170}\t0,0,0\n"
                )
                pos += 170
        with open(self.bed, "w") as f:
            f.writelines(lines)

    def tearDown(self):
        self.tmpdir.cleanup()

    def _run(self, argv):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            code = main(argv)
        return code, buf.getvalue()

    def test_stv(self):
        out = os.path.join(self.tmpdir.name, "stv.bed")
        code, stdout = self._run(["stv", self.bed, "-o", out])
        self.assertEqual(code, 0)
        self.assertIn("Converted 10 monomers into 2 HORs.", stdout)
        with open(out) as f:
            self.assertEqual(
                f.read().splitlines(),
                ["chr2\t0\t850\tS1C2H1L.1-5", "chr2\t850\t1700\tS1C2H1L.1-5"],
            )

    def test_repeats(self):
        out = os.path.join(self.tmpdir.name, "repeats.bed")
        code, _ = self._run(["repeats", self.bed, "-o", out])
        self.assertEqual(code, 0)
        with open(out) as f:
            rows = [line.split("\t") for line in f if not line.startswith("#")]
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0][0], "chr2")

    def test_graph(self):
        code, stdout = self._run(["graph", "S1C1H1L.1-4_1-4_1-4", "-k", "3", "--cycles"])
        self.assertEqual(code, 0)
        self.assertIn("Eulerian walk", stdout)
        self.assertIn("1_2_3_4\tcount=3", stdout)

    def test_invalid_hor(self):
        code, stdout = self._run(["graph", "S1C1H1L._1-4"])
        self.assertEqual(code, 1)
        self.assertIn("ERROR:", stdout)

    def test_repeats_bad_coordinates(self):
        with open(self.bed, "a") as f:
            f.write("chr2\t2000\t1900\tS1C2H1L.1\t95.0\t+\t2000\t1900\t0,0,0\n")
        out = os.path.join(self.tmpdir.name, "repeats.bed")
        code, stdout = self._run(["repeats", self.bed, "-o", out])
        self.assertEqual(code, 1)
        self.assertIn("ERROR:", stdout)

    def test_missing_input(self):
        out = os.path.join(self.tmpdir.name, "stv.bed")
        code, stdout = self._run(["stv", os.path.join(self.tmpdir.name, "missing.bed"), "-o", out])
        self.assertEqual(code, 1)
        self.assertIn("ERROR:", stdout)


if __name__ == "__main__":
    unittest.main()
