import json
import tempfile
import unittest
from pathlib import Path

from udphrase.main import main

CONLLU = (
    "# sent_id = s1\n"
    "# text = My younger daughter says her dog barks.\n"
    "1\tMy\tmy\tPRON\t_\tNumber=Sing|Person=1|Poss=Yes|PronType=Prs\t3\tposs\t_\t_\n"
    "2\tyounger\tyoung\tADJ\t_\tDegree=Cmp\t3\tamod\t_\t_\n"
    "3\tdaughter\tdaughter\tNOUN\t_\tNumber=Sing\t4\tnsubj\t_\t_\n"
    "4\tsays\tsay\tVERB\t_\tNumber=Sing|Person=3|Tense=Pres|VerbForm=Fin\t0\troot\t_\t_\n"
    "5\ther\ther\tPRON\t_\tGender=Fem|Number=Sing|Person=3|Poss=Yes|PronType=Prs\t6\tposs\t_\t_\n"
    "6\tdog\tdog\tNOUN\t_\tNumber=Sing\t7\tnsubj\t_\t_\n"
    "7\tbarks\tbark\tVERB\t_\tNumber=Sing|Person=3|Tense=Pres|VerbForm=Fin\t4\tccomp\t_\tSpaceAfter=No\n"
    "8\t.\t.\tPUNCT\t_\t_\t4\tpunct\t_\t_\n"
    "\n"
    "# sent_id = s2\n"
    "# text = a b\n"
    "1\ta\ta\tNOUN\t_\t_\t0\troot\t_\t_\n"
    "2\tb\tb\tNOUN\t_\t_\t0\troot\t_\t_\n"
    "\n"
)


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.input = self.tmp / "sample.conllu"
        self.input.write_text(CONLLU, encoding="utf-8")
        self.output = self.tmp / "out.json"

    def tearDown(self):
        self._tmp.cleanup()

    def read_output(self):
        with open(self.output, encoding="utf-8") as f:
            return json.load(f)

    def test_phrases(self):
        code = main(["phrases", str(self.input), "-o", str(self.output)])
        self.assertEqual(code, 0)

        data = self.read_output()
        # s2 с двумя корнями пропущено
        self.assertEqual(len(data), 1)
        self.assertEqual([p["phrase"] for p in data[0]["phrases"]], ["My younger daughter", "her dog"])

    def test_phrases_fail_on_error(self):
        code = main(["phrases", str(self.input), "-o", str(self.output), "--fail-on-error"])
        self.assertEqual(code, 1)

    def test_filter(self):
        code = main(["filter", str(self.input), "--feats", "Number=Sing|PronType=Prs", "-o", str(self.output)])
        self.assertEqual(code, 0)
        data = self.read_output()
        self.assertEqual([t["text"] for t in data[0]["tokens"]], ["My", "her"])

    def test_filter_bad_predicate(self):
        code = main(["filter", str(self.input), "--feats", "Number", "-o", str(self.output)])
        self.assertEqual(code, 1)

    def test_ttr_conllu(self):
        code = main(["ttr", str(self.input), "-o", str(self.output)])
        self.assertEqual(code, 0)
        data = self.read_output()
        self.assertEqual(data["token_count"], 9)
        self.assertEqual(data["type_count"], 9)
        self.assertEqual(data["ttr"], 1.0)

    def test_ttr_plain_text(self):
        text_file = self.tmp / "sample.txt"
        text_file.write_text("Мама мыла раму. Мама!", encoding="utf-8")
        code = main(["ttr", str(text_file), "-o", str(self.output)])
        self.assertEqual(code, 0)
        data = self.read_output()
        self.assertEqual(data["token_count"], 4)
        self.assertEqual(data["ttr"], 0.75)
        self.assertEqual(data["most_common"][0], ["мама", 2])

    def test_ttr_empty(self):
        text_file = self.tmp / "empty.txt"
        text_file.write_text("...", encoding="utf-8")
        self.assertEqual(main(["ttr", str(text_file), "-o", str(self.output)]), 1)

    def test_report(self):
        code = main(["report", str(self.input), "--feats", "PronType=Prs", "-o", str(self.output)])
        self.assertEqual(code, 0)
        data = self.read_output()
        self.assertEqual(len(data["sentences"]), 1)
        self.assertEqual(data["errors"][0]["sent_id"], "s2")
        self.assertEqual(data["skipped_invalid"], 0)

    def test_validate_clean(self):
        # Два корня в s2 - проблема дерева, а не формата
        code = main(["validate", str(self.input), "--strict", "-o", str(self.output)])
        self.assertEqual(code, 0)
        data = self.read_output()
        self.assertEqual((data["total"], data["valid"], data["invalid"]), (2, 2, 0))
        self.assertEqual(data["sentences"], [])

    def test_validate_duplicates(self):
        self.input.write_text(CONLLU + CONLLU, encoding="utf-8")
        code = main(["validate", str(self.input), "-o", str(self.output)])
        self.assertEqual(code, 1)
        data = self.read_output()
        self.assertEqual((data["total"], data["valid"], data["invalid"]), (4, 2, 2))
        self.assertEqual([s["id"] for s in data["sentences"]], ["s1", "s2"])
        self.assertEqual(data["issues_by_kind"], {"Duplicate sent_id": 2})

    def test_validate_strict_metadata(self):
        self.input.write_text("1\tword\tword\tNOUN\t_\t_\t0\troot\t_\t_\n\n", encoding="utf-8")
        self.assertEqual(main(["validate", str(self.input), "-o", str(self.output)]), 0)
        self.assertEqual(main(["validate", str(self.input), "--strict", "-o", str(self.output)]), 1)
        data = self.read_output()
        self.assertEqual(data["sentences"][0]["id"], "#1")

    def test_custom_config(self):
        cfg = self.tmp / "cfg.yaml"
        cfg.write_text("phrases:\n  head_pos: [PRON]\n", encoding="utf-8")
        code = main(["--config", str(cfg), "phrases", str(self.input), "-o", str(self.output)])
        self.assertEqual(code, 0)
        data = self.read_output()
        self.assertEqual([p["phrase"] for p in data[0]["phrases"]], ["My", "her"])

    def test_missing_input(self):
        self.assertEqual(main(["phrases", str(self.tmp / "nope.conllu")]), 1)


if __name__ == '__main__':
    unittest.main()
