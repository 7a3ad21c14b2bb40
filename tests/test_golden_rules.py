from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from mkparse.errors import ParseError
from mkparse.main import PipelineOptions, process_file, process_source


GOLDEN_RULES: list[tuple[str, str, str]] = [
    (
        "single_rule",
        "target:prereqA prereqB\n\tcommand $<\n",
        "target: prereqA prereqB\n\tcommand prereqAprereqB\n",
    ),
    (
        "two_rules",
        "app: main.o util.o\n\tlink $<\n\nclean:\n\tremove app\n",
        "app: main.o util.o\n\tlink main.outil.o\nclean:\n\tremove app\n",
    ),
    (
        "variable_head",
        "$(OUT): src\n\tbuild $(FLAGS) $<\n",
        ": src\n\tbuild  src\n",
    ),
    (
        "extra_spaces",
        "all :   a    b\n\techo   $<\n",
        "all: a b\n\techo ab\n",
    ),
    (
        "only_newlines",
        "\n\n\n",
        "",
    ),
]


class GoldenRuleTests(unittest.TestCase):
    def test_golden_renderings(self) -> None:
        for name, source, expected in GOLDEN_RULES:
            with self.subTest(rule=name):
                self.assertEqual(process_source(source).text, expected)

    def test_no_expand_option_keeps_automatic_marker(self) -> None:
        artifacts = process_source(GOLDEN_RULES[0][1], options=PipelineOptions(expand=False))
        self.assertEqual(artifacts.text, "target: prereqA prereqB\n\tcommand $^\n")


class ProcessFileTests(unittest.TestCase):
    def test_writes_output_and_ast(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "rules.mk"
            source.write_text("all: a b\n\tjoin $<\n", encoding="utf-8")
            artifacts = process_file(
                source,
                output_path=root / "out.mk",
                emit_ast_path=root / "ast.json",
                options=PipelineOptions(separator=" "),
            )
            self.assertEqual((root / "out.mk").read_text(encoding="utf-8"), "all: a b\n\tjoin a b\n")
            self.assertTrue((root / "ast.json").is_file())
        self.assertEqual(artifacts.program.tree[0].position.file, str(source))

    def test_parse_error_leaves_no_output_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "rules.mk"
            source.write_text("123:dep\n", encoding="utf-8")
            with self.assertRaises(ParseError):
                process_file(source, output_path=root / "out.mk")
            self.assertFalse((root / "out.mk").exists())


if __name__ == "__main__":
    unittest.main()
