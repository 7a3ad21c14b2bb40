from __future__ import annotations

import unittest

from mkparse.ast import ALL_PREREQUISITES, Assignment, Identifier, Target, VariableReference
from mkparse.errors import ParseError
from mkparse.parser import parse_source
from mkparse.tokens import TokenKind


SIMPLE_RULE = 'target:prereqA prereqB\n\tcommand $<\n'


class ParserTests(unittest.TestCase):
    def test_simple_rule(self) -> None:
        program = parse_source(SIMPLE_RULE)
        self.assertEqual(len(program.tree), 1)
        target = program.tree[0]
        self.assertIsInstance(target, Target)
        self.assertEqual(target.head.value(), 'target')
        self.assertEqual([expr.value() for expr in target.prerequisites], ['prereqA', 'prereqB'])
        self.assertEqual(len(target.recipe), 1)
        command, automatic = target.recipe[0].terms
        self.assertIsInstance(command, Identifier)
        self.assertIsInstance(automatic, VariableReference)
        self.assertEqual(automatic.name, ALL_PREREQUISITES)
        self.assertEqual(automatic.value(), ALL_PREREQUISITES)
        self.assertFalse(target.expanded)

    def test_number_head_is_rejected(self) -> None:
        with self.assertRaises(ParseError) as ctx:
            parse_source('123:dep\n')
        self.assertEqual(ctx.exception.code, 'PAR002')
        self.assertEqual((ctx.exception.row, ctx.exception.column), (0, 0))
        self.assertIn(TokenKind.IDENTIFIER, ctx.exception.expected)

    def test_variable_head(self) -> None:
        program = parse_source('$(CC): main\n')
        head = program.tree[0].head
        self.assertIsInstance(head, VariableReference)
        self.assertEqual(head.name, 'CC')
        self.assertEqual(head.value(), '')

    def test_unterminated_reference(self) -> None:
        with self.assertRaises(ParseError) as ctx:
            parse_source('all: $(OBJ\n')
        self.assertEqual(ctx.exception.code, 'PAR004')
        self.assertEqual(ctx.exception.expected_names(), ['RightParen'])

    def test_dollar_without_paren_or_less_than(self) -> None:
        with self.assertRaises(ParseError) as ctx:
            parse_source('all: $x\n')
        self.assertEqual(ctx.exception.code, 'PAR003')

    def test_literal_in_prerequisites_is_rejected(self) -> None:
        with self.assertRaises(ParseError) as ctx:
            parse_source("all: 'quoted'\n")
        self.assertEqual(ctx.exception.code, 'PAR001')
        self.assertEqual(ctx.exception.column, 3)

    def test_number_in_recipe_is_rejected(self) -> None:
        with self.assertRaises(ParseError) as ctx:
            parse_source('all: main\n\tsleep 10\n')
        self.assertEqual(ctx.exception.code, 'PAR001')
        self.assertEqual(ctx.exception.row, 1)

    def test_rule_directly_after_recipe(self) -> None:
        program = parse_source('a: b\n\tcmd\nc: d\n')
        self.assertEqual([node.head.name for node in program.tree], ['a', 'c'])
        self.assertEqual(program.tree[1].position.row, 2)

    def test_recipe_without_trailing_newline(self) -> None:
        program = parse_source('a: b\n\techo $<')
        self.assertEqual(len(program.tree[0].recipe), 1)
        self.assertEqual(len(program.tree[0].recipe[0].terms), 2)

    def test_multiple_recipe_lines(self) -> None:
        program = parse_source('a: b c\n\tx y\n\tz\n')
        self.assertEqual([cmd.value() for cmd in program.tree[0].recipe], ['x y', 'z'])

    def test_rule_without_prerequisites(self) -> None:
        program = parse_source('clean:\n\trm\n')
        self.assertEqual(program.tree[0].prerequisites, [])

    def test_assignment_is_recognised_but_unsupported(self) -> None:
        with self.assertLogs('mkparse.parser', level='WARNING') as logs:
            program = parse_source('CC = gcc\nall: main\n')
        self.assertIsInstance(program.tree[0], Assignment)
        self.assertIsInstance(program.tree[1], Target)
        self.assertEqual([diag.code for diag in program.diagnostics], ['ASG001'])
        self.assertEqual(program.symbols, {})
        self.assertIn('ASG001', logs.output[0])

    def test_ignored_tokens_are_skipped(self) -> None:
        program = parse_source('# note\nall: x\n')
        self.assertEqual(len(program.tree), 1)
        self.assertEqual(program.tree[0].head.name, 'all')

    def test_term_not_followed_by_colon_is_ignored(self) -> None:
        program = parse_source('foo bar: baz\n')
        self.assertEqual(len(program.tree), 1)
        self.assertEqual(program.tree[0].head.name, 'bar')

    def test_only_newlines_gives_empty_tree(self) -> None:
        program = parse_source('\n\n\n')
        self.assertEqual(program.tree, [])


if __name__ == '__main__':
    unittest.main()
