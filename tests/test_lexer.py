from __future__ import annotations

import unittest

from rlint.lexer import RParseError, tokenize


def _kinds(text: str) -> list[tuple[str, str]]:
    return [(token.token, token.text) for token in tokenize(text)]


class LexerTests(unittest.TestCase):
    def test_top_level_equals_is_assignment(self) -> None:
        self.assertEqual(
            _kinds("blah=1"),
            [("SYMBOL", "blah"), ("EQ_ASSIGN", "="), ("NUM_CONST", "1")],
        )

    def test_equals_in_call_is_argument(self) -> None:
        kinds = _kinds("fun(a = 1)")
        self.assertIn(("SYMBOL_FUNCTION_CALL", "fun"), kinds)
        self.assertIn(("SYMBOL_SUB", "a"), kinds)
        self.assertIn(("EQ_SUB", "="), kinds)
        self.assertNotIn("EQ_ASSIGN", [kind for kind, _ in kinds])

    def test_equals_in_grouping_parentheses_is_assignment(self) -> None:
        tokens = tokenize("fun((blah = fun(1)))")
        assignments = [token for token in tokens if token.token == "EQ_ASSIGN"]
        self.assertEqual(len(assignments), 1)
        self.assertEqual((assignments[0].line1, assignments[0].col1), (1, 11))

    def test_equals_in_braces_is_assignment(self) -> None:
        kinds = [kind for kind, _ in _kinds("f(function() { x = 1 })")]
        self.assertIn("EQ_ASSIGN", kinds)

    def test_function_formals(self) -> None:
        kinds = _kinds("function(x = 1, y) x")
        self.assertEqual(kinds[0], ("FUNCTION", "function"))
        self.assertIn(("SYMBOL_FORMALS", "x"), kinds)
        self.assertIn(("SYMBOL_FORMALS", "y"), kinds)
        self.assertIn(("EQ_FORMALS", "="), kinds)
        self.assertEqual(kinds[-1], ("SYMBOL", "x"))

    def test_lambda_formals(self) -> None:
        kinds = _kinds("\\(x) x + 1")
        self.assertEqual(kinds[0], ("'\\\\'", "\\"))
        self.assertIn(("SYMBOL_FORMALS", "x"), kinds)

    def test_index_arguments(self) -> None:
        kinds = [kind for kind, _ in _kinds("x[drop = FALSE]; y[[i]]")]
        self.assertIn("EQ_SUB", kinds)
        self.assertIn("LBB", kinds)
        self.assertEqual(kinds.count("']'"), 3)

    def test_parenthesis_after_if_condition_is_not_a_call(self) -> None:
        kinds = _kinds("if (a) (b = 1)")
        self.assertIn(("EQ_ASSIGN", "="), kinds)
        self.assertIn(("SYMBOL", "a"), kinds)

    def test_newline_ends_expression_before_grouping_parentheses(self) -> None:
        for source, line in (
            ("x <- 1\n(y = 2)\n", 2),
            ("if (a) {\n  b <- 1\n}\n(z = 2)\n", 4),
            ("f <- function() {\n  x\n  (y = 2)\n}\n", 3),
        ):
            with self.subTest(source=source):
                tokens = tokenize(source)
                kinds = [token.token for token in tokens]
                self.assertNotIn("EQ_SUB", kinds)
                self.assertNotIn("SYMBOL_FUNCTION_CALL", kinds)
                assignments = [token for token in tokens if token.token == "EQ_ASSIGN"]
                self.assertEqual([token.line1 for token in assignments], [line])

    def test_newline_inside_call_keeps_the_call_open(self) -> None:
        kinds = [kind for kind, _ in _kinds("g(f\n(a = 1))")]
        self.assertEqual(kinds.count("SYMBOL_FUNCTION_CALL"), 2)
        self.assertIn("EQ_SUB", kinds)

    def test_assignment_operators(self) -> None:
        kinds = [kind for kind, _ in _kinds("a <- 1; b <<- 2; 3 -> d; e := 4")]
        self.assertEqual(kinds.count("LEFT_ASSIGN"), 3)
        self.assertEqual(kinds.count("RIGHT_ASSIGN"), 1)

    def test_constants_and_keywords(self) -> None:
        kinds = _kinds("if (TRUE) NULL else 1e-3L")
        self.assertEqual(kinds[0], ("IF", "if"))
        self.assertIn(("NUM_CONST", "TRUE"), kinds)
        self.assertIn(("NULL_CONST", "NULL"), kinds)
        self.assertIn(("ELSE", "else"), kinds)
        self.assertIn(("NUM_CONST", "1e-3L"), kinds)

    def test_strings_comments_and_specials(self) -> None:
        kinds = _kinds("x %in% c('a', \"b = c\") # note = here")
        self.assertIn(("SPECIAL", "%in%"), kinds)
        self.assertIn(("STR_CONST", "\"b = c\""), kinds)
        self.assertEqual(kinds[-1], ("COMMENT", "# note = here"))
        self.assertNotIn("EQ_ASSIGN", [kind for kind, _ in kinds])

    def test_raw_string(self) -> None:
        kinds = _kinds('x <- r"(a = "b")"')
        self.assertEqual(kinds[-1], ("STR_CONST", 'r"(a = "b")"'))

    def test_number_forms_and_unterminated_raw_string(self) -> None:
        kinds = _kinds("c(.5, 0x1F, 2i, 10L)")
        self.assertEqual(
            [text for kind, text in kinds if kind == "NUM_CONST"],
            [".5", "0x1F", "2i", "10L"],
        )
        with self.assertRaises(RParseError) as ctx:
            tokenize("x <- r\"(abc\"")
        self.assertEqual((ctx.exception.line, ctx.exception.column), (1, 6))

    def test_multiline_string_span(self) -> None:
        tokens = tokenize('x <- "a\nbc"\n')
        string = [token for token in tokens if token.token == "STR_CONST"][0]
        self.assertEqual((string.line1, string.col1, string.line2, string.col2), (1, 6, 2, 3))

    def test_namespace_and_member_access(self) -> None:
        kinds = [kind for kind, _ in _kinds("stats::sd(x$T)")]
        self.assertIn("NS_GET", kinds)
        self.assertIn("'$'", kinds)

    def test_token_ids_follow_discovery_order(self) -> None:
        tokens = tokenize("a <- b")
        self.assertEqual([token.id for token in tokens], [1, 2, 3])

    def test_unterminated_string_raises(self) -> None:
        with self.assertRaises(RParseError) as ctx:
            tokenize("x <- 'abc")
        self.assertEqual((ctx.exception.line, ctx.exception.column), (1, 6))

    def test_unbalanced_brackets_raise(self) -> None:
        with self.assertRaises(RParseError):
            tokenize("f(1))")
        with self.assertRaises(RParseError) as ctx:
            tokenize("f(\n  1\n")
        self.assertEqual((ctx.exception.line, ctx.exception.column), (1, 2))

    def test_unexpected_character_raises(self) -> None:
        with self.assertRaises(RParseError):
            tokenize("x <- _y")


if __name__ == "__main__":
    unittest.main()
