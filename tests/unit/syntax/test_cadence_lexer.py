"""Tokenizer behavior for the Cadence rule table.

Covers rule ordering, nested block comments, and failure reporting.
"""

from __future__ import annotations

import unittest

from pygments.token import Comment, Keyword, Name, Number, Operator, Punctuation, String, Text

from splitview.errors import TokenizeError
from splitview.syntax import CADENCE_RULES, Pop, Push, build_table, rule, scan, tokenize

SAMPLES = (
    "",
    "// hi\nlet a = 1",
    'import FungibleToken from 0xf233dcee88fe0abe\n\ntransaction(amount: UFix64) {\n'
    '    let vault: @FungibleToken.Vault\n    prepare(signer: auth(Storage) &Account) {\n'
    '        self.vault <- signer.storage.borrow<&FungibleToken.Vault>(from: /storage/flowTokenVault)!\n'
    '            .withdraw(amount: amount)\n    }\n}\n',
    "/* outer /* inner */ still */ pub fun main(): Int { return 0b1010 + 0o17 }",
    '/// docs\n//: more docs\nlet s = "escaped \\" quote"\nvar f = 1_000.25\n',
)


def _significant(tokens):
    return [(token.kind, token.text) for token in tokens if token.kind is not Text.Whitespace]


class CadenceTokenizerTests(unittest.TestCase):
    def test_line_comment_then_declaration(self) -> None:
        tokens = tokenize("// hi\nlet a = 1", CADENCE_RULES)

        self.assertEqual(tokens[0].kind, Comment.Single)
        self.assertEqual(tokens[0].text, "// hi")
        self.assertEqual(tokens[1].text, "\n")
        self.assertEqual(
            _significant(tokens),
            [
                (Comment.Single, "// hi"),
                (Keyword.Declaration, "let"),
                (Name, "a"),
                (Operator, "="),
                (Number.Integer, "1"),
            ],
        )

    def test_token_texts_reassemble_input_with_matching_offsets(self) -> None:
        for source in SAMPLES:
            with self.subTest(source=source[:20]):
                tokens = tokenize(source, CADENCE_RULES)
                self.assertEqual("".join(token.text for token in tokens), source)
                offset = 0
                for token in tokens:
                    self.assertEqual(token.offset, offset)
                    offset += len(token.text)

    def test_numeric_rules_resolve_overlapping_prefixes(self) -> None:
        tokens = _significant(tokenize("1.5 0xFF 0b101 0o17 42 1_000", CADENCE_RULES))
        self.assertEqual(
            tokens,
            [
                (Number.Float, "1.5"),
                (Number.Hex, "0xFF"),
                (Number.Bin, "0b101"),
                (Number.Oct, "0o17"),
                (Number.Integer, "42"),
                (Number.Integer, "1_000"),
            ],
        )

    def test_function_name_excludes_call_parenthesis(self) -> None:
        tokens = _significant(tokenize("transfer(amount: UFix64)", CADENCE_RULES))
        self.assertEqual(
            tokens,
            [
                (Name.Function, "transfer"),
                (Punctuation, "("),
                (Name, "amount"),
                (Punctuation, ":"),
                (Keyword.Type, "UFix64"),
                (Punctuation, ")"),
            ],
        )

    def test_storage_path_is_one_literal(self) -> None:
        tokens = _significant(tokenize("load(/storage/flowTokenVault)", CADENCE_RULES))
        self.assertIn((String.Other, "/storage/flowTokenVault"), tokens)

    def test_slash_after_operand_is_division(self) -> None:
        self.assertEqual(
            _significant(tokenize("a/storage", CADENCE_RULES)),
            [(Name, "a"), (Operator, "/"), (Name.Builtin, "storage")],
        )
        self.assertEqual(
            _significant(tokenize("(x)/public", CADENCE_RULES))[3:],
            [(Operator, "/"), (Name, "public")],
        )

    def test_move_operators_prefer_longest_form(self) -> None:
        tokens = _significant(tokenize("a <-! b <-> c <- d", CADENCE_RULES))
        operators = [text for kind, text in tokens if kind is Operator]
        self.assertEqual(operators, ["<-!", "<->", "<-"])

    def test_unmatched_character_fails_whole_input(self) -> None:
        with self.assertRaises(TokenizeError) as ctx:
            tokenize("let x = #", CADENCE_RULES)
        self.assertEqual(ctx.exception.offset, 8)
        self.assertEqual(ctx.exception.state, "root")

    def test_identical_input_tokenizes_identically(self) -> None:
        source = SAMPLES[2]
        self.assertEqual(tokenize(source, CADENCE_RULES), tokenize(source, CADENCE_RULES))


class NestedCommentTests(unittest.TestCase):
    def test_openers_without_closers_leave_one_frame_each(self) -> None:
        for depth in range(1, 5):
            with self.subTest(depth=depth):
                result = scan(" x ".join(["/*"] * depth) + " tail", CADENCE_RULES)
                self.assertEqual(result.stack, ("root",) + ("comment",) * depth)

    def test_one_closer_short_stays_inside_comment(self) -> None:
        depth = 3
        source = "/* " * depth + "*/ " * (depth - 1) + "let"
        result = scan(source, CADENCE_RULES)

        self.assertEqual(result.stack, ("root", "comment"))
        self.assertEqual(result.tokens[-1].kind, Comment.Multiline)

    def test_matching_closers_exit_comment_state(self) -> None:
        depth = 3
        source = "/* " * depth + "*/ " * depth + "let"
        result = scan(source, CADENCE_RULES)

        self.assertEqual(result.stack, ("root",))
        self.assertEqual(result.tokens[-1].kind, Keyword.Declaration)


class RuleTableTests(unittest.TestCase):
    def test_pop_never_removes_root_frame(self) -> None:
        table = build_table({"root": (rule(r"\)", Punctuation, Pop(3)), rule(r"\s+", Text))})
        self.assertEqual(scan(") )", table).stack, ("root",))

    def test_push_to_unknown_state_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            build_table({"root": (rule(r"\(", Punctuation, Push("missing")),)})

    def test_table_without_root_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            build_table({"other": (rule(r".", Text),)})

    def test_empty_matches_are_skipped(self) -> None:
        table = build_table({"root": (rule(r"a*", Name), rule(r"b", Text))})
        tokens = tokenize("bab", table)
        self.assertEqual([(t.kind, t.text) for t in tokens], [(Text, "b"), (Name, "a"), (Text, "b")])


if __name__ == "__main__":
    unittest.main()
