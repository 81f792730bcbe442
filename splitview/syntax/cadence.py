"""Cadence grammar for the rule-table tokenizer.

Patterns follow the Cadence TextMate grammar used by the Flow editor
extensions. Numeric rules must stay ordered float, hex, binary, octal,
integer: their prefixes overlap and the first match wins.
"""

from __future__ import annotations

from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
)

from .lexer import Pop, Push, ROOT_STATE, build_table, rule

COMMENT_STATE = "comment"

CADENCE_RULES = build_table(
    {
        ROOT_STATE: (
            rule(r"\b(import|from|transaction|prepare|execute|pre|post)\b", Keyword.Namespace),
            rule(r"\b(contract|struct|resource|interface|event|enum|attachment|entitlement)\b", Keyword.Declaration),
            rule(r"\b(fun|let|var|init)\b", Keyword.Declaration),
            rule(r"\b(if|else|switch|case|default|while|for|in|break|continue|return)\b", Keyword),
            rule(r"\b(pub|priv|access|auth|view|all|self|mapping|include)\b", Keyword.Reserved),
            rule(r"\b(create|destroy|emit|attach|to|remove|as)\b", Keyword),
            rule(
                r"\b(Int|UInt|Int8|Int16|Int32|Int64|Int128|Int256"
                r"|UInt8|UInt16|UInt32|UInt64|UInt128|UInt256)\b",
                Keyword.Type,
            ),
            rule(
                r"\b(Word8|Word16|Word32|Word64|Fix64|UFix64|String|Character|Bool|Address|Void)\b",
                Keyword.Type,
            ),
            rule(
                r"\b(AnyStruct|AnyResource|Any|Never|Type|Capability|Account"
                r"|StoragePath|PublicPath|PrivatePath|CapabilityPath)\b",
                Keyword.Type,
            ),
            rule(
                r"\b(FungibleToken|NonFungibleToken|MetadataViews|ViewResolver"
                r"|Burner|Vault|Receiver|Provider|Collection)\b",
                Name.Class,
            ),
            rule(
                r"\b(Storage|Capabilities|storage|capabilities|borrow|withdraw"
                r"|deposit|balance|save|load|copy|check)\b",
                Name.Builtin,
            ),
            rule(r"\b(true|false|nil)\b", Keyword.Constant),
            rule(r"\b[0-9]([_0-9]*[0-9])?\.[0-9]([_0-9]*[0-9])?\b", Number.Float),
            rule(r"\b0x[0-9A-Fa-f]([_0-9A-Fa-f]*[0-9A-Fa-f])?\b", Number.Hex),
            rule(r"\b0b[01]([_01]*[01])?\b", Number.Bin),
            rule(r"\b0o[0-7]([_0-7]*[0-7])?\b", Number.Oct),
            rule(r"\b[0-9]([_0-9]*[0-9])?\b", Number.Integer),
            rule(r'"(?:[^"\\]|\\.)*"', String),
            rule(r"///.*?$", Comment.Special),
            rule(r"//:.*?$", Comment.Special),
            rule(r"//.*?$", Comment.Single),
            rule(r"/\*", Comment.Multiline, Push(COMMENT_STATE)),
            # Before the arithmetic rule, otherwise "/" always wins. Not after an
            # operand, where "/" is division.
            rule(r"(?<![\w)\]])/(storage|public|private)(/[a-zA-Z_][a-zA-Z0-9_]*)?", String.Other),
            rule(r"<-!", Operator),
            rule(r"<->", Operator),
            rule(r"<-", Operator),
            rule(r"[+\-*/%]", Operator),
            rule(r"[=!<>]=?", Operator),
            rule(r"&&|\|\|", Operator),
            rule(r"\?\?", Operator),
            rule(r"\?\.", Operator),
            rule(r"[?!]", Operator),
            rule(r"&|@", Operator),
            rule(r"[(){}\[\],.:;]", Punctuation),
            rule(r"\b[a-zA-Z_][a-zA-Z0-9_]*(?=\s*\()", Name.Function),
            rule(r"\b[A-Z][a-zA-Z0-9_]*\b", Name.Class),
            rule(r"\b[a-zA-Z_][a-zA-Z0-9_]*\b", Name),
            rule(r"\s+", Text.Whitespace),
        ),
        COMMENT_STATE: (
            rule(r"[^*/]+", Comment.Multiline),
            rule(r"/\*", Comment.Multiline, Push(COMMENT_STATE)),
            rule(r"\*/", Comment.Multiline, Pop(1)),
            rule(r"[*/]", Comment.Multiline),
        ),
    }
)

