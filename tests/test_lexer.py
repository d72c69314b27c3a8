from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sprig.sprig_constants import KEYWORDS, OPERATORS, Symbol
from sprig.sprig_errors import CompilationError, LexicalError
from sprig.sprig_lexer import CharacterStream, Lexer, Token, TokenList


def tokenize(source: str) -> list[Token]:
    return Lexer(CharacterStream(source)).tokens()


def symbols(source: str) -> list[Symbol]:
    return [tok.symbol for tok in tokenize(source)]


def test_single_and_compound_operators() -> None:
    code = ":= ; , ( ) > >= = != < <= + - * / %"
    expected = [
        Symbol.BECOMES,
        Symbol.SEMICOLON,
        Symbol.COMMA,
        Symbol.LEFT_PARENTHESIS,
        Symbol.RIGHT_PARENTHESIS,
        Symbol.GREATER_THAN,
        Symbol.GREATER_EQUAL,
        Symbol.EQUAL,
        Symbol.NOT_EQUAL,
        Symbol.LESS_THAN,
        Symbol.LESS_EQUAL,
        Symbol.PLUS,
        Symbol.MINUS,
        Symbol.TIMES,
        Symbol.DIVIDE,
        Symbol.MOD,
        Symbol.EOF,
    ]
    assert symbols(code) == expected


def test_longest_match_without_spaces() -> None:
    assert symbols("x:=y>=1") == [
        Symbol.IDENTIFIER,
        Symbol.BECOMES,
        Symbol.IDENTIFIER,
        Symbol.GREATER_EQUAL,
        Symbol.NUMBER_CONSTANT,
        Symbol.EOF,
    ]


@pytest.mark.parametrize("word", sorted(KEYWORDS))
def test_keywords(word: str) -> None:
    tok = tokenize(word)[0]
    assert tok.symbol is KEYWORDS[word]
    assert tok.text == word


def test_keywords_are_case_sensitive() -> None:
    tok = tokenize("BEGIN")[0]
    assert tok.symbol is Symbol.IDENTIFIER
    assert tok.text == "BEGIN"


def test_identifier_with_keyword_prefix() -> None:
    tok = tokenize("ending")[0]
    assert tok.symbol is Symbol.IDENTIFIER


def test_number_constants() -> None:
    toks = tokenize("42 3.14")
    assert [(t.symbol, t.text) for t in toks[:2]] == [
        (Symbol.NUMBER_CONSTANT, "42"),
        (Symbol.NUMBER_CONSTANT, "3.14"),
    ]


def test_number_followed_by_dot_is_not_fractional() -> None:
    toks = tokenize("7.")
    assert toks[0] == Token(Symbol.NUMBER_CONSTANT, "7", 1, 1)
    assert toks[1].symbol is Symbol.ERROR


def test_string_constant() -> None:
    tok = tokenize('"hello world"')[0]
    assert tok.symbol is Symbol.STRING_CONSTANT
    assert tok.text == "hello world"


def test_unterminated_string_raises() -> None:
    with pytest.raises(LexicalError, match="Unterminated string constant at line 2"):
        tokenize('begin\n"oops\n"')


def test_lexical_error_is_a_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        tokenize('"never closed')
    assert issubclass(LexicalError, CompilationError)


def test_comments_and_whitespace_skipped() -> None:
    toks = tokenize("  -- a comment\n\t x -- trailing\n")
    assert toks[0] == Token(Symbol.IDENTIFIER, "x", 2, 3)
    assert toks[1].symbol is Symbol.EOF


def test_single_minus_is_operator() -> None:
    assert symbols("a - b") == [
        Symbol.IDENTIFIER,
        Symbol.MINUS,
        Symbol.IDENTIFIER,
        Symbol.EOF,
    ]


def test_line_and_column_tracking() -> None:
    toks = tokenize("begin\n  x := 1\nend")
    assert (toks[1].line, toks[1].col) == (2, 3)
    assert (toks[4].line, toks[4].col) == (3, 1)


def test_unknown_character_becomes_error_token() -> None:
    toks = tokenize("x ? y")
    assert toks[1] == Token(Symbol.ERROR, "?", 1, 3)


def test_non_ascii_digit_is_error_token() -> None:
    toks = tokenize("x := ²")
    assert toks[2] == Token(Symbol.ERROR, "²", 1, 6)


@pytest.mark.parametrize("ch", ["²", "٣", "é"])
def test_non_ascii_characters_are_error_tokens(ch: str) -> None:
    assert symbols(ch) == [Symbol.ERROR, Symbol.EOF]


def test_non_ascii_letter_ends_identifier() -> None:
    toks = tokenize("xé1")
    assert toks[0] == Token(Symbol.IDENTIFIER, "x", 1, 1)
    assert toks[1] == Token(Symbol.ERROR, "é", 1, 2)
    assert toks[2] == Token(Symbol.NUMBER_CONSTANT, "1", 1, 3)


def test_non_ascii_digit_ends_number() -> None:
    assert symbols("12٣") == [Symbol.NUMBER_CONSTANT, Symbol.ERROR, Symbol.EOF]


def test_lone_bang_and_colon_are_errors() -> None:
    assert symbols("! :") == [Symbol.ERROR, Symbol.ERROR, Symbol.EOF]


def test_eof_repeats() -> None:
    lexer = Lexer(CharacterStream(""))
    assert lexer.next_token().symbol is Symbol.EOF
    assert lexer.next_token().symbol is Symbol.EOF


def test_character_stream_read_past_end() -> None:
    stream = CharacterStream("a")
    stream.next()
    with pytest.raises(EOFError):
        stream.next()


def test_from_file(tmp_path: Path) -> None:
    path = tmp_path / "prog.sprig"
    path.write_text("begin x := 1 end", encoding="utf-8")
    toks = Lexer.from_file(path).tokens()
    assert [t.symbol for t in toks] == [
        Symbol.BEGIN,
        Symbol.IDENTIFIER,
        Symbol.BECOMES,
        Symbol.NUMBER_CONSTANT,
        Symbol.END,
        Symbol.EOF,
    ]


def test_from_missing_file_raises_oserror(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        Lexer.from_file(tmp_path / "missing.sprig")


def test_token_rendering() -> None:
    assert str(Token(Symbol.END, "end", 3)) == "'end'"
    assert str(Token(Symbol.IDENTIFIER, "x", 1)) == "identifier 'x'"
    assert str(Token(Symbol.NUMBER_CONSTANT, "10", 1)) == "numberConstant '10'"
    assert str(Token(Symbol.EOF, "", 9)) == "end of file"
    assert repr(Token(Symbol.BECOMES, ":=", 2)) == "Token(:=, ':=', line=2)"


def test_token_is_immutable() -> None:
    tok = Token(Symbol.IDENTIFIER, "x", 1, 1)
    with pytest.raises(AttributeError):
        tok.text = "y"  # type: ignore[misc]


def test_token_list_pads_with_eof() -> None:
    source = TokenList([Token(Symbol.IDENTIFIER, "x", 4)])
    assert source.next_token().text == "x"
    eof = source.next_token()
    assert eof.symbol is Symbol.EOF
    assert eof.line == 4
    assert source.next_token().symbol is Symbol.EOF


@given(st.from_regex(r"[a-z_][a-z0-9_]{0,10}", fullmatch=True))  # type: ignore[misc]
def test_words_are_keywords_or_identifiers(word: str) -> None:
    tok = tokenize(word)[0]
    assert tok.text == word
    assert tok.symbol is KEYWORDS.get(word, Symbol.IDENTIFIER)


@given(st.lists(st.sampled_from(sorted(OPERATORS)), min_size=1, max_size=8))  # type: ignore[misc]
def test_space_separated_operators(ops: list[str]) -> None:
    toks = tokenize(" ".join(ops))
    assert [t.text for t in toks[:-1]] == ops
    assert [t.symbol for t in toks[:-1]] == [OPERATORS[op] for op in ops]
