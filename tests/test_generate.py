import logging

import pytest

from sprig.sprig_constants import Symbol
from sprig.sprig_errors import CompilationError
from sprig.sprig_generate import Generate, TraceRecorder
from sprig.sprig_lexer import CharacterStream, Lexer, Token
from sprig.sprig_options import ParserOptions
from sprig.sprig_parser import SyntaxAnalyser
from sprig.sprig_tree import ParseTreeNode


def generate(source: str, options: ParserOptions | None = None) -> ParseTreeNode:
    sink = Generate()
    SyntaxAnalyser(Lexer(CharacterStream(source)), sink, "gen.sprig", options).parse()
    return sink.tree


def test_tree_root_and_eof_leaf() -> None:
    tree = generate("begin x := 1 end")
    assert tree.kind == "StatementPart"
    assert [c.kind for c in tree.children] == ["begin", "StatementList", "end", "end of file"]


def test_tree_terminals_match_source_tokens() -> None:
    source = "begin if a < 3 then call p(a, b) else a := (a + 1) * 2 end if end"
    tree = generate(source)
    assert tree.terminals() == Lexer(CharacterStream(source)).tokens()


def test_tree_assignment_shape() -> None:
    tree = generate("begin\n  x := y\nend")
    statement = tree.children[1].children[0]
    assignment = statement.children[0]
    assert assignment.kind == "AssignmentStatement"
    assert assignment.line == 2
    assert [c.kind for c in assignment.children] == ["identifier", ":=", "Expression"]
    factor = assignment.children[2].children[0].children[0]
    assert factor == ParseTreeNode(
        "Factor", children=[ParseTreeNode("identifier", Token(Symbol.IDENTIFIER, "y", 2, 8))], line=2
    )


def test_right_nested_tree() -> None:
    tree = generate("begin x := a + b + c end", ParserOptions(right_nested=True))
    expr = tree.children[1].children[0].children[0].children[2]
    depth = 0
    while expr.kind == "Expression":
        depth += 1
        expr = expr.children[-1]
    assert depth == 3


def test_tree_before_finish_raises() -> None:
    with pytest.raises(RuntimeError, match="No complete parse tree"):
        Generate().tree


def test_unbalanced_finish_raises() -> None:
    sink = Generate()
    with pytest.raises(RuntimeError, match="without matching commence"):
        sink.finish_nonterminal("Statement")


def test_mismatched_finish_raises() -> None:
    sink = Generate()
    sink.commence_nonterminal("Statement")
    with pytest.raises(RuntimeError, match="does not match open nonterminal 'Statement'"):
        sink.finish_nonterminal("Expression")


def test_terminal_outside_nonterminal_raises() -> None:
    with pytest.raises(RuntimeError, match="outside any nonterminal"):
        Generate().insert_terminal(Token(Symbol.BEGIN, "begin", 1, 1))


def test_report_error_raises_compilation_error() -> None:
    tok = Token(Symbol.LOOP, "loop", 7, 3)
    with pytest.raises(CompilationError) as info:
        TraceRecorder().report_error(tok, "boom")
    assert info.value.token is tok
    assert info.value.line == 7
    assert str(info.value) == "boom"


def test_trace_recorder_format() -> None:
    sink = TraceRecorder()
    SyntaxAnalyser(Lexer(CharacterStream("begin x := 1 end")), sink).parse()
    lines = sink.format().splitlines()
    assert lines[0] == "enter StatementPart"
    assert lines[1] == "  accept 'begin'"
    assert "  " * 7 + "accept numberConstant '1'" in lines
    assert lines[-2] == "exit StatementPart"
    assert lines[-1] == "accept end of file"


def test_events_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="sprig.sprig_generate"):
        generate("begin x := 1 end")
    messages = [r.getMessage() for r in caplog.records if r.name == "sprig.sprig_generate"]
    assert messages[0] == "begin StatementPart"
    assert "  begin StatementList" in messages
    assert messages[-2] == "end StatementPart"


def test_depth_restored_after_parse() -> None:
    sink = TraceRecorder()
    SyntaxAnalyser(Lexer(CharacterStream("begin do x := 1 until x > 1 end")), sink).parse()
    assert sink.depth == 0
