"""
SPRIG Language Parser

Recursive-descent syntax analyser for SPRIG statement parts.

The parser validates a token stream against the SPRIG grammar and reports what
it recognizes to an `EventSink` (see `sprig_generate`): entry into and exit
from each nonterminal and every accepted terminal. It keeps no tree of its own;
the nesting of sink calls is the tree.

Grammar
-------
    StatementPart       ::= begin StatementList end
    StatementList       ::= Statement ( ; Statement )*
    Statement           ::= AssignmentStatement | IfStatement | WhileStatement
                          | ProcedureStatement | UntilStatement | ForStatement
    AssignmentStatement ::= identifier := ( Expression | stringConstant )
    IfStatement         ::= if Condition then StatementList
                            ( else StatementList )? end if
    WhileStatement      ::= while Condition loop StatementList end loop
    ProcedureStatement  ::= call identifier ( ArgumentList )
    UntilStatement      ::= do StatementList until Condition
    ForStatement        ::= for ( AssignmentStatement ; Condition ;
                            AssignmentStatement ) do StatementList end loop
    ArgumentList        ::= identifier ( , identifier )*
    Condition           ::= identifier ConditionalOperator
                            ( identifier | numberConstant | stringConstant )
    ConditionalOperator ::= > | >= | = | != | < | <=
    Expression          ::= Term ( ( + | - ) Term )*
    Term                ::= Factor ( ( * | / | % ) Factor )*
    Factor              ::= identifier | numberConstant | ( Expression )

Parser Behavior
---------------
- One token of lookahead, held in `next_token`. Only `accept_terminal` moves it.
- Repetitions `X ::= Y (sep Y)*` recognize one `Y` and then, on `sep`,
  re-invoke the same rule for the tail. The tail call reuses the caller's
  enter/exit bracket unless `ParserOptions.right_nested` is set.
- Fail-fast: the first mismatch goes to `EventSink.report_error`, which raises.
  Nothing here catches it.
- A rule that picks between alternatives (Statement, Condition, ConditionalOperator,
  Factor) reports an error when the lookahead starts none of them. With
  `ParserOptions.lenient` it recognizes nothing instead, leaving the error to
  the next terminal the caller expects.

Raises
------
CompilationError
    Via the sink, when the lookahead does not match the expected terminal.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sprig import sprig_constants as nt
from sprig.sprig_constants import (
    ADDING_OPERATORS,
    CONDITION_OPERANDS,
    CONDITIONAL_OPERATORS,
    FACTOR_STARTERS,
    MULTIPLYING_OPERATORS,
    STATEMENT_STARTERS,
    Symbol,
)
from sprig.sprig_generate import EventSink
from sprig.sprig_lexer import Token, TokenSource
from sprig.sprig_options import DEFAULT_OPTIONS, ParserOptions

logger = logging.getLogger(__name__)


class SyntaxAnalyser:
    """
    SPRIG recursive-descent parser.

    Attributes
    ----------
    source : TokenSource
        Where tokens come from.
    sink : EventSink
        Where recognition events go.
    source_name : str
        Identifies the input in error messages (usually the file name).
    options : ParserOptions
        Strictness and event-nesting switches.
    next_token : Token
        The current lookahead: the first token not yet accepted.
    """

    def __init__(
        self,
        source: TokenSource,
        sink: EventSink,
        source_name: str = "<input>",
        options: ParserOptions | None = None,
    ) -> None:
        self.source = source
        self.sink = sink
        self.source_name = source_name
        self.options = options or DEFAULT_OPTIONS
        self.next_token: Token = source.next_token()

    def parse(self) -> None:
        """Recognize a whole program: a StatementPart followed by end of file."""
        logger.debug("Parsing %s", self.source_name)
        self.statement_part()
        self.accept_terminal(Symbol.EOF)

    # Terminal matching

    def accept_terminal(self, symbol: Symbol) -> None:
        """Match the lookahead against ``symbol`` and advance, or report an error."""
        if self.next_token.symbol is symbol:
            self.sink.insert_terminal(self.next_token)
            self.next_token = self.source.next_token()
        else:
            self._error(f"'{symbol.display_name}'")

    def _error(self, expected: str) -> None:
        message = (
            f"[File: {self.source_name} - Line {self.next_token.line}] - "
            f"Expected: {expected} but got: {self.next_token}"
        )
        self.sink.report_error(self.next_token, message)

    def _no_alternative(self, alternatives: Iterable[Symbol]) -> None:
        if not self.options.lenient:
            names = ", ".join(f"'{sym.display_name}'" for sym in alternatives)
            self._error(f"one of {names}")

    def _at(self, *symbols: Symbol) -> bool:
        return self.next_token.symbol in symbols

    def _commence(self, name: str, tail: bool) -> None:
        if not tail or self.options.right_nested:
            self.sink.commence_nonterminal(name)

    def _finish(self, name: str, tail: bool) -> None:
        if not tail or self.options.right_nested:
            self.sink.finish_nonterminal(name)

    # Statements

    def statement_part(self) -> None:
        self.sink.commence_nonterminal(nt.STATEMENT_PART)
        self.accept_terminal(Symbol.BEGIN)
        self.statement_list()
        self.accept_terminal(Symbol.END)
        self.sink.finish_nonterminal(nt.STATEMENT_PART)

    def statement_list(self, tail: bool = False) -> None:
        """StatementList ::= Statement ( ; Statement )*"""
        self._commence(nt.STATEMENT_LIST, tail)
        self.statement()
        if self._at(Symbol.SEMICOLON):
            self.accept_terminal(Symbol.SEMICOLON)
            self.statement_list(tail=True)
        self._finish(nt.STATEMENT_LIST, tail)

    def statement(self) -> None:
        """Choose the alternative from the lookahead symbol alone."""
        self.sink.commence_nonterminal(nt.STATEMENT)
        if self._at(Symbol.IDENTIFIER):
            self.assignment_statement()
        elif self._at(Symbol.IF):
            self.if_statement()
        elif self._at(Symbol.WHILE):
            self.while_statement()
        elif self._at(Symbol.CALL):
            self.procedure_statement()
        elif self._at(Symbol.DO):
            self.until_statement()
        elif self._at(Symbol.FOR):
            self.for_statement()
        else:
            self._no_alternative(STATEMENT_STARTERS)
        self.sink.finish_nonterminal(nt.STATEMENT)

    def assignment_statement(self) -> None:
        self.sink.commence_nonterminal(nt.ASSIGNMENT_STATEMENT)
        self.accept_terminal(Symbol.IDENTIFIER)
        self.accept_terminal(Symbol.BECOMES)
        if self._at(Symbol.STRING_CONSTANT):
            self.accept_terminal(Symbol.STRING_CONSTANT)
        else:
            self.expression()
        self.sink.finish_nonterminal(nt.ASSIGNMENT_STATEMENT)

    def if_statement(self) -> None:
        self.sink.commence_nonterminal(nt.IF_STATEMENT)
        self.accept_terminal(Symbol.IF)
        self.condition()
        self.accept_terminal(Symbol.THEN)
        self.statement_list()
        if self._at(Symbol.ELSE):
            self.accept_terminal(Symbol.ELSE)
            self.statement_list()
        self.accept_terminal(Symbol.END)
        self.accept_terminal(Symbol.IF)
        self.sink.finish_nonterminal(nt.IF_STATEMENT)

    def while_statement(self) -> None:
        self.sink.commence_nonterminal(nt.WHILE_STATEMENT)
        self.accept_terminal(Symbol.WHILE)
        self.condition()
        self.accept_terminal(Symbol.LOOP)
        self.statement_list()
        self.accept_terminal(Symbol.END)
        self.accept_terminal(Symbol.LOOP)
        self.sink.finish_nonterminal(nt.WHILE_STATEMENT)

    def procedure_statement(self) -> None:
        self.sink.commence_nonterminal(nt.PROCEDURE_STATEMENT)
        self.accept_terminal(Symbol.CALL)
        self.accept_terminal(Symbol.IDENTIFIER)
        self.accept_terminal(Symbol.LEFT_PARENTHESIS)
        self.argument_list()
        self.accept_terminal(Symbol.RIGHT_PARENTHESIS)
        self.sink.finish_nonterminal(nt.PROCEDURE_STATEMENT)

    def until_statement(self) -> None:
        self.sink.commence_nonterminal(nt.UNTIL_STATEMENT)
        self.accept_terminal(Symbol.DO)
        self.statement_list()
        self.accept_terminal(Symbol.UNTIL)
        self.condition()
        self.sink.finish_nonterminal(nt.UNTIL_STATEMENT)

    def for_statement(self) -> None:
        self.sink.commence_nonterminal(nt.FOR_STATEMENT)
        self.accept_terminal(Symbol.FOR)
        self.accept_terminal(Symbol.LEFT_PARENTHESIS)
        self.assignment_statement()
        self.accept_terminal(Symbol.SEMICOLON)
        self.condition()
        self.accept_terminal(Symbol.SEMICOLON)
        self.assignment_statement()
        self.accept_terminal(Symbol.RIGHT_PARENTHESIS)
        self.accept_terminal(Symbol.DO)
        self.statement_list()
        self.accept_terminal(Symbol.END)
        self.accept_terminal(Symbol.LOOP)
        self.sink.finish_nonterminal(nt.FOR_STATEMENT)

    def argument_list(self, tail: bool = False) -> None:
        """ArgumentList ::= identifier ( , identifier )*"""
        self._commence(nt.ARGUMENT_LIST, tail)
        self.accept_terminal(Symbol.IDENTIFIER)
        if self._at(Symbol.COMMA):
            self.accept_terminal(Symbol.COMMA)
            self.argument_list(tail=True)
        self._finish(nt.ARGUMENT_LIST, tail)

    # Conditions

    def condition(self) -> None:
        self.sink.commence_nonterminal(nt.CONDITION)
        self.accept_terminal(Symbol.IDENTIFIER)
        self.conditional_operator()
        if self._at(*CONDITION_OPERANDS):
            self.accept_terminal(self.next_token.symbol)
        else:
            self._no_alternative(CONDITION_OPERANDS)
        self.sink.finish_nonterminal(nt.CONDITION)

    def conditional_operator(self) -> None:
        self.sink.commence_nonterminal(nt.CONDITIONAL_OPERATOR)
        if self._at(*CONDITIONAL_OPERATORS):
            self.accept_terminal(self.next_token.symbol)
        else:
            self._no_alternative(CONDITIONAL_OPERATORS)
        self.sink.finish_nonterminal(nt.CONDITIONAL_OPERATOR)

    # Arithmetic

    def expression(self, tail: bool = False) -> None:
        """Expression ::= Term ( ( + | - ) Term )*

        The tail is recognized by re-entering this rule, so with
        `right_nested` the reported shape groups to the right.
        """
        self._commence(nt.EXPRESSION, tail)
        self.term()
        if self._at(*ADDING_OPERATORS):
            self.accept_terminal(self.next_token.symbol)
            self.expression(tail=True)
        self._finish(nt.EXPRESSION, tail)

    def term(self, tail: bool = False) -> None:
        """Term ::= Factor ( ( * | / | % ) Factor )*"""
        self._commence(nt.TERM, tail)
        self.factor()
        if self._at(*MULTIPLYING_OPERATORS):
            self.accept_terminal(self.next_token.symbol)
            self.term(tail=True)
        self._finish(nt.TERM, tail)

    def factor(self) -> None:
        self.sink.commence_nonterminal(nt.FACTOR)
        if self._at(Symbol.IDENTIFIER, Symbol.NUMBER_CONSTANT):
            self.accept_terminal(self.next_token.symbol)
        elif self._at(Symbol.LEFT_PARENTHESIS):
            self.accept_terminal(Symbol.LEFT_PARENTHESIS)
            self.expression()
            self.accept_terminal(Symbol.RIGHT_PARENTHESIS)
        else:
            self._no_alternative(FACTOR_STARTERS)
        self.sink.finish_nonterminal(nt.FACTOR)


__all__ = ["SyntaxAnalyser"]
