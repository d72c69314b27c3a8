"""
Symbol vocabulary for the SPRIG language.

Defines the closed set of terminal kinds the lexer produces and the parser
matches, the spelling tables used to classify words and operators, and the
names of the grammar's nonterminals.

Exports:
    - Symbol
    - KEYWORDS
    - OPERATORS
    - CONDITIONAL_OPERATORS
    - ADDING_OPERATORS
    - MULTIPLYING_OPERATORS
    - STATEMENT_STARTERS
    - nonterminal name constants
"""

from enum import Enum


class Symbol(Enum):
    """Terminal symbol kinds.

    The value of each member is its human-readable name, used verbatim in
    diagnostics (``Expected: 'end' but got: ...``).
    """

    BEGIN = "begin"
    END = "end"
    IF = "if"
    THEN = "then"
    ELSE = "else"
    WHILE = "while"
    LOOP = "loop"
    CALL = "call"
    DO = "do"
    UNTIL = "until"
    FOR = "for"

    IDENTIFIER = "identifier"
    BECOMES = ":="
    SEMICOLON = ";"
    COMMA = ","
    LEFT_PARENTHESIS = "("
    RIGHT_PARENTHESIS = ")"

    GREATER_THAN = ">"
    GREATER_EQUAL = ">="
    EQUAL = "="
    NOT_EQUAL = "!="
    LESS_THAN = "<"
    LESS_EQUAL = "<="

    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    MOD = "%"

    STRING_CONSTANT = "stringConstant"
    NUMBER_CONSTANT = "numberConstant"
    EOF = "end of file"

    # Produced by the lexer for unclassifiable characters; never expected.
    ERROR = "error"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def has_lexeme(self) -> bool:
        """True for kinds whose spelling varies per token."""
        return self in _VARIABLE_SPELLING


_VARIABLE_SPELLING = frozenset(
    {
        Symbol.IDENTIFIER,
        Symbol.NUMBER_CONSTANT,
        Symbol.STRING_CONSTANT,
        Symbol.ERROR,
    }
)

KEYWORDS: dict[str, Symbol] = {
    sym.value: sym
    for sym in (
        Symbol.BEGIN,
        Symbol.END,
        Symbol.IF,
        Symbol.THEN,
        Symbol.ELSE,
        Symbol.WHILE,
        Symbol.LOOP,
        Symbol.CALL,
        Symbol.DO,
        Symbol.UNTIL,
        Symbol.FOR,
    )
}

OPERATORS: dict[str, Symbol] = {
    sym.value: sym
    for sym in (
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
    )
}

# Bound for the lexer's longest-match scan.
MAX_OPERATOR_LENGTH = max(len(op) for op in OPERATORS)

CONDITIONAL_OPERATORS: tuple[Symbol, ...] = (
    Symbol.GREATER_THAN,
    Symbol.GREATER_EQUAL,
    Symbol.EQUAL,
    Symbol.NOT_EQUAL,
    Symbol.LESS_THAN,
    Symbol.LESS_EQUAL,
)

ADDING_OPERATORS: tuple[Symbol, ...] = (Symbol.PLUS, Symbol.MINUS)

MULTIPLYING_OPERATORS: tuple[Symbol, ...] = (Symbol.TIMES, Symbol.DIVIDE, Symbol.MOD)

CONDITION_OPERANDS: tuple[Symbol, ...] = (
    Symbol.IDENTIFIER,
    Symbol.NUMBER_CONSTANT,
    Symbol.STRING_CONSTANT,
)

FACTOR_STARTERS: tuple[Symbol, ...] = (
    Symbol.IDENTIFIER,
    Symbol.NUMBER_CONSTANT,
    Symbol.LEFT_PARENTHESIS,
)

# Nonterminal names, as reported to the event sink.
STATEMENT_PART = "StatementPart"
STATEMENT_LIST = "StatementList"
STATEMENT = "Statement"
ASSIGNMENT_STATEMENT = "AssignmentStatement"
IF_STATEMENT = "IfStatement"
WHILE_STATEMENT = "WhileStatement"
PROCEDURE_STATEMENT = "ProcedureStatement"
UNTIL_STATEMENT = "UntilStatement"
FOR_STATEMENT = "ForStatement"
ARGUMENT_LIST = "ArgumentList"
CONDITION = "Condition"
CONDITIONAL_OPERATOR = "ConditionalOperator"
EXPRESSION = "Expression"
TERM = "Term"
FACTOR = "Factor"

# Statement dispatch: leading symbol -> statement nonterminal.
STATEMENT_STARTERS: dict[Symbol, str] = {
    Symbol.IDENTIFIER: ASSIGNMENT_STATEMENT,
    Symbol.IF: IF_STATEMENT,
    Symbol.WHILE: WHILE_STATEMENT,
    Symbol.CALL: PROCEDURE_STATEMENT,
    Symbol.DO: UNTIL_STATEMENT,
    Symbol.FOR: FOR_STATEMENT,
}

__all__ = [
    "ADDING_OPERATORS",
    "CONDITIONAL_OPERATORS",
    "CONDITION_OPERANDS",
    "FACTOR_STARTERS",
    "KEYWORDS",
    "MAX_OPERATOR_LENGTH",
    "MULTIPLYING_OPERATORS",
    "OPERATORS",
    "STATEMENT_STARTERS",
    "Symbol",
]
