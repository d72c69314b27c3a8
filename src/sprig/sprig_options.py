"""Parser configuration."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserOptions:
    """Switches that change how the SyntaxAnalyser reports structure and errors.

    Attributes:
        lenient (bool): When a rule that chooses between alternatives (Statement,
            Condition, ConditionalOperator, Factor) sees a lookahead that starts
            none of them, recognize nothing and let the caller's next expected
            terminal fail instead. Note this accepts some malformed programs,
            e.g. a trailing `;` before `end`. Off by default: the error is
            reported at the offending token.
        right_nested (bool): Bracket every recursive tail of a list rule
            (StatementList, ArgumentList, Expression, Term) with its own
            enter/exit pair, so `a - b - c` is reported as
            Expression(a - Expression(b - Expression(c))). By default a list
            is reported as a single flat nonterminal.
    """

    lenient: bool = False
    right_nested: bool = False


DEFAULT_OPTIONS = ParserOptions()
