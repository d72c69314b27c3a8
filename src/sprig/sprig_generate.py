"""
Event sinks driven by the SPRIG parser.

The parser does not build a tree itself. It reports what it recognizes to an
`EventSink`: entry into and exit from each nonterminal, each accepted terminal,
and a fatal error. This module defines that interface and the sinks shipped
with the package.

Classes:
    EventSink (Protocol): The four operations the parser calls.
    AbstractGenerate: Base sink that logs events and raises on errors.
    Generate: Materializes the events into a `ParseTreeNode` tree.
    TraceRecorder: Records the raw ordered event stream.

Usage:
    >>> sink = Generate()
    >>> SyntaxAnalyser(Lexer(CharacterStream("begin x := 1 end")), sink).parse()
    >>> sink.tree.kind
    'StatementPart'
"""

import logging
from typing import NoReturn, Protocol, Union

from sprig.sprig_errors import CompilationError
from sprig.sprig_lexer import Token
from sprig.sprig_tree import ParseTreeNode

logger = logging.getLogger(__name__)


class EventSink(Protocol):  # pragma: no cover
    """Receiver of parse events.

    Methods:
        commence_nonterminal(name): A grammar rule has been entered.
        finish_nonterminal(name): The rule entered last has been fully recognized.
        insert_terminal(token): ``token`` was matched as a terminal.
        report_error(token, message): Fatal error at ``token``. Must not return.
    """

    def commence_nonterminal(self, name: str) -> None: ...

    def finish_nonterminal(self, name: str) -> None: ...

    def insert_terminal(self, token: Token) -> None: ...

    def report_error(self, token: Token, message: str) -> NoReturn: ...


class AbstractGenerate:
    """Shared behavior for the bundled sinks: debug logging and error raising.

    Subclasses override the ``_on_*`` hooks; the public methods keep the
    logging and the nesting depth consistent.
    """

    def __init__(self) -> None:
        self.depth = 0

    def commence_nonterminal(self, name: str) -> None:
        logger.debug("%sbegin %s", "  " * self.depth, name)
        self.depth += 1
        self._on_commence(name)

    def finish_nonterminal(self, name: str) -> None:
        self.depth -= 1
        logger.debug("%send %s", "  " * self.depth, name)
        self._on_finish(name)

    def insert_terminal(self, token: Token) -> None:
        logger.debug("%s%s", "  " * self.depth, token)
        self._on_terminal(token)

    def report_error(self, token: Token, message: str) -> NoReturn:
        logger.debug("error at %r: %s", token, message)
        raise CompilationError(message, token)

    def _on_commence(self, name: str) -> None:
        pass

    def _on_finish(self, name: str) -> None:
        pass

    def _on_terminal(self, token: Token) -> None:
        pass


class Generate(AbstractGenerate):
    """Builds a concrete parse tree from the event stream.

    Attributes:
        tree (ParseTreeNode): The root node, available once the outermost
            nonterminal has finished.
    """

    def __init__(self) -> None:
        super().__init__()
        self._stack: list[ParseTreeNode] = []
        self._root: ParseTreeNode | None = None

    @property
    def tree(self) -> ParseTreeNode:
        if self._root is None:
            raise RuntimeError("No complete parse tree has been generated")
        return self._root

    def _on_commence(self, name: str) -> None:
        self._stack.append(ParseTreeNode(name))

    def _on_finish(self, name: str) -> None:
        if not self._stack:
            raise RuntimeError(f"finish_nonterminal({name!r}) without matching commence")
        node = self._stack.pop()
        if node.kind != name:
            raise RuntimeError(
                f"finish_nonterminal({name!r}) does not match open nonterminal {node.kind!r}"
            )
        if node.children:
            node.line = node.children[0].line
        if self._stack:
            self._stack[-1].children.append(node)
        else:
            self._root = node

    def _on_terminal(self, token: Token) -> None:
        leaf = ParseTreeNode(token.symbol.display_name, token)
        if self._stack:
            self._stack[-1].children.append(leaf)
        elif self._root is not None:
            # Terminals after the outermost rule (end of file) hang off the root.
            self._root.children.append(leaf)
        else:
            raise RuntimeError(f"Terminal {token} inserted outside any nonterminal")


TraceEvent = Union[tuple[str, str], tuple[str, Token]]


class TraceRecorder(AbstractGenerate):
    """Records every event as ``("enter", name)``, ``("exit", name)`` or ``("accept", token)``."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[TraceEvent] = []

    def _on_commence(self, name: str) -> None:
        self.events.append(("enter", name))

    def _on_finish(self, name: str) -> None:
        self.events.append(("exit", name))

    def _on_terminal(self, token: Token) -> None:
        self.events.append(("accept", token))

    @property
    def accepted(self) -> list[Token]:
        """Tokens passed to insert_terminal, in call order."""
        return [event[1] for event in self.events if event[0] == "accept"]  # type: ignore[misc]

    def count(self, kind: str, name: str) -> int:
        return sum(1 for event in self.events if event == (kind, name))

    def format(self) -> str:
        """One line per event, indented by nesting depth."""
        lines = []
        depth = 0
        for kind, value in self.events:
            if kind == "exit":
                depth -= 1
            lines.append(f"{'  ' * depth}{kind} {value}")
            if kind == "enter":
                depth += 1
        return "\n".join(lines)
