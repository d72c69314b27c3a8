"""
Parse tree node structure for the SPRIG language.

Classes:
    ParseTreeNode:
        A node of the concrete parse tree assembled by `Generate` from parser
        events. Interior nodes are nonterminals; leaves carry the accepted token.

    NodeDict:
        TypedDict form of a node, suitable for JSON output.

Each ParseTreeNode tracks:
    kind (str): Nonterminal name (e.g. "Expression") or terminal symbol name (e.g. ":=").
    token (Token, optional): The accepted token, for terminal leaves.
    children (list[ParseTreeNode]): Child nodes in source order.
    line (int): Source line of the first token beneath this node.
"""

from collections.abc import Iterator
from typing import Any, TypedDict

from sprig.sprig_lexer import Token


class NodeDict(TypedDict, total=False):
    kind: str
    text: str
    line: int
    children: list["NodeDict"]


class ParseTreeNode:
    """
    A node in the concrete parse tree.

    Args:
        kind (str): Nonterminal or terminal name.
        token (Token, optional): The token for a terminal leaf.
        children (list[ParseTreeNode], optional): Child nodes.
        line (int): Source line number (default taken from ``token``, else 0).
    """

    def __init__(
        self,
        kind: str,
        token: Token | None = None,
        children: list["ParseTreeNode"] | None = None,
        line: int | None = None,
    ):
        self.kind = kind
        self.token = token
        self.children: list["ParseTreeNode"] = children or []
        if line is None:
            line = token.line if token is not None else 0
        self.line = line

    @property
    def is_terminal(self) -> bool:
        return self.token is not None

    def __repr__(self) -> str:
        parts = [self.kind]
        if self.token is not None:
            parts.append(f"text={self.token.text!r}")
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"ParseTreeNode({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ParseTreeNode):
            return False
        return (
            self.kind == other.kind
            and self.token == other.token
            and self.line == other.line
            and self.children == other.children
        )

    def walk(self) -> Iterator["ParseTreeNode"]:
        """Yields this node and every descendant, depth first in source order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def terminals(self) -> list[Token]:
        """Returns the tokens of all terminal leaves in source order."""
        return [node.token for node in self.walk() if node.token is not None]

    def to_dict(self) -> NodeDict:
        result: NodeDict = {"kind": self.kind, "line": self.line}
        if self.token is not None:
            result["text"] = self.token.text
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result
