"""
Emitters that turn a SPRIG parse tree into printable text.

TextEmitter writes an indented outline in which nonterminals open and close
a level and terminals appear as leaves:

    begin StatementPart
      'begin'
      begin StatementList
        ...
      end StatementList
      'end'
    end StatementPart

JsonEmitter writes the nested `ParseTreeNode.to_dict` form.
"""

import json

from sprig.sprig_tree import ParseTreeNode


class TextEmitter:
    """Emits an indented outline of a parse tree.

    Attributes:
        lines (list[str]): Accumulated output lines.
        indent (int): Current nesting level.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "  " * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def emit_node(self, node: ParseTreeNode) -> None:
        if node.token is not None:
            self.emit_terminal(node)
        else:
            self.emit_nonterminal(node)

    def emit_terminal(self, node: ParseTreeNode) -> None:
        assert node.token is not None  # for mypy
        self.lines.append(f"{self.indent_str()}{node.token}")

    def emit_nonterminal(self, node: ParseTreeNode) -> None:
        self.lines.append(f"{self.indent_str()}begin {node.kind}")
        self.indent += 1
        for child in node.children:
            self.emit_node(child)
        self.indent -= 1
        self.lines.append(f"{self.indent_str()}end {node.kind}")


class JsonEmitter:
    """Emits a parse tree as indented JSON."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent
        self.nodes: list[ParseTreeNode] = []

    def emit_node(self, node: ParseTreeNode) -> None:
        self.nodes.append(node)

    def get_output(self) -> str:
        data = [n.to_dict() for n in self.nodes]
        return json.dumps(data[0] if len(data) == 1 else data, indent=self.indent)
