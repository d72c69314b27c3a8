"""
Provides the `TreeRenderer` class and emitter interface for printing SPRIG parse trees.

Classes and Features:
    - Emitter (Protocol): Interface for all output emitters. Requires `__init__`,
      `emit_node` and `get_output`.
    - TextEmitter: Indented outline, one node per line.
    - JsonEmitter: The tree as JSON, via `ParseTreeNode.to_dict`.
    - TreeRenderer: Selects the emitter for a target ("text", "json") and feeds it the tree.

Example:
    >>> renderer = TreeRenderer("text")
    >>> output = renderer.render(sink.tree)

Raises:
    ValueError: If the target is not supported.
    TypeError: If the input is not a ParseTreeNode.
"""

from typing import Protocol

from sprig.emitters.tree_emitter import JsonEmitter, TextEmitter
from sprig.sprig_tree import ParseTreeNode


class Emitter(Protocol):  # pragma: no cover
    """Protocol for all parse tree emitters."""

    def __init__(self) -> None: ...  # pragma: no cover

    def emit_node(self, node: ParseTreeNode) -> None: ...  # pragma: no cover

    def get_output(self) -> str: ...  # pragma: no cover


EmitterType = type[Emitter]
"""Alias for a concrete Emitter class type."""


class TreeRenderer:
    """Dispatches a parse tree to the emitter for the chosen output format.

    Attributes:
        emitter_type (EmitterType): The emitter class for the chosen format.
        emitter (Emitter): The emitter used by the most recent render.
    """

    def __init__(self, target: str) -> None:
        """
        Args:
            target: The desired output format ("text" or "json").

        Raises:
            ValueError: If the target is not supported.
        """
        emitters: dict[str, EmitterType] = {
            "text": TextEmitter,
            "txt": TextEmitter,
            "json": JsonEmitter,
        }
        target = target.lower()
        if target not in emitters:
            raise ValueError(f"Unknown output format: {target!r}")
        self.emitter_type = emitters[target]
        self.emitter: Emitter = self.emitter_type()

    def render(self, tree: ParseTreeNode) -> str:
        """Renders ``tree`` with a fresh emitter, so repeated calls do not accumulate.

        Raises:
            TypeError: If ``tree`` is not a ParseTreeNode.
        """
        if not isinstance(tree, ParseTreeNode):
            raise TypeError("Can only render ParseTreeNode instances.")
        self.emitter = self.emitter_type()
        self.emitter.emit_node(tree)
        return self.emitter.get_output()
