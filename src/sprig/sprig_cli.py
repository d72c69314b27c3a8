"""
SPRIG CLI Entrypoint.

Command-line driver for the SPRIG front end: lex and parse one or more
programs, report the first syntax error of each, and optionally print the
parse tree or the raw event trace.

Example usage:
    sprig prog1.sprig prog2.sprig
    sprig -s "begin x := 1 end" --tree text
    sprig prog.sprig --tree json -o prog.json
    sprig prog.sprig --trace --right-nested

Functions:
    compile_source(source, source_name, options, sink) -> ParseTreeNode | None:
        Lex and parse program text, returning the parse tree when the sink builds one.

    compile_file(path, options, sink) -> ParseTreeNode | None:
        Same, reading the program from a file.

    main(argv) -> int:
        Parses CLI arguments, checks every input, and returns the exit status.
"""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from sprig.sprig_errors import CompilationError
from sprig.sprig_generate import EventSink, Generate, TraceRecorder
from sprig.sprig_lexer import CharacterStream, Lexer
from sprig.sprig_options import ParserOptions
from sprig.sprig_parser import SyntaxAnalyser
from sprig.sprig_render import TreeRenderer
from sprig.sprig_tree import ParseTreeNode

logger = logging.getLogger(__name__)


def _run(
    lexer: Lexer,
    source_name: str,
    options: ParserOptions | None,
    sink: EventSink | None,
) -> ParseTreeNode | None:
    if sink is None:
        sink = Generate()
    SyntaxAnalyser(lexer, sink, source_name, options).parse()
    return sink.tree if isinstance(sink, Generate) else None


def compile_source(
    source: str,
    source_name: str = "<string>",
    options: ParserOptions | None = None,
    sink: EventSink | None = None,
) -> ParseTreeNode | None:
    """
    Lex and parse SPRIG program text.

    Args:
        source (str): The program text.
        source_name (str): Name used in error messages.
        options (ParserOptions | None): Parser switches; defaults apply when None.
        sink (EventSink | None): Receiver of parse events. A fresh `Generate` when None.

    Returns:
        ParseTreeNode | None: The parse tree if ``sink`` is a `Generate`, else None.

    Raises:
        CompilationError: On the first syntax error.
    """
    return _run(Lexer(CharacterStream(source)), source_name, options, sink)


def compile_file(
    path: str | Path,
    options: ParserOptions | None = None,
    sink: EventSink | None = None,
) -> ParseTreeNode | None:
    """
    Lex and parse a SPRIG program file. The file name is used in error messages.

    Raises:
        OSError: If the file cannot be read.
        CompilationError: On the first syntax error.
    """
    return _run(Lexer.from_file(path), Path(path).name, options, sink)


def _check(args: argparse.Namespace, source: str, options: ParserOptions) -> str:
    """Parses one input and returns the text to print for it."""
    sink: Generate | TraceRecorder = TraceRecorder() if args.trace else Generate()
    if args.string:
        name = "<string>"
        compile_source(source, name, options, sink)
    else:
        name = Path(source).name
        compile_file(source, options, sink)
    logger.info("%s: ok", name)

    if isinstance(sink, TraceRecorder):
        return sink.format()
    if args.tree:
        return TreeRenderer(args.tree).render(sink.tree)
    return f"{name}: ok"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sprig", description="Check SPRIG programs against the grammar."
    )
    parser.add_argument(
        "sources", nargs="+", help="Program files, or program text with -s"
    )
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret sources as literal program text"
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--tree",
        choices=("text", "json"),
        help="Print the parse tree in the given format",
    )
    output.add_argument(
        "--trace", action="store_true", help="Print the raw enter/exit/accept event trace"
    )
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Defer errors for unmatched statement/factor/condition starts",
    )
    parser.add_argument(
        "--right-nested",
        action="store_true",
        help="Report each list tail as its own nested nonterminal",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Write output to a file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every parse event (DEBUG)"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point for the SPRIG CLI.

    Every source is checked even after a failure; the exit status is 1 if
    any of them failed, 0 otherwise.
    """
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    options = ParserOptions(lenient=args.lenient, right_nested=args.right_nested)

    outputs: list[str] = []
    failed = 0
    for source in args.sources:
        try:
            text = _check(args, source, options)
        except CompilationError as e:
            failed += 1
            print(e.message, file=sys.stderr)
            continue
        except OSError as e:
            failed += 1
            print(f"sprig: cannot read {source}: {e.strerror or e}", file=sys.stderr)
            continue
        except RecursionError:
            failed += 1
            print(f"sprig: {source}: program nested too deeply", file=sys.stderr)
            continue
        outputs.append(text)

    if args.out and outputs:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write("\n".join(outputs) + "\n")
    elif outputs:
        print("\n".join(outputs))

    if failed:
        logger.warning("%d of %d input(s) failed", failed, len(args.sources))
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
