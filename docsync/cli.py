"""Command-line interface for docsync."""

import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional

from .config import DocSyncConfig, load_config
from .errors import ConfigError, UnknownItemError
from .io_utils import read_text, stable_json_dumps, write_text_stable
from .render import render_page
from .session import DocumentSession
from .tokenizer import tokenize
from .tree_model import TextRun


def _load_config(args: argparse.Namespace) -> DocSyncConfig:
    try:
        return load_config(Path(args.config) if args.config else None)
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc


def _open_session(args: argparse.Namespace) -> DocumentSession:
    path = Path(args.file)
    if not path.exists():
        raise SystemExit(f"Document not found: {path}")
    return DocumentSession(read_text(path), _load_config(args))


def _require_tree(session: DocumentSession, path: str) -> None:
    if session.tree is None:
        print(f"{path}: could not parse document ({session.result.error})", file=sys.stderr)
        raise SystemExit(1)


def _handle_tokens(args: argparse.Namespace) -> None:
    path = Path(args.file)
    if not path.exists():
        raise SystemExit(f"Document not found: {path}")
    tokens = tokenize(read_text(path))
    sys.stdout.write(stable_json_dumps([token.to_dict() for token in tokens]))


def _handle_parse(args: argparse.Namespace) -> None:
    session = _open_session(args)
    _require_tree(session, args.file)
    sys.stdout.write(stable_json_dumps(session.tree.to_dict()))


def _handle_locate(args: argparse.Namespace) -> None:
    session = _open_session(args)
    _require_tree(session, args.file)
    item = session.index.locate(args.offset)
    word = session.index.word_span(args.offset)
    payload = {
        "offset": args.offset,
        "item": None,
        "wordSpan": list(word) if word else None,
    }
    if item is not None:
        payload["item"] = {
            "id": item.id,
            "type": "text" if isinstance(item, TextRun) else "node",
            "span": list(item.span),
        }
    sys.stdout.write(stable_json_dumps(payload))


def _handle_edit(args: argparse.Namespace) -> None:
    session = _open_session(args)
    _require_tree(session, args.file)
    cursor = args.cursor if args.cursor is not None else len(args.text)
    try:
        new_text = session.edit_run(args.run_id, args.text, cursor)
    except UnknownItemError as exc:
        raise SystemExit(f"{args.file}: no text run with id {args.run_id} ({exc})") from exc

    if args.write:
        write_text_stable(Path(args.file), new_text)
        caret = session.take_caret()
        if caret is not None:
            print(f"Updated {args.file}; caret at run {caret.run_id}, offset {caret.cursor}")
        else:
            print(f"Updated {args.file}")
    else:
        sys.stdout.write(new_text)


def _handle_render(args: argparse.Namespace) -> None:
    session = _open_session(args)
    highlight = None
    if args.offset is not None:
        highlight = session.editor_moved(args.offset, 0.0).highlight
    page = render_page(session.result, title=Path(args.file).name, highlight=highlight)
    if args.out:
        write_text_stable(Path(args.out), page)
        print(f"Wrote preview to {args.out}")
    else:
        sys.stdout.write(page)
    if session.tree is None:
        raise SystemExit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docsync",
        description="Parse DocBook-style markup and map offsets between source and preview.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", help="Path to the markup document.")
    common.add_argument("--config", help="Optional YAML file with parser settings.")

    subparsers = parser.add_subparsers(dest="command")

    tokens_parser = subparsers.add_parser(
        "tokens",
        parents=[common],
        help="Dump the token stream as JSON.",
    )
    tokens_parser.set_defaults(func=_handle_tokens)

    parse_parser = subparsers.add_parser(
        "parse",
        parents=[common],
        help="Dump the parsed tree as JSON.",
        description="Parse the document and print the offset-annotated tree.",
    )
    parse_parser.set_defaults(func=_handle_parse)

    locate_parser = subparsers.add_parser(
        "locate",
        parents=[common],
        help="Show the text run or node at a source offset.",
    )
    locate_parser.add_argument("offset", type=int, help="Zero-based source offset.")
    locate_parser.set_defaults(func=_handle_locate)

    edit_parser = subparsers.add_parser(
        "edit",
        parents=[common],
        help="Replace the content of one text run.",
        description="Apply a preview-side edit to a text run and emit the revised source.",
    )
    edit_parser.add_argument("--run-id", dest="run_id", type=int, required=True, help="Id of the text run.")
    edit_parser.add_argument("--text", required=True, help="New content for the run.")
    edit_parser.add_argument("--cursor", type=int, help="Caret offset inside the new content.")
    edit_parser.add_argument(
        "--write",
        action="store_true",
        help="Write the revised source back to FILE instead of printing it.",
    )
    edit_parser.set_defaults(func=_handle_edit)

    render_parser = subparsers.add_parser(
        "render",
        parents=[common],
        help="Render an HTML preview page.",
    )
    render_parser.add_argument("--offset", type=int, help="Highlight the word at this source offset.")
    render_parser.add_argument("--out", help="Write the page to this path instead of stdout.")
    render_parser.set_defaults(func=_handle_render)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


__all__ = ["build_parser", "main"]
