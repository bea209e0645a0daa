"""Command-line front end: one-shot index/query runs and an interactive REPL.

Examples:
  findex --index docs,notes.txt --query hello,world
  findex -i docs -j 4 --repl
"""

# ruff: noqa: T201  # CLI intentionally prints operator feedback

from __future__ import annotations

import argparse
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
import sys
import textwrap
from typing import Any, TextIO

from pydantic import ValidationError

from findex import __version__
from findex.config import Settings
from findex.errors import ErrorKind
from findex.indexing import Indexer, InvertedIndex, available_tokenizers, expand_paths, get_tokenizer
from findex.indexing.engine import resolve_worker_count
from findex.observability import configure_logging, get_metrics, init_console_tracing


SUCCESSFUL_TERMINATION = 0
ERROR_TERMINATION = 1

REPL_USAGE = textwrap.indent(
    textwrap.dedent(
        """\
        to index: type in the word `index` (or simply `i`), space, and path to the file, e.g., index examples/hello_world.txt
        to query files containing a keyword: type in the word `query` (or simply `q`), space, and keyword, e.g., query hello
        to exit: type in exit
        """
    ),
    "  ",
)

PROMPT = "> "


def _split_csv(values: Sequence[str] | None) -> list[str]:
    # Items are kept verbatim: by-word tokens may be empty or carry spaces
    items: list[str] = []
    for value in values or []:
        items.extend(value.split(","))
    return items


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="findex",
        description="Index text files in memory and query which files contain a keyword",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """
            Examples:
              findex --index src/test/resources --query test,one,two
              findex -i notes.txt,docs -j 4 --repl
              FINDEX_TOKENIZER=regex-lower findex -i docs -q python
            """
        ).strip(),
    )
    parser.add_argument(
        "-i",
        "--index",
        dest="index",
        action="append",
        metavar="PATHS",
        help="Comma-separated list of paths to files or directories for indexing (repeatable)",
    )
    parser.add_argument(
        "-q",
        "--query",
        dest="query",
        action="append",
        metavar="KEYWORDS",
        help="Comma-separated list of keywords to query (repeatable)",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="Number of threads used to index files (default: FINDEX_JOBS or 1)",
    )
    parser.add_argument("-r", "--repl", action="store_true", help="Run as REPL")
    parser.add_argument(
        "-t",
        "--tokenizer",
        choices=available_tokenizers(),
        default=None,
        help="Tokenizer used to split file content (default: FINDEX_TOKENIZER or by-word)",
    )
    parser.add_argument(
        "--show-meta",
        action="store_true",
        help="Print the token metadata (e.g. occurrence count) next to each match",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: FINDEX_LOG_LEVEL or warning)")
    parser.add_argument("--json-logs", action="store_true", default=None, help="Emit structured JSON logs on stderr")
    parser.add_argument("--trace", action="store_true", default=None, help="Print OpenTelemetry spans on stderr")
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Print Prometheus metrics for the session before exiting",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


@dataclass
class CliOptions:
    """Resolved options after merging flags over settings."""

    paths: list[str]
    keywords: list[str]
    jobs: int
    repl: bool
    tokenizer: str
    show_meta: bool
    encoding: str
    index_shards: int


class FindexSession:
    """One indexing/query session bound to a single engine and worker pool."""

    def __init__(
        self,
        indexer: Indexer[Any, Any],
        executor: ThreadPoolExecutor,
        *,
        out: TextIO,
        show_meta: bool = False,
    ) -> None:
        self.indexer = indexer
        self.executor = executor
        self.out = out
        self.show_meta = show_meta

    def _print(self, message: str = "", **kwargs: Any) -> None:
        print(message, file=self.out, **kwargs)

    def index_paths(self, raw_paths: Sequence[str]) -> bool:
        """Expand, index and report ``raw_paths``. Returns False if anything failed."""
        discovery = expand_paths(raw_paths)
        for missing in discovery.missing:
            self._print(f"  Error: file or directory doesn't exist at path: {missing}")
        for error in discovery.errors:
            self._print(f"  Something went wrong when indexing a directory: {error}")

        result = self.indexer.index_many(discovery.files, executor=self.executor)
        for outcome in result:
            self._print(f"  Indexing file at path: {outcome.path}")
            if outcome.error_kind is ErrorKind.NOT_FOUND:
                self._print(f"  File for indexing not found at path {outcome.path}")
            elif outcome.error_kind is ErrorKind.UNSUPPORTED_INPUT:
                self._print(f"  Unsupported input at path {outcome.path}: {outcome.message}")
            elif not outcome.ok:
                self._print(f"  There was an internal error on reading file for indexing at path {outcome.path}")
        return not (discovery.missing or discovery.errors or result.failed)

    def query(self, keyword: str) -> None:
        associations = self.indexer.query(keyword)
        if not associations:
            self._print(f'  Couldn\'t find any files related to keyword "{keyword}"')
            return
        for assoc in associations:
            if self.show_meta:
                self._print(f"  Found in file: {assoc.path} ({assoc.meta})")
            else:
                self._print(f"  Found in file: {assoc.path}")

    def run_repl(self, stdin: TextIO) -> int:
        self._print("Read-Evaluate-Print Loop (REPL) started.\nYou can index or query keywords: \n" + REPL_USAGE, end="")
        self._print(PROMPT, end="", flush=True)
        for line in stdin:
            parts = line.rstrip("\r\n").split(" ")
            if len(parts) == 1 and parts[0] == "exit":
                return SUCCESSFUL_TERMINATION
            if len(parts) == 2 and parts[0] in ("query", "q"):
                self.query(parts[1])
            elif len(parts) == 2 and parts[0] in ("index", "i"):
                self.index_paths([parts[1]])
                self._print("  *** Indexing complete ***")
            else:
                self._print("Incorrect input\n" + REPL_USAGE, end="")
            self._print(PROMPT, end="", flush=True)
        self._print()
        return SUCCESSFUL_TERMINATION


def resolve_options(args: argparse.Namespace, settings: Settings) -> CliOptions:
    return CliOptions(
        paths=[path for path in _split_csv(args.index) if path],
        keywords=_split_csv(args.query),
        jobs=args.jobs if args.jobs is not None else settings.jobs,
        repl=args.repl,
        tokenizer=args.tokenizer or settings.tokenizer,
        show_meta=args.show_meta,
        encoding=settings.encoding,
        index_shards=settings.index_shards,
    )


def main(argv: Sequence[str] | None = None, *, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)
    out = stdout or sys.stdout

    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return ERROR_TERMINATION

    configure_logging(
        args.log_level or settings.log_level,
        json_output=args.json_logs if args.json_logs is not None else settings.log_json,
    )
    if args.trace or settings.tracing_enabled:
        init_console_tracing(settings.service_name)

    options = resolve_options(args, settings)
    workers, warning = resolve_worker_count(options.jobs)
    if warning:
        print(warning, file=out)

    indexer = Indexer(
        get_tokenizer(options.tokenizer),
        index=InvertedIndex(shards=options.index_shards),
        encoding=options.encoding,
    )

    exit_code = SUCCESSFUL_TERMINATION
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="findex-index") as executor:
        session = FindexSession(indexer, executor, out=out, show_meta=options.show_meta)

        if options.paths:
            print("Indexing started:", file=out)
            if not session.index_paths(options.paths):
                exit_code = ERROR_TERMINATION
            print("  *** Indexing complete ***", file=out)

        if options.keywords:
            if options.paths:
                for keyword in options.keywords:
                    print(f'Querying "{keyword}":', file=out)
                    session.query(keyword)
            else:
                print("Querying without indexing before will not yield any results.", file=out)

        if options.repl:
            session.run_repl(stdin or sys.stdin)

    if args.metrics:
        out.write(get_metrics().decode("utf-8"))

    return exit_code


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
