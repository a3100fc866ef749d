# evidencemesh/cli.py
import asyncio
import logging
import sys
from typing import Annotated

import cyclopts

from evidencemesh.agents.summarize import summarize_papers
from evidencemesh.ask import ask as do_ask
from evidencemesh.export import get_exporter
from evidencemesh.fetch import NetworkError
from evidencemesh.search import resilient_search

# Exit status when a question finds no papers, distinct from errors (1).
NOT_FOUND_EXIT = 2

app = cyclopts.App(
    name="evidencemesh",
    help="Answer health and nutrition questions from peer-reviewed literature.",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(name="search")
def search(
    question: Annotated[str, cyclopts.Parameter(help="Natural-language question")],
    format: Annotated[
        str,
        cyclopts.Parameter(name=["--format", "-f"], help="Output format: tree, json"),
    ] = "tree",
    summarize: Annotated[
        bool,
        cyclopts.Parameter(name="--summarize", help="Summarize the papers found"),
    ] = False,
    verbose: Annotated[
        bool,
        cyclopts.Parameter(name=["--verbose", "-v"], help="Log search progress"),
    ] = False,
) -> None:
    """Find the most relevant papers for a question."""
    _configure_logging(verbose)
    try:
        exporter = get_exporter(format)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        result = asyncio.run(resilient_search(question))
    except NetworkError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not result.found:
        print("No relevant research papers found for this query.", file=sys.stderr)
        print(f"Tried: {', '.join(repr(q) for q in result.attempts)}", file=sys.stderr)
        sys.exit(NOT_FOUND_EXIT)

    print(exporter.to_string(result))

    if result.reformulated:
        print(f"\nQuery was reformulated: {result.reformulated!r}", file=sys.stderr)
    print(f"\nTotal: {len(result.papers)} papers", file=sys.stderr)

    if summarize:
        try:
            summary = asyncio.run(summarize_papers(question, result.papers))
        except RuntimeError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"\n{summary}")


@app.command(name="ask")
def ask(
    question: Annotated[str, cyclopts.Parameter(help="Natural-language question")],
    format: Annotated[
        str,
        cyclopts.Parameter(name=["--format", "-f"], help="Output format: tree, json"),
    ] = "tree",
    verbose: Annotated[
        bool,
        cyclopts.Parameter(name=["--verbose", "-v"], help="Log search progress"),
    ] = False,
) -> None:
    """Decompose a question, search each part and summarize the evidence."""
    _configure_logging(verbose)
    try:
        exporter = get_exporter(format)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        answer = asyncio.run(do_ask(question))
    except (NetworkError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(exporter.to_string(answer))
    if not answer.found:
        sys.exit(NOT_FOUND_EXIT)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
