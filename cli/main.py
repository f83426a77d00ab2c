"""
Federated Search - Command Line Entry Point

Searches every configured provider concurrently and prints the merged,
priority-ordered results.
"""

import argparse
import asyncio
import sys
import time
from collections.abc import AsyncIterator
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from federated_search import InputEvent, setup_logging  # noqa: E402
from federated_search.aggregator import (  # noqa: E402
    AppendSection,
    ClearResults,
    CriticalNotice,
    RecordingRenderSink,
    RenderInstruction,
)
from federated_search.errors import ConfigurationError  # noqa: E402
from federated_search.factory import create_session  # noqa: E402
from federated_search.formatter import ResultFormatter  # noqa: E402
from federated_search.normalizer import InputEventKind  # noqa: E402
from federated_search.settings import get_settings  # noqa: E402


class ConsoleRenderSink(RecordingRenderSink):
    """Prints sections as they arrive, in addition to recording them."""

    def render(self, instruction: RenderInstruction) -> None:
        super().render(instruction)
        if isinstance(instruction, ClearResults):
            print("=" * 50)
        elif isinstance(instruction, AppendSection):
            section = instruction.section
            if section.failed:
                print(f"❌ {section.title}: {section.error}")
            else:
                print(f"✅ {section.title}: {len(section.items)} results")
        elif isinstance(instruction, CriticalNotice):
            print(f"🚨 {instruction.message}", file=sys.stderr)


async def read_lines() -> AsyncIterator[InputEvent]:
    """Yield every stdin line as a submitted query until EOF."""
    while True:
        line = await asyncio.to_thread(sys.stdin.readline)
        if not line:
            return
        yield InputEvent(text=line.rstrip("\n"), kind=InputEventKind.KEY_COMMIT)


async def main():
    """
    Run federated search with a user-provided query or interactive input
    """
    parser = argparse.ArgumentParser(
        description="Federated Search Dispatcher",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python cli/main.py "asyncio cancellation"
  python cli/main.py --interactive
        """,
    )
    parser.add_argument("query", nargs="?", help="Query to search for")
    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Read queries from stdin, one per line",
    )

    args = parser.parse_args()
    if not args.query and not args.interactive:
        parser.error("a query is required unless --interactive is given")

    settings = get_settings()
    setup_logging(settings.log_dir)

    sink = ConsoleRenderSink()
    try:
        session, discovery = create_session(sink, settings)
    except ConfigurationError as e:
        print(f"🚨 {e}", file=sys.stderr)
        return 1
    formatter = ResultFormatter()

    print("🔍 Federated Search")
    print("=" * 50)

    try:
        if not await session.start(discovery):
            return 1

        providers = ", ".join(p.title for p in session.registry.list())
        print(f"📋 Providers: {providers}")

        if args.interactive:
            await session.run(read_lines())
            cycle = session.dispatcher.cycle
            if cycle is not None:
                print(formatter.format_view(cycle.token.text, sink.sections))
            return 0

        start = time.monotonic()
        sections = await session.search(args.query)
        elapsed = time.monotonic() - start
        print(formatter.format_view(args.query, sections, elapsed))
        return 0

    except Exception as e:
        print(f"❌ Error during search: {e}")
        return 1

    finally:
        await session.aclose()
        await session.client.aclose()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
