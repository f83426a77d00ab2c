"""
Federated Search MCP Server Implementation

Provides MCP tools for searching all configured providers at once.
"""

import sys
import time
from pathlib import Path

from mcp.server.fastmcp import FastMCP

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from federated_search import RecordingRenderSink, setup_logging  # noqa: E402
from federated_search.errors import ConfigurationError  # noqa: E402
from federated_search.factory import create_session  # noqa: E402
from federated_search.formatter import ResultFormatter  # noqa: E402
from federated_search.settings import get_settings  # noqa: E402

# Create the FastMCP server instance
mcp = FastMCP("Federated Search")

# Note: No global session - each call gets a fresh session so that the
# quiet window and provider state of one call never affect another
formatter = ResultFormatter()


@mcp.tool()
async def list_providers() -> str:
    """
    <tool_description>
    List the search providers available to federated_search, in display order.
    </tool_description>

    Returns:
        One line per provider with its name, title and priority
    """
    setup_logging(get_settings().log_dir)
    sink = RecordingRenderSink()
    try:
        session, discovery = create_session(sink)
    except ConfigurationError as e:
        return f"Error: {e}"
    try:
        if not await session.start(discovery):
            return f"Error: {sink.notices[0]}"

        lines = [
            f"- {p.title} ({p.name}) priority {p.priority}"
            for p in session.registry.list()
        ]
        return "Available providers:\n\n" + "\n".join(lines)
    finally:
        await session.aclose()
        await session.client.aclose()


@mcp.tool()
async def federated_search(query: str) -> str:
    """
    <tool_description>
    Search every configured provider concurrently and return the merged results.
    </tool_description>

    <tool_usage_guidelines>
    Results are grouped by provider and ordered by provider priority. A
    provider that fails shows its error without affecting the others.
    Queries shorter than the configured minimum length are ignored.
    </tool_usage_guidelines>

    Args:
        query: The search query string

    Returns:
        Markdown document with one section per provider
    """
    setup_logging(get_settings().log_dir)
    sink = RecordingRenderSink()
    try:
        session, discovery = create_session(sink)
    except ConfigurationError as e:
        return f"Error: {e}"
    try:
        if not await session.start(discovery):
            return f"Error: {sink.notices[0]}"

        start = time.monotonic()
        sections = await session.search(query)
        elapsed = time.monotonic() - start
        if not sections and len(query.strip()) < session.normalizer.min_length:
            return (
                f"Query '{query}' is too short. Use at least "
                f"{session.normalizer.min_length} characters."
            )
        return formatter.format_view(query, sections, elapsed)
    except Exception as e:
        return f"Error searching providers: {str(e)}"
    finally:
        await session.aclose()
        await session.client.aclose()


if __name__ == "__main__":
    mcp.run()
