"""
Result formatting and output processing.

Turns the priority-ordered result view into Markdown for the CLI and the
MCP server. Focused on output formatting concerns only.
"""

from .aggregator import ResultSection
from .types import ResultItem


class ResultFormatter:
    """Formats result sections as Markdown text."""

    def __init__(self, max_description: int = 200):
        self.max_description = max_description

    def format_item(self, index: int, item: ResultItem) -> str:
        """
        Format one result as a numbered Markdown entry.

        Args:
            index: 1-based position within the section
            item: Result item

        Returns:
            Markdown lines for the entry
        """
        line = f"{index}. [{item['title']}]({item['link']})"
        timestamp = item.get("timestamp")
        if timestamp is not None:
            line += f" ({timestamp:%Y-%m-%d})"

        description = item.get("description") or ""
        if description:
            if len(description) > self.max_description:
                description = description[: self.max_description - 3] + "..."
            line += f"\n   {description}"
        return line

    def format_section(self, section: ResultSection) -> str:
        """Format a provider section with its results or its error."""
        content = f"## {section.title}\n\n"
        if section.failed:
            content += f"> ⚠️ {section.error}\n"
        elif not section.items:
            content += "_No results_\n"
        else:
            content += "\n".join(
                self.format_item(i, item) for i, item in enumerate(section.items, 1)
            )
            content += "\n"
        return content

    def format_view(
        self,
        query: str,
        sections: tuple[ResultSection, ...] | list[ResultSection],
        elapsed: float | None = None,
    ) -> str:
        """
        Format the whole result view.

        Args:
            query: The submitted query
            sections: Sections in display order
            elapsed: Optional total time in seconds

        Returns:
            Markdown document
        """
        if not sections:
            return f"No results for '{query}'."

        parts = [f"# Results for '{query}'\n"]
        parts.extend(self.format_section(section) for section in sections)

        total = sum(len(section.items) for section in sections)
        failed = sum(1 for section in sections if section.failed)
        summary = f"Total results: {total} from {len(sections)} providers"
        if failed:
            summary += f" ({failed} failed)"
        if elapsed is not None:
            summary += f" | {int(elapsed * 1000)}ms"
        parts.append(summary)

        return "\n".join(parts)
