"""
Console formatting for articles, recommendations and analytics.

This module contains helpers for highlighting matched words, trimming
article bodies into excerpts, and rendering result tables.
"""

import re
from typing import Any, Dict, List

from .models import Document
from .ranker import Recommendation


class ResultFormatter:
    """Handles result formatting and display."""

    def __init__(self, config):
        """Initialize with configuration."""
        self.config = config

    def _format_tokens(self, tokens: List[str], maxn: int = 12) -> str:
        """
        Return tokens as a compact string; truncate long lists with an ellipsis.

        Args:
            tokens: List of tokens to format.
            maxn: Maximum number of tokens to show.

        Returns:
            Formatted token string.
        """
        if len(tokens) <= maxn:
            return "[" + ", ".join(tokens) + "]"
        head = ", ".join(tokens[:maxn//2])
        tail = ", ".join(tokens[-maxn//2:])
        return "[" + head + ", …, " + tail + "]"

    def highlight_words(self, text: str, words: List[str]) -> str:
        """
        Console-safe highlighter: wraps whole-word matches with [[ ]].

        Args:
            text: Text to highlight.
            words: List of words to highlight.

        Returns:
            Highlighted text.
        """
        if not words or not text:
            return text or ""

        # Deduplicate and sort longer-first to avoid partial overshadowing
        uniq = sorted({w for w in words if w}, key=len, reverse=True)
        if not uniq:
            return text

        def repl(match):
            return f"{self.config.HIGHLIGHT_START}{match.group(0)}{self.config.HIGHLIGHT_END}"

        patterns = [r"\b" + re.escape(w) + r"\b" for w in uniq]
        flags = re.IGNORECASE if not self.config.HIGHLIGHT_CASE_SENSITIVE else 0
        regex = re.compile("|".join(patterns), flags=flags)
        return regex.sub(repl, text)

    def make_excerpt(self, body: str, words: List[str] = None, max_chars: int = None) -> str:
        """
        Trim an article body to max_chars, then highlight words.

        Args:
            body: Article body.
            words: Words to highlight in the excerpt.
            max_chars: Maximum characters before highlighting.

        Returns:
            Single-line excerpt, with a trailing ellipsis when trimmed.
        """
        if max_chars is None:
            max_chars = self.config.EXCERPT_CHARS
        body = (body or "").replace("\n", " ")
        excerpt = body[:max_chars] + ("…" if len(body) > max_chars else "")
        return self.highlight_words(excerpt, words or [])

    def print_document_list(self, documents: List[Document], words: List[str] = None) -> None:
        """
        Print the browsing list view.

        Args:
            documents: Documents in display order.
            words: Words to highlight in titles and excerpts.
        """
        if not documents:
            print("No KB articles match your search/category. Try other keywords or clear the search.")
            return

        for doc in documents:
            print(f"\n{self.highlight_words(doc.title, words or [])}  ({doc.id})")
            tags = ", ".join(doc.tags) if doc.tags else "-"
            print(f"  Tags: {tags} • Uses: {doc.usage_count} • Priority: {doc.priority} "
                  f"• Difficulty: {doc.difficulty}")
            excerpt = self.make_excerpt(doc.body, words)
            if excerpt:
                print(f"  {excerpt}")

    def print_recommendations(self, recommendations: List[Recommendation], query_tokens: List[str] = None) -> None:
        """
        Render recommendations as a clean ASCII table.

        Args:
            recommendations: Ranked recommendations.
            query_tokens: Tokens used for the query.
        """
        if not recommendations:
            print("No recommendations found.")
            return

        rows = []
        for rank, rec in enumerate(recommendations, start=1):
            rows.append([
                str(rank),
                rec.document.id,
                f"{rec.score * 100:.1f}%",
                f"{rec.similarity * 100:.1f}%",
                f"{rec.usage_boost * 100:.1f}%",
                f"{rec.priority_boost * 100:.0f}%",
                rec.document.title,
            ])

        headers = ["#", "ID", "Score", "Similarity", "Usage", "Priority", "Title"]
        max_widths = [3, 12, 7, 10, 7, 8, 60]
        col_widths = []
        for j, h in enumerate(headers):
            width = len(h)
            for row in rows:
                width = max(width, len(row[j]))
            col_widths.append(min(width, max_widths[j]))

        def clip_pad(s, w):
            if len(s) > w:
                return s[: max(0, w - 1)] + "…" if w >= 2 else s[:w]
            return s.ljust(w)

        print("\n=== Recommended KBs ===")
        print(" | ".join(clip_pad(h, col_widths[i]) for i, h in enumerate(headers)))
        print("-+-".join("-" * col_widths[i] for i in range(len(headers))))
        for row in rows:
            print(" | ".join(clip_pad(row[i], col_widths[i]) for i in range(len(headers))))

        if query_tokens is not None:
            print(f"\n(query tokens used: {self._format_tokens(query_tokens, maxn=12)})\n")

    def print_analytics(self, report: Dict[str, Any]) -> None:
        """
        Print the analytics report built by the assistant.

        Args:
            report: Output of KnowledgeBaseAssistant.analytics_report().
        """
        print("\n=== KB Analytics ===")
        print(f"Total KBs: {report['total_documents']}")
        print(f"Total attaches (usage count sum): {report['total_attaches']}")

        print("\nTop KBs (by usage)")
        for i, doc in enumerate(report["top_documents"], start=1):
            print(f"  {i}. {doc.title} - uses: {doc.usage_count} - priority: {doc.priority}")

        print("\nTop search tokens")
        for i, (token, count) in enumerate(report["top_search_tokens"], start=1):
            print(f"  {i}. {token} - {count}")

        print("\nRecent recommendation queries")
        for rec in report["recent_recommends"]:
            print(f"  {rec['ts']} - {rec['ticket']} => [{', '.join(rec['titles'])}]")

        print("\nRecent attaches")
        for att in report["recent_attaches"]:
            print(f"  {att['ts']} - {att['title']}")
