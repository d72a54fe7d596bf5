#!/usr/bin/env python3
"""
Example usage of the Knowledge-Base Assistant.

This script demonstrates how to use the assistant programmatically
against a throwaway article store.
"""

import sys
import tempfile
from pathlib import Path

# Add parent directory to path to import kb_assistant
sys.path.append(str(Path(__file__).parent.parent))

from kb_assistant import KnowledgeBaseAssistant


def make_assistant(workdir: Path) -> KnowledgeBaseAssistant:
    assistant = KnowledgeBaseAssistant(
        store_path=str(workdir / "kb.json"),
        analytics_path=str(workdir / "analytics.json"),
    )
    assistant.import_samples()
    assistant.create_document(
        "Printer offline after driver update",
        tags=["printer", "drivers"],
        body="Roll back the driver, clear the print queue and re-add the printer.",
        priority=70,
    )
    return assistant


def recommend_example(assistant: KnowledgeBaseAssistant):
    """Demonstrate ticket recommendations."""
    print("=== Recommend Example ===")

    tickets = [
        "my vpn won't connect since this morning",
        "forgot my password and the account is locked",
        "phone is not syncing email",
        "coffee machine broken",  # no shared words: fallback to top articles
    ]

    for ticket in tickets:
        print(f"\nTicket: '{ticket}'")
        results = assistant.recommend(ticket)
        assistant.result_formatter.print_recommendations(results, assistant.tokenizer.tokenize(ticket))


def search_example(assistant: KnowledgeBaseAssistant):
    """Demonstrate list search and category filtering."""
    print("\n=== Search Example ===")

    for text, category in [("dns", None), ("pass", None), ("network", "email"), ("", "vpn")]:
        print(f"\nSearch: '{text}'  category: {category or 'All'}")
        results = assistant.search(text, category=category)
        assistant.result_formatter.print_document_list(results, assistant.tokenizer.split_search_terms(text))

    print(f"\nSuggestions for 'pa': {assistant.suggest('pa')}")
    print(f"Categories: {assistant.categories()}")


def analytics_example(assistant: KnowledgeBaseAssistant):
    """Attach a few articles and show the analytics report."""
    print("\n=== Analytics Example ===")

    top = assistant.recommend("vpn keeps dropping")[0]
    assistant.attach(top.document.id)
    assistant.attach(top.document.id)
    assistant.result_formatter.print_analytics(assistant.analytics_report())

    stats = assistant.get_stats()
    print("\nIndex Statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


def main():
    """Run all examples."""
    print("Knowledge-Base Assistant - Example Usage")
    print("=" * 50)

    with tempfile.TemporaryDirectory() as tmp:
        assistant = make_assistant(Path(tmp))
        recommend_example(assistant)
        search_example(assistant)
        analytics_example(assistant)

    print("\n" + "=" * 50)
    print("All examples completed successfully!")


if __name__ == "__main__":
    main()
