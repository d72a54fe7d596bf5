#!/usr/bin/env python3
"""
Main entry point for the Knowledge-Base Assistant.

This script provides a command-line interface for the assistant.
"""

import argparse
import sys

from kb_assistant import KnowledgeBaseAssistant, KBError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Knowledge-base assistant with TF-IDF article recommendation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py import-sample                      # Load the sample articles
  python main.py search "vpn dns" --category vpn    # Search the article list
  python main.py recommend "my vpn won't connect"   # Suggest articles for a ticket
  python main.py                                    # Start interactive session
        """
    )

    parser.add_argument(
        "--store",
        type=str,
        default=None,
        help="Article JSON file (default: data/kb_articles.json)"
    )

    parser.add_argument(
        "--analytics",
        type=str,
        default=None,
        help="Analytics JSON file (default: data/kb_analytics.json)"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress messages"
    )

    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("list", help="List articles")
    p.add_argument("--category", default=None, help="Only articles with this tag")

    p = sub.add_parser("search", help="Search articles by title, tags and body")
    p.add_argument("text", help="Search text; any term may match")
    p.add_argument("--category", default=None, help="Only articles with this tag")

    p = sub.add_parser("recommend", help="Recommend articles for a ticket description")
    p.add_argument("text", help="Ticket description")
    p.add_argument("--explain", action="store_true", help="Print the score breakdown behind each result")

    for name, help_text in (("add", "Add an article"), ("edit", "Edit an article")):
        p = sub.add_parser(name, help=help_text)
        if name == "edit":
            p.add_argument("id", help="Article id")
        p.add_argument("--title", required=(name == "add"), default=None)
        p.add_argument("--tags", default=None, help="Comma separated tags")
        p.add_argument("--body", default=None)
        p.add_argument("--priority", type=int, default=None, help="Priority 0-100")
        p.add_argument("--difficulty", choices=["Low", "Medium", "High"], default=None)

    p = sub.add_parser("delete", help="Delete an article")
    p.add_argument("id", help="Article id")

    p = sub.add_parser("attach", help="Record an article as attached to a ticket")
    p.add_argument("id", help="Article id")

    sub.add_parser("import-sample", help="Append the sample articles")

    p = sub.add_parser("import", help="Append articles from a JSON file")
    p.add_argument("file")

    p = sub.add_parser("export", help="Write all articles to a JSON file")
    p.add_argument("file", nargs="?", default=None)

    p = sub.add_parser("suggest", help="Autocomplete titles and tags")
    p.add_argument("prefix")

    sub.add_parser("categories", help="List categories (tags)")
    sub.add_parser("analytics", help="Show usage analytics")
    sub.add_parser("stats", help="Show index statistics")
    sub.add_parser("interactive", help="Start interactive session")

    return parser


def run(assistant: KnowledgeBaseAssistant, args: argparse.Namespace) -> None:
    """Dispatch one parsed command."""
    formatter = assistant.result_formatter
    command = args.command or "interactive"

    if command == "list":
        formatter.print_document_list(assistant.search("", category=args.category))
    elif command == "search":
        results = assistant.search(args.text, category=args.category)
        formatter.print_document_list(results, assistant.tokenizer.split_search_terms(args.text))
    elif command == "recommend":
        results = assistant.recommend(args.text)
        formatter.print_recommendations(results, assistant.tokenizer.tokenize(args.text))
        if args.explain or assistant.config.VERBOSE:
            assistant.ranker.summarize_recommendations(results)
    elif command == "add":
        doc = assistant.create_document(args.title, args.tags or "", args.body or "",
                                        args.priority, args.difficulty)
        print(doc.id)
    elif command == "edit":
        assistant.update_document(args.id, title=args.title, tags=args.tags, body=args.body,
                                  priority=args.priority, difficulty=args.difficulty)
    elif command == "delete":
        assistant.delete_document(args.id)
    elif command == "attach":
        assistant.attach(args.id)
    elif command == "import-sample":
        assistant.import_samples()
    elif command == "import":
        assistant.import_file(args.file)
    elif command == "export":
        assistant.export_file(args.file)
    elif command == "suggest":
        for suggestion in assistant.suggest(args.prefix):
            print(suggestion)
    elif command == "categories":
        for category in assistant.categories():
            print(category)
    elif command == "analytics":
        formatter.print_analytics(assistant.analytics_report())
    elif command == "stats":
        print("\n=== Index Statistics ===")
        for key, value in assistant.get_stats().items():
            print(f"{key}: {value}")
        assistant.indexer.summarize_index(assistant.corpus_index())
    else:
        assistant.interactive_session()


def main(argv=None):
    """Main entry point for the assistant."""
    args = build_parser().parse_args(argv)

    try:
        assistant = KnowledgeBaseAssistant(
            store_path=args.store,
            analytics_path=args.analytics,
            config_dict={"VERBOSE": False} if args.quiet else None,
        )
    except Exception as e:
        print(f"Error initializing assistant: {e}")
        sys.exit(1)

    try:
        run(assistant, args)
    except KBError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nExiting.")


if __name__ == "__main__":
    main()
