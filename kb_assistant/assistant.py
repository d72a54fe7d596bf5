"""
Main KnowledgeBaseAssistant class that orchestrates the KB workflow.

This module contains the KnowledgeBaseAssistant class that coordinates
article storage, the relevance engine and the analytics log: create, edit,
delete and attach articles, browse and search the list, and recommend
articles for a ticket description.
"""

from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

import config
from .errors import DocumentNotFound, InvalidDocument, InvalidQuery
from .indexer import Indexer, IndexCache
from .models import Document, clamp_priority, generate_id, normalize_difficulty, normalize_tags
from .ranker import Ranker, Recommendation
from .search_filter import SearchFilter
from .store import JsonAnalyticsLog, JsonDocumentStore
from .tokenizer import Tokenizer
from .utils import ResultFormatter


class KnowledgeBaseAssistant:
    """
    Main assistant class that provides a unified interface to the knowledge base.

    Documents are loaded from the store for every operation, so the index
    always reflects the current document set; the index cache only skips
    rebuilds while nothing has changed.
    """

    def __init__(self, store_path: Optional[str] = None, analytics_path: Optional[str] = None,
                 config_dict: Optional[Dict] = None):
        """
        Initialize the KnowledgeBaseAssistant.

        Args:
            store_path: Path to the article JSON file. If None, uses config default.
            analytics_path: Path to the analytics JSON file. If None, uses config default.
            config_dict: Optional configuration dictionary to override defaults.
        """
        self.config = self._load_config(config_dict)

        self.store = JsonDocumentStore(store_path or self.config.STORE_PATH)
        self.analytics = JsonAnalyticsLog(analytics_path or self.config.ANALYTICS_PATH, self.config)

        # Initialize components
        self.tokenizer = Tokenizer(self.config)
        self.indexer = Indexer(self.config, self.tokenizer)
        self.index_cache = IndexCache(self.indexer, enabled=self.config.CACHE_INDEX)
        self.ranker = Ranker(self.config, self.indexer, self.index_cache)
        self.search_filter = SearchFilter(self.config, self.indexer, self.index_cache)
        self.result_formatter = ResultFormatter(self.config)

    def _load_config(self, config_dict: Optional[Dict]) -> Any:
        """Load configuration from config module, overridden by the provided dictionary."""
        if config_dict:
            class Config:
                def __init__(self, overrides):
                    for key in dir(config):
                        if key.isupper():
                            setattr(self, key, getattr(config, key))
                    for key, value in overrides.items():
                        setattr(self, key, value)
            return Config(config_dict)
        return config

    def _log(self, message: str) -> None:
        if self.config.VERBOSE:
            print(message)

    # ---- documents ----

    def list_documents(self) -> List[Document]:
        return self.store.list()

    def get_document(self, doc_id: str) -> Document:
        for doc in self.store.list():
            if doc.id == doc_id:
                return doc
        raise DocumentNotFound(f"KB not found: {doc_id}")

    def _find_index(self, documents: List[Document], doc_id: str) -> int:
        for i, doc in enumerate(documents):
            if doc.id == doc_id:
                return i
        raise DocumentNotFound(f"KB not found: {doc_id}")

    def create_document(self, title: str, tags: Iterable[str] = (), body: str = "",
                        priority: Any = None, difficulty: str = None) -> Document:
        """
        Create an article and store it at the front of the list.

        Args:
            title: Article title (required).
            tags: Tags, or a comma-separated tag string.
            body: Article text.
            priority: Priority 0-100; clamped.
            difficulty: Low, Medium or High.

        Returns:
            The new document.

        Raises:
            InvalidDocument: If the title is blank.
        """
        title = (title or "").strip()
        if not title:
            raise InvalidDocument("Please provide a title")

        doc = Document(
            id=generate_id(),
            title=title,
            tags=normalize_tags(list(tags) if not isinstance(tags, str) else tags),
            body=body or "",
            priority=self.config.DEFAULT_PRIORITY if priority is None else priority,
            difficulty=difficulty or self.config.DEFAULT_DIFFICULTY,
        )
        documents = self.store.list()
        documents.insert(0, doc)
        self.store.save(documents)
        self._log(f"Created KB {doc.id}: {doc.title}")
        return doc

    def update_document(self, doc_id: str, title: str = None, tags: Iterable[str] = None,
                        body: str = None, priority: Any = None, difficulty: str = None) -> Document:
        """
        Edit an article in place. Fields left as None are unchanged.

        usage_count and created_at are never changed by an edit.

        Raises:
            DocumentNotFound: If no article has ``doc_id``.
            InvalidDocument: If the new title is blank.
        """
        documents = self.store.list()
        doc = documents[self._find_index(documents, doc_id)]

        if title is not None:
            title = title.strip()
            if not title:
                raise InvalidDocument("Please provide a title")
            doc.title = title
        if tags is not None:
            doc.tags = normalize_tags(list(tags) if not isinstance(tags, str) else tags)
        if body is not None:
            doc.body = body
        if priority is not None:
            doc.priority = clamp_priority(priority)
        if difficulty is not None:
            doc.difficulty = normalize_difficulty(difficulty)

        self.store.save(documents)
        self._log(f"Updated KB {doc.id}")
        return doc

    def delete_document(self, doc_id: str) -> Document:
        """Remove an article permanently and return it."""
        documents = self.store.list()
        doc = documents.pop(self._find_index(documents, doc_id))
        self.store.save(documents)
        self._log(f"Deleted KB {doc.id}")
        return doc

    def attach(self, doc_id: str) -> Document:
        """
        Record that an article was attached to a ticket.

        Increments its usage count, sets last_used and logs the attach.
        """
        documents = self.store.list()
        doc = documents[self._find_index(documents, doc_id)]
        doc.record_use()
        self.store.save(documents)
        self.analytics.record_attach(doc.id, doc.title)
        self._log(f'Attached "{doc.title}".')
        return doc

    def import_samples(self) -> List[Document]:
        imported = self.store.import_samples()
        self._log(f"Imported {len(imported)} sample KBs")
        return imported

    def import_file(self, path) -> List[Document]:
        imported = self.store.import_from(path)
        self._log(f"Imported {len(imported)} KBs from {path}")
        return imported

    def export_file(self, path=None) -> int:
        path = path or self.config.EXPORT_FILENAME
        count = self.store.export_to(path)
        self._log(f"Exported {count} KBs to {path}")
        return count

    # ---- search and recommend ----

    def search(self, search_text: str = "", category: str = None) -> List[Document]:
        """
        Filter the article list by category and search text.

        Args:
            search_text: Free search text; blank keeps the stored order.
            category: Tag to filter by. If None, uses "All".

        Returns:
            Matching documents, ranked by similarity when searching.
        """
        if category is None:
            category = self.config.ALL_CATEGORIES
        term = (search_text or "").strip().lower()
        if term:
            self.analytics.record_search(term)
        return self.search_filter.filter_and_rank(self.store.list(), category, term)

    def recommend(self, ticket_text: str, weights: Optional[Dict[str, float]] = None) -> List[Recommendation]:
        """
        Recommend articles for a ticket description and log the result ids.

        Raises:
            InvalidQuery: If the ticket text is blank.
        """
        if not isinstance(ticket_text, str) or not ticket_text.strip():
            raise InvalidQuery("Paste a ticket description first.")
        ticket_text = ticket_text.strip()
        documents = self.store.list()
        if not documents:
            self._log("No KBs available. Import sample KBs first.")
            return []

        results = self.ranker.recommend(ticket_text, documents, weights)
        self.analytics.record_recommend(ticket_text, [r.document.id for r in results][:self.config.MAX_RECOMMENDATIONS])
        return results

    def suggest(self, prefix: str) -> List[str]:
        return self.search_filter.suggest(self.store.list(), prefix)

    def categories(self) -> List[str]:
        return self.search_filter.category_options(self.store.list())

    # ---- reporting ----

    def analytics_report(self) -> Dict[str, Any]:
        """
        Summarize article usage and the analytics log.

        Returns:
            Dictionary with total_documents, total_attaches, top_documents,
            top_search_tokens, recent_recommends and recent_attaches.
        """
        documents = self.store.list()
        log = self.analytics.load()
        titles = {doc.id: doc.title for doc in documents}

        top_documents = sorted(documents, key=lambda d: d.usage_count, reverse=True)
        term_counts = Counter()
        for entry in log["searches"]:
            term_counts.update(self.tokenizer.split_search_terms(entry.get("term")))

        recent_recommends = []
        for entry in log["recommends"][:self.config.RECENT_EVENTS]:
            recent_recommends.append({
                "ts": entry.get("ts", ""),
                "ticket": entry.get("ticket", ""),
                "titles": [titles.get(doc_id, "?") for doc_id in entry.get("top") or []],
            })

        return {
            "total_documents": len(documents),
            "total_attaches": sum(doc.usage_count for doc in documents),
            "top_documents": top_documents[:self.config.TOP_USAGE_DOCUMENTS],
            "top_search_tokens": term_counts.most_common(self.config.TOP_SEARCH_TOKENS),
            "recent_recommends": recent_recommends,
            "recent_attaches": log["attaches"][:self.config.RECENT_EVENTS],
        }

    def corpus_index(self):
        """Return the index for the current document set."""
        return self.index_cache.get(self.store.list())

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the knowledge base and its index.

        Returns:
            Dictionary containing various statistics.
        """
        documents = self.store.list()
        # Read before get(), which always leaves the cache warm
        index_cached = self.index_cache.is_warm
        index = self.index_cache.get(documents)
        return {
            "num_documents": len(documents),
            "num_tokens": index.vocabulary_size,
            "num_categories": len(self.categories()) - 1,
            "index_cached": index_cached,
            "index_builds": self.index_cache.builds,
            "avg_body_length": sum(len(d.body) for d in documents) / len(documents) if documents else 0,
        }

    def interactive_session(self) -> None:
        """
        Start an interactive session.

        Lines starting with '?' are ticket descriptions to recommend for;
        anything else searches the list. Type 'exit' or 'quit' to end.
        """
        print("\n=== Interactive KB Assistant ===")
        print("Type a search, '? <ticket text>' for recommendations, or 'exit' to quit.")

        while True:
            try:
                line = input("kb> ").strip()
            except (EOFError, KeyboardInterrupt):
                print("\nExiting.")
                break

            if not line:
                continue
            if line.lower() in ("exit", "quit"):
                print("Goodbye!")
                break

            if line.startswith("?"):
                ticket = line[1:].strip()
                try:
                    results = self.recommend(ticket)
                except InvalidQuery as e:
                    print(e)
                    continue
                self.result_formatter.print_recommendations(results, self.tokenizer.tokenize(ticket))
            else:
                results = self.search(line)
                self.result_formatter.print_document_list(results, self.tokenizer.split_search_terms(line))
