"""
Live list filtering for the knowledge base.

This module handles the category (tag) filter, the multi-term OR substring
search, similarity re-ranking of search hits, and title/tag autocomplete
suggestions.
"""

from typing import List, Optional, Sequence

from rapidfuzz import fuzz

import config
from .indexer import IndexCache, Indexer
from .models import Document
from .ranker import build_query_vector, cosine_similarity


class SearchFilter:
    """Handles category filtering, substring search and suggestion lookup."""

    def __init__(self, config, indexer: Optional[Indexer] = None, index_cache: Optional[IndexCache] = None):
        """Initialize with configuration."""
        self.config = config
        self.indexer = indexer or Indexer(config)
        self.tokenizer = self.indexer.tokenizer
        self.index_cache = index_cache

    def _is_all(self, category: Optional[str]) -> bool:
        return not category or category == self.config.ALL_CATEGORIES

    def filter_by_category(self, documents: Sequence[Document], category: Optional[str]) -> List[Document]:
        """Keep documents tagged with ``category`` (case-insensitive); "All" keeps everything."""
        if self._is_all(category):
            return list(documents)
        return [doc for doc in documents if doc.has_tag(category)]

    def filter_and_rank(self, documents: Sequence[Document], category: Optional[str],
                        search_text: Optional[str]) -> List[Document]:
        """
        Filter documents for the browsing list and rank search hits.

        Without search terms the category-filtered documents keep their
        original order. With search terms a document is kept when any term
        occurs as a substring of its title, tags or body, and the kept set
        is ordered by cosine similarity to the joined terms.

        Args:
            documents: Full document set, in store order.
            category: Tag to filter by, or "All".
            search_text: Free search text.

        Returns:
            Ordered list of matching documents; empty when nothing matches.
        """
        candidates = self.filter_by_category(documents, category)
        terms = self.tokenizer.split_search_terms(search_text)
        if not terms:
            return candidates

        hits = []
        for doc in candidates:
            hay = doc.search_text.lower()
            if any(term in hay for term in terms):
                hits.append(doc)
        if not hits:
            return []

        # IDF comes from the whole corpus, not just the filtered hits
        if self.index_cache is not None:
            index = self.index_cache.get(documents)
        else:
            index = self.indexer.build_index(documents)
        q_vec = build_query_vector(self.tokenizer.tokenize(" ".join(terms)), index)

        ranked = [(doc, cosine_similarity(q_vec, index.vector_for(doc.id))) for doc in hits]
        ranked.sort(key=lambda x: x[1], reverse=True)
        return [doc for doc, _ in ranked]

    def suggest(self, documents: Sequence[Document], prefix: Optional[str], limit: int = None) -> List[str]:
        """
        Autocomplete suggestions from titles and tags.

        Only titles and tags that contain ``prefix`` (case-insensitive) are
        candidates; the closest whole-string matches come first, then
        those where the prefix occurs earliest.

        Args:
            documents: Documents to draw suggestions from.
            prefix: Text typed so far.
            limit: Maximum number of suggestions.

        Returns:
            List of suggestion strings.
        """
        if limit is None:
            limit = self.config.MAX_SUGGESTIONS
        if not isinstance(prefix, str) or not prefix.strip():
            return []
        p = prefix.strip().lower()

        seen = set()
        candidates = []
        for doc in documents:
            for text in [doc.title] + doc.tags:
                if text and p in text.lower() and text not in seen:
                    seen.add(text)
                    candidates.append(text)

        candidates.sort(key=lambda t: (-fuzz.ratio(p, t.lower()), t.lower().find(p)))
        return candidates[:limit]

    def category_options(self, documents: Sequence[Document]) -> List[str]:
        """Return "All" followed by the sorted distinct tags."""
        tags = set()
        for doc in documents:
            tags.update(doc.tags)
        return [self.config.ALL_CATEGORIES] + sorted(tags)


_default_filter = SearchFilter(config)


def filter_and_rank(documents: Sequence[Document], category: Optional[str],
                    search_text: Optional[str]) -> List[Document]:
    """Filter and rank documents with the default configuration."""
    return _default_filter.filter_and_rank(documents, category, search_text)
