"""
Document ranking and scoring module.

This module handles query vectors, cosine similarity between normalized
sparse vectors, and the composite recommendation score that blends
similarity with usage and priority signals.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import config
from .errors import InvalidQuery
from .indexer import CorpusIndex, Indexer, IndexCache, SparseVector, normalize_vector, sublinear_tf
from .models import Document, clamp_priority, coerce_usage
from .tokenizer import Tokenizer


def cosine_similarity(vec_a: Optional[SparseVector], vec_b: Optional[SparseVector]) -> float:
    """
    Cosine similarity of two L2-normalized sparse vectors.

    Since both vectors are normalized this is a plain dot product over the
    shared tokens. Empty vectors yield 0.
    """
    if not vec_a or not vec_b:
        return 0.0
    # Iterate the smaller vector
    if len(vec_a) > len(vec_b):
        vec_a, vec_b = vec_b, vec_a
    dot = 0.0
    for tok, w in vec_a.items():
        other = vec_b.get(tok)
        if other is not None:
            dot += w * other
    # Rounding can push identical vectors a hair above 1
    return min(dot, 1.0)


def build_query_vector(tokens: List[str], index: CorpusIndex) -> SparseVector:
    """
    Build a normalized TF-IDF vector for query tokens against the corpus IDF.

    Tokens absent from the corpus have idf 0 and are dropped.
    """
    counts: Dict[str, int] = {}
    for tok in tokens:
        counts[tok] = counts.get(tok, 0) + 1
    weights = {}
    for tok, c in counts.items():
        w = sublinear_tf(c) * index.idf(tok)
        if w != 0.0:
            weights[tok] = w
    return normalize_vector(weights)


@dataclass
class Recommendation:
    """One ranked document with the signals behind its score."""
    document: Document
    similarity: float
    usage_boost: float
    priority_boost: float
    score: float


class Ranker:
    """Handles recommendation ranking using TF-IDF similarity, usage and priority."""

    def __init__(self, config, indexer: Optional[Indexer] = None, index_cache: Optional[IndexCache] = None):
        """Initialize with configuration."""
        self.config = config
        self.indexer = indexer or Indexer(config)
        self.tokenizer: Tokenizer = self.indexer.tokenizer
        self.index_cache = index_cache

    def default_weights(self) -> Dict[str, float]:
        return {
            "alpha": self.config.SIMILARITY_WEIGHT,
            "beta": self.config.USAGE_WEIGHT,
            "gamma": self.config.PRIORITY_WEIGHT,
        }

    def current_index(self, documents: Sequence[Document]) -> CorpusIndex:
        """Return an index matching ``documents``, rebuilding unless the cache proves it unchanged."""
        if self.index_cache is not None:
            return self.index_cache.get(documents)
        return self.indexer.build_index(documents)

    def query_vector(self, text: str, index: CorpusIndex) -> SparseVector:
        """
        Tokenize ``text`` and build its vector against the corpus IDF.

        Args:
            text: Query or ticket text.
            index: Current corpus index.

        Returns:
            Normalized sparse query vector.
        """
        return build_query_vector(self.tokenizer.tokenize(text), index)

    def usage_boost(self, usage_count: int) -> float:
        """Saturating usage signal: usage / (usage + USAGE_SATURATION), in [0, 1)."""
        usage = coerce_usage(usage_count)
        return usage / (usage + self.config.USAGE_SATURATION)

    def priority_boost(self, priority: int) -> float:
        """priority / 100, with priority clamped to [0, 100] first."""
        return clamp_priority(priority) / 100.0

    def score_documents(self, query: str, documents: Sequence[Document],
                        weights: Optional[Dict[str, float]] = None) -> List[Recommendation]:
        """
        Score every document for a query, sorted by score descending.

        Ties keep the original document order.

        Args:
            query: Ticket or query text.
            documents: Documents to score.
            weights: Optional overrides for alpha (similarity), beta (usage)
                and gamma (priority).

        Returns:
            List of Recommendation for all documents.
        """
        w = self.default_weights()
        if weights:
            w.update(weights)

        index = self.current_index(documents)
        q_vec = self.query_vector(query, index)

        scored = []
        for doc in documents:
            sim = cosine_similarity(q_vec, index.vector_for(doc.id))
            ub = self.usage_boost(doc.usage_count)
            pb = self.priority_boost(doc.priority)
            score = w["alpha"] * sim + w["beta"] * ub + w["gamma"] * pb
            scored.append(Recommendation(doc, sim, ub, pb, score))

        scored.sort(key=lambda r: r.score, reverse=True)
        return scored

    def recommend(self, query: str, documents: Sequence[Document],
                  weights: Optional[Dict[str, float]] = None) -> List[Recommendation]:
        """
        Recommend documents for a ticket description.

        Keeps up to MAX_RECOMMENDATIONS documents with positive similarity;
        when none match, falls back to the top FALLBACK_RECOMMENDATIONS by
        score so high-priority or well-used articles still surface.

        Raises:
            InvalidQuery: If the query is blank or not a string.
        """
        if not isinstance(query, str) or not query.strip():
            raise InvalidQuery("Query must be a non-empty string")
        if not documents:
            return []

        scored = self.score_documents(query, documents, weights)
        matched = [r for r in scored if r.similarity > 0]
        if matched:
            return matched[:self.config.MAX_RECOMMENDATIONS]
        return scored[:self.config.FALLBACK_RECOMMENDATIONS]

    def summarize_recommendations(self, recommendations: List[Recommendation]) -> None:
        """
        Print a breakdown of recommendation scores.

        Args:
            recommendations: Ranked recommendations.
        """
        if not recommendations:
            print("No recommendations available.")
            return

        print("\n=== Recommendation Breakdown ===")
        for rank, rec in enumerate(recommendations, start=1):
            print(f"#{rank}  {rec.document.id}  score={rec.score:.4f}  "
                  f"sim={rec.similarity:.4f}  usage={rec.usage_boost:.4f}  "
                  f"priority={rec.priority_boost:.2f}")
        if all(r.similarity == 0 for r in recommendations):
            print("(no article shares a token with the query; showing top articles by score)")


_default_ranker = Ranker(config)


def query_vector(text: str, index: CorpusIndex) -> SparseVector:
    """Build a query vector for ``text`` against ``index`` with the default configuration."""
    return _default_ranker.query_vector(text, index)


def recommend(query: str, documents: Sequence[Document],
              weights: Optional[Dict[str, float]] = None) -> List[Recommendation]:
    """Recommend documents for ``query`` with the default configuration."""
    return _default_ranker.recommend(query, documents, weights)
