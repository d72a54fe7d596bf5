"""
Corpus index construction and caching.

This module builds document-frequency and inverse-document-frequency
statistics and per-document normalized TF-IDF vectors for the full current
document set. The index is a pure function of the documents; IndexCache
only skips a rebuild when the corpus fingerprint shows nothing changed.
"""

import hashlib
import json
import math
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

import config
from .models import Document
from .tokenizer import Tokenizer

SparseVector = Dict[str, float]


def smooth_idf(df: int, N: int) -> float:
    """idf = log((N + 1) / (df + 1)) + 1  (smooth, positive)"""
    return math.log((N + 1) / (df + 1)) + 1.0


def sublinear_tf(count: int) -> float:
    """tfw = 1 + log(tf)"""
    return 1.0 + math.log(count)


def normalize_vector(weights: Dict[str, float]) -> SparseVector:
    """L2-normalize a sparse vector; an all-zero vector keeps norm 1."""
    norm = math.sqrt(sum(w * w for w in weights.values())) or 1.0
    return {tok: w / norm for tok, w in weights.items()}


class CorpusIndex:
    """TF-IDF statistics and normalized vectors for one document set."""

    def __init__(self, document_frequency: Dict[str, int], inverse_document_frequency: Dict[str, float],
                 document_vectors: Dict[str, SparseVector], total_documents: int, fingerprint: str = ""):
        self.document_frequency = document_frequency
        self.inverse_document_frequency = inverse_document_frequency
        self.document_vectors = document_vectors
        self.total_documents = total_documents
        self.fingerprint = fingerprint

    @property
    def vocabulary_size(self) -> int:
        return len(self.document_frequency)

    def vector_for(self, doc_id: str) -> SparseVector:
        """Return the vector for ``doc_id``, or an empty vector if unknown."""
        return self.document_vectors.get(doc_id, {})

    def idf(self, token: str) -> float:
        """IDF of ``token``; tokens absent from the corpus weigh 0."""
        return self.inverse_document_frequency.get(token, 0.0)


class Indexer:
    """Handles corpus index construction."""

    def __init__(self, config, tokenizer: Optional[Tokenizer] = None):
        """Initialize with configuration."""
        self.config = config
        self.tokenizer = tokenizer or Tokenizer(config)

    def fingerprint(self, documents: Sequence[Document]) -> str:
        """
        Hash the indexed content of a document set.

        Two document sets with the same ids, titles, tags and bodies in the
        same order have the same fingerprint.
        """
        digest = hashlib.sha1()
        for doc in documents:
            payload = json.dumps([doc.id, doc.title, doc.tags, doc.body], ensure_ascii=False)
            digest.update(payload.encode("utf-8"))
            digest.update(b"\x00")
        return f"{len(documents)}:{digest.hexdigest()}"

    def build_index(self, documents: Sequence[Document]) -> CorpusIndex:
        """
        Build the TF-IDF index for a document set.

        Args:
            documents: Documents to index, in store order.

        Returns:
            CorpusIndex with document frequency, IDF and normalized vectors.
        """
        N = len(documents)
        doc_tf = []                          # (doc_id, token -> raw count)
        document_frequency = defaultdict(int)

        for doc in documents:
            counts = self.tokenizer.term_frequencies(doc.search_text)
            doc_tf.append((doc.id, counts))
            # One increment per distinct token present
            for tok in counts:
                document_frequency[tok] += 1

        idf = {tok: smooth_idf(df, N) for tok, df in document_frequency.items()}

        document_vectors = {}
        for doc_id, counts in doc_tf:
            weights = {tok: sublinear_tf(c) * idf[tok] for tok, c in counts.items()}
            document_vectors[doc_id] = normalize_vector(weights)

        return CorpusIndex(dict(document_frequency), idf, document_vectors, N,
                           fingerprint=self.fingerprint(documents))

    def summarize_index(self, index: CorpusIndex) -> None:
        """
        Print a summary of the corpus index.

        Args:
            index: The corpus index.
        """
        print("\n=== Corpus Index Summary ===")
        print(f"Documents indexed: {index.total_documents}")
        print(f"Unique tokens: {index.vocabulary_size}")

        if index.inverse_document_frequency:
            idf_values = list(index.inverse_document_frequency.values())
            print(f"IDF range: {min(idf_values):.3f} - {max(idf_values):.3f}")

        vector_sizes = [len(v) for v in index.document_vectors.values()]
        if vector_sizes:
            print(f"Average tokens per document: {sum(vector_sizes) / len(vector_sizes):.2f}")
            empty = sum(1 for n in vector_sizes if n == 0)
            if empty:
                print(f"Documents without indexable tokens: {empty}")


class IndexCache:
    """
    Memoizes the last built index, keyed by corpus fingerprint.

    get() always returns an index that matches the documents it is given;
    a cold or stale cache just means a rebuild.
    """

    def __init__(self, indexer: Indexer, enabled: bool = True):
        self.indexer = indexer
        self.enabled = enabled
        self._index: Optional[CorpusIndex] = None
        self.builds = 0

    def get(self, documents: Sequence[Document]) -> CorpusIndex:
        if self.enabled and self._index is not None:
            if self._index.fingerprint == self.indexer.fingerprint(documents):
                return self._index
        self._index = self.indexer.build_index(documents)
        self.builds += 1
        return self._index

    @property
    def is_warm(self) -> bool:
        return self._index is not None


_default_indexer = Indexer(config)


def build_index(documents: List[Document]) -> CorpusIndex:
    """Build a corpus index with the default configuration."""
    return _default_indexer.build_index(documents)
