"""
Knowledge-Base Assistant

A support knowledge-base assistant with TF-IDF article recommendation,
live category/substring search, and usage analytics.

Main components:
- KnowledgeBaseAssistant: Main assistant class
- Tokenizer: Word tokenization with stopword removal
- Indexer: TF-IDF corpus index construction and caching
- Ranker: Cosine similarity and composite recommendation scoring
- SearchFilter: Category filter, OR substring search and suggestions
- JsonDocumentStore / JsonAnalyticsLog: JSON file persistence
- ResultFormatter: Highlighting and console result formatting
"""

from .assistant import KnowledgeBaseAssistant
from .errors import DocumentNotFound, InvalidDocument, InvalidQuery, KBError, StoreError
from .indexer import CorpusIndex, Indexer, IndexCache, build_index
from .models import Document
from .ranker import Ranker, Recommendation, cosine_similarity, query_vector, recommend
from .search_filter import SearchFilter, filter_and_rank
from .store import JsonAnalyticsLog, JsonDocumentStore
from .tokenizer import Tokenizer, tokenize
from .utils import ResultFormatter

__version__ = "1.0.0"

__all__ = [
    "KnowledgeBaseAssistant",
    "Document",
    "Tokenizer",
    "Indexer",
    "IndexCache",
    "CorpusIndex",
    "Ranker",
    "Recommendation",
    "SearchFilter",
    "JsonDocumentStore",
    "JsonAnalyticsLog",
    "ResultFormatter",
    "KBError",
    "InvalidQuery",
    "InvalidDocument",
    "DocumentNotFound",
    "StoreError",
    "tokenize",
    "build_index",
    "cosine_similarity",
    "query_vector",
    "recommend",
    "filter_and_rank",
]
