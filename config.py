"""
Configuration settings for the Knowledge-Base Assistant.

This module contains all configurable parameters for the assistant.
Modify these values to customize the behavior of the system.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent
DATA_DIR = Path(os.environ.get("KB_ASSISTANT_DATA_DIR", PROJECT_ROOT / "data"))
STORE_PATH = DATA_DIR / "kb_articles.json"  # Document store file
ANALYTICS_PATH = DATA_DIR / "kb_analytics.json"  # Analytics log file
EXPORT_FILENAME = "kb_articles_export.json"  # Default export file name

# Tokenizer settings
MIN_TOKEN_LENGTH = 2  # Tokens shorter than this are dropped
STOPWORDS = frozenset([
    "the", "and", "a", "an", "to", "is", "in", "on", "of", "for", "with",
    "user", "issue", "please", "this", "that", "your", "you",
])

# Recommendation weights (sum to 1.0 by convention)
SIMILARITY_WEIGHT = 0.70  # alpha: TF-IDF cosine similarity
USAGE_WEIGHT = 0.15  # beta: saturating usage boost
PRIORITY_WEIGHT = 0.15  # gamma: priority / 100
USAGE_SATURATION = 5  # usage / (usage + USAGE_SATURATION)

# Recommendation selection
MAX_RECOMMENDATIONS = 5  # Results with positive similarity to keep
FALLBACK_RECOMMENDATIONS = 3  # Results to show when nothing matches

# Document defaults
DEFAULT_PRIORITY = 50
MIN_PRIORITY = 0
MAX_PRIORITY = 100
DEFAULT_DIFFICULTY = "Medium"
ID_PREFIX = "kb"  # Prefix for generated document ids

# Search settings
ALL_CATEGORIES = "All"  # Category value that disables tag filtering
MAX_SUGGESTIONS = 7  # Autocomplete suggestions to return

# Index settings
CACHE_INDEX = True  # Reuse the index while the corpus fingerprint is unchanged

# Analytics settings
MAX_SEARCH_LOG = 200  # Search terms kept in the analytics log
MAX_RECOMMEND_LOG = 200  # Recommend calls kept in the analytics log
MAX_ATTACH_LOG = 500  # Attach events kept in the analytics log
TOP_USAGE_DOCUMENTS = 8  # Documents shown in the usage leaderboard
TOP_SEARCH_TOKENS = 10  # Search tokens shown in the analytics report
RECENT_EVENTS = 10  # Recent recommends/attaches shown in the report

# Output settings
VERBOSE = True  # Enable progress output from the assistant
EXCERPT_CHARS = 200  # Maximum characters in body excerpts

# Highlighting settings
HIGHLIGHT_START = "[["  # Start marker for highlighting
HIGHLIGHT_END = "]]"  # End marker for highlighting
HIGHLIGHT_CASE_SENSITIVE = False  # Case sensitivity for highlighting
