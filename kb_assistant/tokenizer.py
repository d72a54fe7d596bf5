"""
Word tokenization module.

This module turns raw article and ticket text into normalized token
sequences for TF-IDF indexing, and into raw search terms for substring
filtering.
"""

import re
from collections import Counter
from typing import Any, Dict, List

import config

_DELIMITER_RE = re.compile(r"[^a-z0-9]+")


class Tokenizer:
    """Handles lowercase word tokenization with stopword removal."""

    def __init__(self, config):
        """Initialize with configuration."""
        self.config = config
        self.stopwords = frozenset(config.STOPWORDS)

    def split_search_terms(self, text: Any) -> List[str]:
        """
        Split text into lowercase terms on any run of non-alphanumerics.

        No length or stopword filtering is applied: short or common
        substrings are still meaningful as search hits.

        Args:
            text: Text to split. Non-string input is treated as empty.

        Returns:
            List of terms in input order.
        """
        if not isinstance(text, str):
            return []
        pieces = _DELIMITER_RE.split(text.lower())
        return [p.strip() for p in pieces if p.strip()]

    def tokenize(self, text: Any) -> List[str]:
        """
        Tokenize text for indexing and similarity.

        Args:
            text: Text to tokenize. Non-string input yields no tokens.

        Returns:
            List of tokens with short tokens and stopwords removed.
        """
        min_len = self.config.MIN_TOKEN_LENGTH
        return [
            tok for tok in self.split_search_terms(text)
            if len(tok) >= min_len and tok not in self.stopwords
        ]

    def term_frequencies(self, text: Any) -> Dict[str, int]:
        """Map each token of ``text`` to its raw count."""
        return Counter(self.tokenize(text))


_default_tokenizer = Tokenizer(config)


def tokenize(text: Any) -> List[str]:
    """Tokenize ``text`` with the default configuration."""
    return _default_tokenizer.tokenize(text)


def split_search_terms(text: Any) -> List[str]:
    return _default_tokenizer.split_search_terms(text)
