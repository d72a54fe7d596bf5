"""
JSON file persistence for articles and analytics.

JsonDocumentStore keeps the document set as a JSON array; JsonAnalyticsLog
keeps newest-first logs of searches, recommendations and attaches. Neither
is used by the relevance engine itself, only by the assistant around it.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .errors import StoreError
from .models import Document, generate_id, utc_now

SAMPLE_DOCUMENTS = [
    {
        "id": "kb-1",
        "title": "VPN not connecting - Quick fix",
        "tags": ["vpn", "network", "auth"],
        "body": "Check credentials, restart VPN client, flush DNS, and verify SSO settings.",
        "usageCount": 0,
        "priority": 50,
        "difficulty": "Medium",
    },
    {
        "id": "kb-2",
        "title": "Password reset procedure",
        "tags": ["password", "account"],
        "body": "Verify user identity, open AD user, reset password, force password change at next login.",
        "usageCount": 0,
        "priority": 50,
        "difficulty": "Medium",
    },
    {
        "id": "kb-3",
        "title": "Email sync issues on mobile",
        "tags": ["email", "mobile", "sync"],
        "body": "Confirm server settings (IMAP/Exchange), remove & re-add account, check network.",
        "usageCount": 0,
        "priority": 50,
        "difficulty": "Medium",
    },
]


def _read_json(path: Path) -> Optional[Any]:
    """Read JSON from ``path``; None if the file does not exist."""
    if not path.exists():
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise StoreError(f"Corrupt JSON in {path}: {e}") from e
    except OSError as e:
        raise StoreError(f"Could not read {path}: {e}") from e


def _write_json(path: Path, data: Any) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise StoreError(f"Could not write {path}: {e}") from e


def documents_from_json(data: Any, source: str = "input") -> List[Document]:
    """
    Convert a parsed JSON payload to documents.

    Raises:
        StoreError: If the payload is not an array of objects.
    """
    if not isinstance(data, list):
        raise StoreError(f"Invalid KB JSON format in {source}: expected an array")
    documents = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise StoreError(f"Invalid KB JSON format in {source}: item {i} is not an object")
        documents.append(Document.from_dict(item))
    return documents


def with_fresh_ids(documents: Iterable[Document]) -> List[Document]:
    """Give every document a new id so imports never collide with stored ones."""
    result = []
    for doc in documents:
        doc.id = generate_id()
        result.append(doc)
    return result


class JsonDocumentStore:
    """Document store backed by a JSON array file."""

    def __init__(self, path):
        self.path = Path(path)

    def list(self) -> List[Document]:
        """Load all documents in stored order; a missing file is an empty store."""
        data = _read_json(self.path)
        if data is None:
            return []
        return documents_from_json(data, source=str(self.path))

    def save(self, documents: Iterable[Document]) -> None:
        _write_json(self.path, [doc.to_dict() for doc in documents])

    def export_to(self, path) -> int:
        """
        Write the current document set to another JSON file.

        Args:
            path: Destination file.

        Returns:
            Number of documents exported.
        """
        documents = self.list()
        _write_json(Path(path), [doc.to_dict() for doc in documents])
        return len(documents)

    def import_from(self, path) -> List[Document]:
        """
        Append the documents of a JSON array file, with fresh ids.

        Args:
            path: Source file.

        Returns:
            The imported documents.

        Raises:
            StoreError: If the file is missing, unreadable or not a document array.
        """
        source = Path(path)
        data = _read_json(source)
        if data is None:
            raise StoreError(f"Import file not found: {source}")
        imported = with_fresh_ids(documents_from_json(data, source=str(source)))
        self.save(self.list() + imported)
        return imported

    def import_samples(self) -> List[Document]:
        """Append the sample articles, with fresh ids."""
        now = utc_now()
        samples = [Document.from_dict(dict(item, createdAt=now)) for item in SAMPLE_DOCUMENTS]
        imported = with_fresh_ids(samples)
        self.save(self.list() + imported)
        return imported


class JsonAnalyticsLog:
    """
    Analytics sink backed by a JSON file.

    Each log is kept newest-first and capped in length.
    """

    def __init__(self, path, config):
        self.path = Path(path)
        self.config = config

    def load(self) -> Dict[str, List[Dict[str, Any]]]:
        data = _read_json(self.path)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise StoreError(f"Invalid analytics format in {self.path}: expected an object")
        analytics = {}
        for key in ("searches", "recommends", "attaches"):
            entries = data.get(key) or []
            if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
                raise StoreError(f"Invalid analytics format in {self.path}: '{key}' must be an array of objects")
            analytics[key] = list(entries)
        return analytics

    def _record(self, key: str, entry: Dict[str, Any], cap: int) -> None:
        analytics = self.load()
        entry["ts"] = utc_now()
        analytics[key].insert(0, entry)
        del analytics[key][cap:]
        _write_json(self.path, analytics)

    def record_search(self, term: str) -> None:
        if not term or not term.strip():
            return
        self._record("searches", {"term": term}, self.config.MAX_SEARCH_LOG)

    def record_recommend(self, query: str, result_ids: List[str]) -> None:
        self._record("recommends", {"ticket": query, "top": list(result_ids)}, self.config.MAX_RECOMMEND_LOG)

    def record_attach(self, document_id: str, title: str) -> None:
        self._record("attaches", {"kbId": document_id, "title": title}, self.config.MAX_ATTACH_LOG)
