import json
from types import SimpleNamespace

import pytest

from kb_assistant.errors import StoreError
from kb_assistant.models import Document
from kb_assistant.store import JsonAnalyticsLog, JsonDocumentStore, SAMPLE_DOCUMENTS


def small_caps():
    return SimpleNamespace(MAX_SEARCH_LOG=3, MAX_RECOMMEND_LOG=2, MAX_ATTACH_LOG=2)


def test_missing_store_file_is_empty(tmp_path):
    """A store that was never saved has no documents."""
    assert JsonDocumentStore(tmp_path / "kb.json").list() == []


def test_save_and_list_round_trip(tmp_path):
    """Saved documents come back unchanged and in order."""
    store = JsonDocumentStore(tmp_path / "nested" / "kb.json")
    docs = [
        Document(id="kb-1", title="VPN", tags=["vpn"], body="flush dns", usage_count=3, priority=80),
        Document(id="kb-2", title="Password", difficulty="High", last_used="2024-01-01T00:00:00+00:00"),
    ]
    store.save(docs)
    loaded = store.list()
    assert [d.to_dict() for d in loaded] == [d.to_dict() for d in docs]


def test_store_uses_camel_case_keys(tmp_path):
    """The file format matches exported article files."""
    path = tmp_path / "kb.json"
    JsonDocumentStore(path).save([Document(id="kb-1", title="VPN", usage_count=2)])
    (item,) = json.loads(path.read_text(encoding="utf-8"))
    assert item["usageCount"] == 2
    assert "createdAt" in item


def test_corrupt_store_raises_store_error(tmp_path):
    """Unparseable JSON is reported as a StoreError."""
    path = tmp_path / "kb.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreError):
        JsonDocumentStore(path).list()


def test_non_array_store_raises_store_error(tmp_path):
    """The store must hold a JSON array of objects."""
    path = tmp_path / "kb.json"
    path.write_text('{"id": "kb-1"}', encoding="utf-8")
    with pytest.raises(StoreError):
        JsonDocumentStore(path).list()
    path.write_text('["kb-1"]', encoding="utf-8")
    with pytest.raises(StoreError):
        JsonDocumentStore(path).list()


def test_import_assigns_fresh_ids_and_appends(tmp_path):
    """Imported documents never reuse ids and go after existing ones."""
    store = JsonDocumentStore(tmp_path / "kb.json")
    store.save([Document(id="kb-1", title="Existing")])
    source = tmp_path / "import.json"
    source.write_text(json.dumps([{"id": "kb-1", "title": "Imported", "tags": ["vpn"]}]), encoding="utf-8")

    imported = store.import_from(source)
    docs = store.list()
    assert [d.title for d in docs] == ["Existing", "Imported"]
    assert imported[0].id != "kb-1"
    assert docs[1].id == imported[0].id
    assert len({d.id for d in docs}) == 2


def test_import_missing_file_raises(tmp_path):
    """Importing a file that does not exist fails loudly."""
    with pytest.raises(StoreError):
        JsonDocumentStore(tmp_path / "kb.json").import_from(tmp_path / "nope.json")


def test_export_writes_current_documents(tmp_path):
    """Export copies the stored documents to another file."""
    store = JsonDocumentStore(tmp_path / "kb.json")
    store.save([Document(id="kb-1", title="VPN")])
    target = tmp_path / "export.json"
    assert store.export_to(target) == 1
    assert json.loads(target.read_text(encoding="utf-8"))[0]["title"] == "VPN"


def test_import_samples(tmp_path):
    """Samples are appended with new ids."""
    store = JsonDocumentStore(tmp_path / "kb.json")
    imported = store.import_samples()
    assert [d.title for d in imported] == [s["title"] for s in SAMPLE_DOCUMENTS]
    assert not {d.id for d in imported} & {"kb-1", "kb-2", "kb-3"}
    store.import_samples()
    assert len(store.list()) == 6


def test_analytics_logs_newest_first_with_caps(tmp_path):
    """Each log keeps only the newest entries."""
    log = JsonAnalyticsLog(tmp_path / "analytics.json", small_caps())
    for term in ["vpn", "dns", "password", "email"]:
        log.record_search(term)
    log.record_search("   ")
    searches = log.load()["searches"]
    assert [s["term"] for s in searches] == ["email", "password", "dns"]
    assert all("ts" in s for s in searches)


def test_analytics_records_recommends_and_attaches(tmp_path):
    """Recommend and attach events are stored with their payloads."""
    log = JsonAnalyticsLog(tmp_path / "analytics.json", small_caps())
    log.record_recommend("vpn down", ["kb-1", "kb-3"])
    log.record_attach("kb-1", "VPN")
    log.record_attach("kb-2", "Password")
    log.record_attach("kb-3", "Email")
    data = log.load()
    assert data["recommends"][0]["ticket"] == "vpn down"
    assert data["recommends"][0]["top"] == ["kb-1", "kb-3"]
    assert [a["kbId"] for a in data["attaches"]] == ["kb-3", "kb-2"]


def test_missing_analytics_file_is_empty(tmp_path):
    """No file means empty logs."""
    data = JsonAnalyticsLog(tmp_path / "analytics.json", small_caps()).load()
    assert data == {"searches": [], "recommends": [], "attaches": []}


def test_corrupt_analytics_raises(tmp_path):
    """A broken analytics file is a StoreError."""
    path = tmp_path / "analytics.json"
    path.write_text("[1, 2", encoding="utf-8")
    with pytest.raises(StoreError):
        JsonAnalyticsLog(path, small_caps()).load()


def test_store_reads_overflowing_numbers(tmp_path):
    """1e400 and Infinity in a stored file load with default values."""
    path = tmp_path / "kb.json"
    path.write_text('[{"id": "kb-1", "title": "VPN", "priority": 1e400},'
                    ' {"id": "kb-2", "title": "DNS", "usageCount": Infinity}]', encoding="utf-8")
    docs = JsonDocumentStore(path).list()
    assert [d.priority for d in docs] == [50, 50]
    assert [d.usage_count for d in docs] == [0, 0]


@pytest.mark.parametrize("payload", ['{"searches": ["vpn"]}', '{"attaches": {"kbId": "kb-1"}}', '[]'])
def test_malformed_analytics_entries_raise(tmp_path, payload):
    """Every log must be an array of objects."""
    path = tmp_path / "analytics.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(StoreError):
        JsonAnalyticsLog(path, small_caps()).load()
