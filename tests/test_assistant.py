import pytest

from kb_assistant import KnowledgeBaseAssistant
from kb_assistant.errors import DocumentNotFound, InvalidDocument, InvalidQuery


@pytest.fixture
def assistant(tmp_path):
    return KnowledgeBaseAssistant(
        store_path=str(tmp_path / "kb.json"),
        analytics_path=str(tmp_path / "analytics.json"),
        config_dict={"VERBOSE": False},
    )


@pytest.fixture
def loaded(assistant):
    assistant.import_samples()
    return assistant


def test_config_override_keeps_other_settings(assistant):
    """Overrides replace only the keys given."""
    assert assistant.config.VERBOSE is False
    assert assistant.config.MAX_RECOMMENDATIONS == 5


def test_create_inserts_newest_first(loaded):
    """New articles go to the front of the list."""
    doc = loaded.create_document("Printer offline", tags="printer, drivers", body="reinstall driver", priority=140)
    docs = loaded.list_documents()
    assert docs[0].id == doc.id
    assert docs[0].tags == ["printer", "drivers"]
    assert docs[0].priority == 100
    assert len(docs) == 4


def test_create_requires_title(assistant):
    """Blank titles are rejected."""
    with pytest.raises(InvalidDocument):
        assistant.create_document("   ")


def test_update_keeps_usage_and_created_at(loaded):
    """Edits never touch usage_count or created_at."""
    doc = loaded.list_documents()[0]
    loaded.attach(doc.id)
    updated = loaded.update_document(doc.id, title="VPN fix v2", priority=-1, difficulty="low")
    stored = loaded.get_document(doc.id)
    assert stored.title == "VPN fix v2"
    assert stored.priority == 0
    assert stored.difficulty == "Low"
    assert stored.usage_count == 1
    assert stored.created_at == doc.created_at
    assert updated.title == stored.title


def test_unknown_id_raises(loaded):
    """Operations on a missing id raise DocumentNotFound."""
    with pytest.raises(DocumentNotFound):
        loaded.get_document("kb-missing")
    with pytest.raises(DocumentNotFound):
        loaded.delete_document("kb-missing")
    with pytest.raises(DocumentNotFound):
        loaded.attach("kb-missing")


def test_delete_removes_document(loaded):
    doc = loaded.list_documents()[1]
    loaded.delete_document(doc.id)
    assert doc.id not in [d.id for d in loaded.list_documents()]


def test_attach_counts_usage_and_logs(loaded):
    """Attach increments usage, sets last_used and records the event."""
    doc = loaded.list_documents()[0]
    loaded.attach(doc.id)
    loaded.attach(doc.id)
    stored = loaded.get_document(doc.id)
    assert stored.usage_count == 2
    assert stored.last_used is not None
    attaches = loaded.analytics.load()["attaches"]
    assert attaches[0]["kbId"] == doc.id
    assert len(attaches) == 2


def test_recommend_returns_vpn_article_and_logs(loaded):
    """The VPN sample answers a VPN ticket and the result ids are logged."""
    results = loaded.recommend("  my vpn won't connect  ")
    assert results[0].document.title.startswith("VPN")
    recommends = loaded.analytics.load()["recommends"]
    assert recommends[0]["ticket"] == "my vpn won't connect"
    assert recommends[0]["top"] == [r.document.id for r in results]


def test_recommend_blank_ticket(loaded):
    with pytest.raises(InvalidQuery):
        loaded.recommend("   ")


def test_recommend_without_documents(assistant):
    """An empty store gives no recommendations."""
    assert assistant.recommend("vpn") == []


def test_usage_lifts_article_in_fallback(loaded):
    """With no shared tokens, the most used article leads the fallback."""
    target = loaded.list_documents()[2]
    loaded.attach(target.id)
    results = loaded.recommend("coffee machine broken")
    assert len(results) == 3
    assert results[0].document.id == target.id


def test_search_logs_term_and_filters(loaded):
    """Search filters the list and records the lowercased term."""
    results = loaded.search("DNS")
    assert [d.title for d in results] == ["VPN not connecting - Quick fix"]
    assert loaded.analytics.load()["searches"][0]["term"] == "dns"


def test_blank_search_is_not_logged(loaded):
    """Browsing without a search term keeps stored order and logs nothing."""
    assert len(loaded.search("", category="All")) == 3
    assert loaded.analytics.load()["searches"] == []


def test_search_with_category(loaded):
    assert [d.title for d in loaded.search("", category="email")] == ["Email sync issues on mobile"]


def test_suggest_and_categories(loaded):
    assert loaded.suggest("pass")[0] == "password"
    assert loaded.categories()[0] == "All"
    assert "vpn" in loaded.categories()


def test_index_rebuilt_only_after_content_changes(loaded):
    """Repeated queries reuse the index; edits force a rebuild."""
    loaded.recommend("vpn")
    loaded.search("vpn")
    assert loaded.index_cache.builds == 1
    doc = loaded.list_documents()[0]
    loaded.attach(doc.id)
    loaded.recommend("vpn")
    assert loaded.index_cache.builds == 1
    loaded.update_document(doc.id, body="completely new text about routers")
    loaded.recommend("routers")
    assert loaded.index_cache.builds == 2


def test_analytics_report(loaded):
    """The report totals usage and counts search tokens."""
    docs = loaded.list_documents()
    loaded.attach(docs[1].id)
    loaded.attach(docs[1].id)
    loaded.attach(docs[0].id)
    loaded.search("vpn dns")
    loaded.search("vpn")
    loaded.recommend("password reset")
    loaded.delete_document(docs[2].id)

    report = loaded.analytics_report()
    assert report["total_documents"] == 2
    assert report["total_attaches"] == 3
    assert report["top_documents"][0].id == docs[1].id
    assert report["top_search_tokens"][0] == ("vpn", 2)
    assert report["recent_recommends"][0]["titles"][0] == "Password reset procedure"
    assert len(report["recent_attaches"]) == 3


def test_import_and_export(loaded, tmp_path):
    """Exported articles can be imported again with new ids."""
    target = tmp_path / "export.json"
    assert loaded.export_file(str(target)) == 3
    imported = loaded.import_file(str(target))
    assert len(imported) == 3
    assert len({d.id for d in loaded.list_documents()}) == 6


def test_stats(loaded):
    stats = loaded.get_stats()
    assert stats["num_documents"] == 3
    assert stats["num_tokens"] > 0
    assert stats["num_categories"] == 8


def test_stats_reports_cache_status(loaded):
    assert loaded.get_stats()["index_cached"] is False
    assert loaded.get_stats()["index_cached"] is True
    builds = loaded.index_cache.builds
    loaded.recommend("vpn")
    assert loaded.get_stats()["index_cached"] is True
    assert loaded.index_cache.builds == builds


def test_corpus_index_tracks_current_documents(loaded):
    assert loaded.corpus_index().total_documents == 3
    loaded.create_document("Printer offline", "printer", "Power cycle the printer.")
    assert loaded.corpus_index().total_documents == 4
