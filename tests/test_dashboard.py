import pytest

from filedash.classifiers import RiskTier
from filedash.dashboard import Dashboard
from filedash.mutations import ConfirmationDialog

from .helpers import RecordingSink, add_file, failing_backend


@pytest.mark.asyncio
async def test_load_renders_stats_and_rows(dashboard, sink):
    """Сквозной сценарий: загрузка одного критичного файла"""
    add_file("a", "x.exe", file_size=2048, score=80, level="Critical", factors=["packed"])

    assert await dashboard.load() is True

    stats = sink.stats
    assert stats.total_count == 1
    assert stats.storage_used == "2 KB"
    assert stats.risk_label == "Critical Risk"
    assert stats.average_risk.tier is RiskTier.CRITICAL
    assert stats.risk_score_text == "Risk Score: 80.0%"

    row = sink.rows[0]
    assert row.id == "a"
    assert row.risk_label == "Critical (80%)"
    assert row.risk_factor == "packed"
    assert row.size == "2 KB"

@pytest.mark.asyncio
async def test_query_changes_rerender(dashboard, sink):
    add_file("a", "x.exe", file_size=2048, score=80, level="Critical", factors=["packed"])
    await dashboard.load()

    dashboard.update_query(risk_filter="critical")
    assert [r.id for r in sink.rows] == ["a"]

    dashboard.update_query(risk_filter="low")
    assert sink.rows == []
    # Статистика считается по всей коллекции, а не по видимым строкам
    assert sink.stats.total_count == 1

@pytest.mark.asyncio
async def test_empty_backend(dashboard, sink):
    assert await dashboard.load() is True
    assert sink.rows == []
    assert sink.stats.storage_used == "0 B"
    assert sink.stats.risk_label == "-"

@pytest.mark.asyncio
async def test_failed_load_keeps_previous_state(dashboard, sink):
    add_file("a", "x.exe")
    await dashboard.load()
    renders = len(sink.renders)

    dashboard.client = failing_backend(200, json={"status": "error"})
    assert await dashboard.load() is False

    assert dashboard.last_error is not None
    assert [r.id for r in dashboard.collection.all()] == ["a"]
    assert len(sink.renders) == renders

@pytest.mark.asyncio
async def test_unreachable_backend_on_startup():
    sink = RecordingSink()
    dashboard = Dashboard(client=failing_backend(503), sink=sink, settle_delay=0)
    assert await dashboard.load() is False
    assert dashboard.collection.all() == []
    assert sink.renders == []

@pytest.mark.asyncio
async def test_delete_through_row_callback(dashboard, sink):
    add_file("a", "a.exe", file_size=1024, score=90, level="Critical")
    add_file("b", "b.dll", file_size=512, score=10, level="Low")
    await dashboard.load()

    row = next(r for r in sink.rows if r.id == "a")
    row.on_delete()
    assert dashboard.mutations.delete_flow.prompt.visible is True
    assert await dashboard.mutations.confirm_delete() is True

    assert [r.id for r in sink.rows] == ["b"]
    assert sink.stats.total_count == 1
    assert sink.stats.storage_used == "512 B"
    assert sink.stats.average_risk.tier is RiskTier.LOW
    assert [f.id for f in await dashboard.client.fetch_files()] == ["b"]

@pytest.mark.asyncio
async def test_failed_delete_keeps_record(dashboard, sink):
    add_file("a", "a.exe")
    await dashboard.load()

    dashboard.mutations.client = failing_backend(500)
    dashboard.mutations.request_delete("a")
    assert await dashboard.mutations.confirm_delete() is False
    assert "a" in dashboard.collection

@pytest.mark.asyncio
async def test_cleanup_resyncs_from_backend(dashboard, sink):
    add_file("a", "a.exe")
    add_file("b", "b.exe")
    await dashboard.load()
    assert len(sink.rows) == 2

    dashboard.mutations.request_cleanup()
    assert await dashboard.mutations.confirm_cleanup() is True

    assert dashboard.collection.all() == []
    assert sink.rows == []
    assert sink.stats.total_count == 0

@pytest.mark.asyncio
async def test_view_file_navigates():
    visited = []
    sink = RecordingSink()
    dashboard = Dashboard(client=failing_backend(), sink=sink, settle_delay=0,
                          navigate=visited.append)
    assert dashboard.view_file("abc") == "http://testserver/file/abc/info"
    assert visited == ["http://testserver/file/abc/info"]

def test_default_prompts_are_dialogs():
    dashboard = Dashboard(client=failing_backend(), sink=RecordingSink(), settle_delay=0)
    assert isinstance(dashboard.mutations.delete_flow.prompt, ConfirmationDialog)
