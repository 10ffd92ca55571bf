from datetime import datetime, timedelta, timezone
import pytest
from bizplan.schemas import GeneratedPlan, PlanSection
from bizplan.store import PlanNotFoundError, PlanStore


def make_plan(plan_id, user_id="alice", minutes=0):
    return GeneratedPlan(
        id=plan_id,
        title=f"Plan {plan_id}",
        industry="Retail",
        user_id=user_id,
        created_at=datetime(2025, 7, 27, tzinfo=timezone.utc) + timedelta(minutes=minutes),
        sections=[
            PlanSection(title="Executive Summary", content="One."),
            PlanSection(title="Market Analysis", content="Two."),
        ],
        status="complete",
    )


def test_save_and_get(store):
    plan = make_plan("a")
    store.save(plan)
    loaded = store.get("a")
    assert loaded == plan
    assert [s.title for s in loaded.sections] == ["Executive Summary", "Market Analysis"]


def test_get_missing(store):
    with pytest.raises(PlanNotFoundError):
        store.get("nope")


def test_list_newest_first(store):
    store.save(make_plan("old", minutes=0))
    store.save(make_plan("new", minutes=5))
    store.save(make_plan("other", user_id="bob"))
    assert [p.id for p in store.list_for_user("alice")] == ["new", "old"]
    assert store.list_for_user("carol") == []


def test_update_section(store):
    store.save(make_plan("a"))
    updated = store.update_section("a", 1, "Edited by hand.")
    assert updated.sections[1] == PlanSection(title="Market Analysis", content="Edited by hand.")
    assert store.get("a").sections[1].content == "Edited by hand."
    assert store.get("a").sections[0].content == "One."


def test_update_section_bad_index(store):
    store.save(make_plan("a"))
    with pytest.raises(IndexError):
        store.update_section("a", 5, "x")


def test_export_count(store):
    store.save(make_plan("a"))
    assert store.increment_export_count("a") == 1
    assert store.increment_export_count("a") == 2
    with pytest.raises(PlanNotFoundError):
        store.increment_export_count("missing")


def test_delete(store):
    store.save(make_plan("a"))
    store.delete("a")
    with pytest.raises(PlanNotFoundError):
        store.get("a")
    with pytest.raises(PlanNotFoundError):
        store.delete("a")


def test_in_memory_store():
    s = PlanStore()
    s.save(make_plan("a"))
    assert s.get("a").title == "Plan a"
    s.close()


def test_update_section_keeps_export_count(store):
    store.save(make_plan("a"))
    store.increment_export_count("a")
    updated = store.update_section("a", 0, "Edited.")
    assert updated.export_count == 1
    assert store.get("a").export_count == 1
    assert store.get("a").sections[0].content == "Edited."


def test_update_section_missing_plan(store):
    with pytest.raises(PlanNotFoundError):
        store.update_section("nope", 0, "x")


def test_not_found_message(store):
    with pytest.raises(PlanNotFoundError) as info:
        store.get("nope")
    assert str(info.value) == "No plan found with id: nope"
    assert info.value.plan_id == "nope"
