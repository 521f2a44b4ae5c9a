import pytest
from fastapi import HTTPException

from turfconnect.domain.slots.schemas import PresetApplyRequest, SlotCreate, SlotUpdate
from turfconnect.domain.slots.service import SlotService, compute_end_time, get_slot_presets
from turfconnect.models import TurfSlot


def test_end_time_is_derived_from_duration():
    assert compute_end_time("18:00", 60) == "19:00"
    assert compute_end_time("23:00", 30) == "23:30"


def test_slot_may_not_cross_midnight():
    with pytest.raises(HTTPException) as exc:
        compute_end_time("23:30", 60)
    assert exc.value.detail == "Slot must end by midnight"


def test_presets_are_six_hourly_slots():
    presets = get_slot_presets()

    assert set(presets) == {"morning", "afternoon", "evening"}
    assert all(len(slots) == 6 for slots in presets.values())
    assert presets["morning"][0] == {"start_time": "06:00", "end_time": "07:00"}
    assert presets["evening"][-1] == {"start_time": "21:00", "end_time": "22:00"}


def test_create_and_list_slots_in_week_order(db, active_turf, owner_user):
    service = SlotService(db)
    service.create_slot("turf-1", SlotCreate(dayOfWeek=3, startTime="20:00", price=400), owner_user)
    service.create_slot("turf-1", SlotCreate(dayOfWeek=1, startTime="07:00", price=300), owner_user)
    service.create_slot(
        "turf-1", SlotCreate(dayOfWeek=1, startTime="06:00", durationMinutes=30, price=150), owner_user
    )

    slots = service.list_available_slots("turf-1")

    assert [(s["day_of_week"], s["start_time"], s["end_time"]) for s in slots] == [
        (1, "06:00", "06:30"),
        (1, "07:00", "08:00"),
        (3, "20:00", "21:00"),
    ]


def test_unavailable_slots_are_hidden_from_customers(db, slot, owner_user):
    service = SlotService(db)
    service.update_slot("slot-1", SlotUpdate(isAvailable=False), owner_user)

    assert service.list_available_slots("turf-1") == []
    assert len(service.list_owner_slots("turf-1", owner_user)) == 1


def test_slot_writes_invalidate_the_cached_grid(db, slot, owner_user):
    service = SlotService(db)
    assert len(service.list_available_slots("turf-1")) == 1

    service.delete_slot("slot-1", owner_user)

    assert service.list_available_slots("turf-1") == []


def test_update_recomputes_end_time(db, slot, owner_user):
    updated = SlotService(db).update_slot("slot-1", SlotUpdate(startTime="20:00"), owner_user)

    assert (updated.start_time, updated.end_time) == ("20:00", "21:00")


def test_non_owner_cannot_create_slots(db, active_turf, customer):
    with pytest.raises(HTTPException) as exc:
        SlotService(db).create_slot("turf-1", SlotCreate(dayOfWeek=0, startTime="10:00", price=100), customer)
    assert exc.value.status_code == 404


async def test_preset_issues_one_create_per_day_and_slot(db, active_turf, owner_user, monkeypatch):
    calls = []

    def fake_create(self, turf_id, spec):
        calls.append(spec)
        if spec["day_of_week"] == 6 and spec["start_time"] == "19:00":
            raise RuntimeError("insert failed")
        return {"id": f"slot-{len(calls)}", "turf_id": turf_id, **spec}

    monkeypatch.setattr(SlotService, "_create_preset_slot", fake_create)

    result = await SlotService(db).apply_preset(
        "turf-1", PresetApplyRequest(preset="evening", days=[6, 0, 6]), owner_user
    )

    assert len(calls) == 12
    assert result["requested"] == 12
    assert result["created"] == 11
    assert result["failed"] == 1
    assert {spec["price"] for spec in calls} == {200}


def test_preset_slot_create_uses_its_own_session(db, session_factory, active_turf):
    service = SlotService(db, session_factory=session_factory)
    spec = {
        "day_of_week": 2,
        "start_time": "06:00",
        "end_time": "07:00",
        "duration_minutes": 60,
        "price": 350,
        "is_available": True,
    }

    created = service._create_preset_slot("turf-1", spec)

    stored = db.query(TurfSlot).filter(TurfSlot.id == created["id"]).one()
    assert (stored.start_time, stored.price) == ("06:00", 350)


def test_preset_api_rejects_unknown_days(client, active_turf, owner_user, current_user):
    current_user["user"] = owner_user

    response = client.post("/slots/turf/turf-1/presets", json={"preset": "morning", "days": [7]})

    assert response.status_code == 422
