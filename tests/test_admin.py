from datetime import date

import pytest

from turfconnect.domain.admin.service import AdminService, ApprovalError
from turfconnect.models import Booking, Turf, TurfOwner


@pytest.fixture
def pending_turf(db, owner_user):
    turf = Turf(
        id="turf-p",
        owner_id="owner-row-1",
        name="Sunrise Box Cricket",
        address="4 Lake View",
        area="HSR Layout",
        supported_sports=["Cricket"],
        base_price_per_hour=800,
        status="pending",
    )
    db.add(turf)
    db.commit()
    return turf


def test_approval_activates_turf_and_verifies_owner(db, pending_turf):
    AdminService(db).review_turf(owner_id="owner-row-1", action="approve", turf_id="turf-p")

    db.refresh(pending_turf)
    owner = db.get(TurfOwner, "owner-row-1")
    assert pending_turf.status == "active"
    assert owner.verification_status == "verified"
    assert owner.rejection_reason is None


def test_rejection_records_reason(db, pending_turf):
    AdminService(db).review_turf(
        owner_id="owner-row-1", action="reject", turf_id="turf-p", rejection_reason="Photos missing"
    )

    db.refresh(pending_turf)
    owner = db.get(TurfOwner, "owner-row-1")
    assert pending_turf.status == "rejected"
    assert (owner.verification_status, owner.rejection_reason) == ("rejected", "Photos missing")


def test_owner_only_review_without_turf(db, owner_user):
    AdminService(db).review_turf(owner_id="owner-row-1", action="approve")

    assert db.get(TurfOwner, "owner-row-1").verification_status == "verified"


def test_missing_turf_fails_the_review(db, owner_user):
    with pytest.raises(ApprovalError) as exc:
        AdminService(db).review_turf(owner_id="owner-row-1", action="approve", turf_id="nope")

    assert str(exc.value) == "Failed to approve turf: turf nope not found"
    assert db.get(TurfOwner, "owner-row-1").verification_status == "pending"


def test_missing_owner_leaves_turf_untouched(db, pending_turf):
    with pytest.raises(ApprovalError) as exc:
        AdminService(db).review_turf(owner_id="ghost", action="reject", turf_id="turf-p")

    assert str(exc.value) == "Failed to reject owner: owner ghost not found"
    db.refresh(pending_turf)
    assert pending_turf.status == "pending"


def test_pending_list_carries_owner_business(db, pending_turf, active_turf):
    pending = AdminService(db).list_pending_turfs()

    assert [t["id"] for t in pending] == ["turf-p"]
    assert pending[0]["turf_owners"] == {"business_name": "Green Field Sports", "owner_name": "Olu Owner"}


def test_stats_count_platform_records(db, pending_turf, active_turf, customer, admin_user):
    db.add(
        Booking(
            turf_id="turf-1",
            user_id=customer.id,
            booking_date=date.today(),
            start_time="10:00",
            end_time="11:00",
            total_hours=1,
            base_price=200,
            total_amount=200,
        )
    )
    db.commit()

    assert AdminService(db).get_stats() == {
        "totalTurfs": 2,
        "pendingTurfs": 1,
        "totalUsers": 3,
        "totalBookings": 1,
    }


def test_admin_endpoints_reject_non_admins(client, customer, current_user):
    current_user["user"] = customer

    assert client.get("/admin/turfs/pending").status_code == 403
    assert client.get("/admin/stats").status_code == 403


def test_admin_email_allow_list(client, customer, current_user, monkeypatch):
    monkeypatch.setattr("turfconnect.auth.ADMIN_EMAILS", {"player@example.com"})
    current_user["user"] = customer

    assert client.get("/admin/stats").status_code == 200


def test_approval_api_reports_failures_as_server_errors(client, pending_turf, admin_user, current_user):
    current_user["user"] = admin_user

    missing = client.post("/admin/turfs/approval", json={"ownerId": "ghost", "action": "approve", "turfId": "turf-p"})
    approved = client.post(
        "/admin/turfs/approval", json={"ownerId": "owner-row-1", "action": "approve", "turfId": "turf-p"}
    )

    assert missing.status_code == 500
    assert missing.json()["detail"] == "Failed to verify owner: owner ghost not found"
    assert approved.json() == {"success": True}
    assert client.get("/admin/turfs/pending").json() == []
