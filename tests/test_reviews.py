from datetime import date, timedelta

import pytest
from fastapi import HTTPException

from turfconnect.domain.reviews.schemas import ReviewCreate
from turfconnect.domain.reviews.service import ReviewService
from turfconnect.models import Booking


@pytest.fixture
def booking(db, active_turf, customer):
    booking = Booking(
        id="booking-1",
        turf_id=active_turf.id,
        user_id=customer.id,
        booking_date=date.today() - timedelta(days=1),
        start_time="18:00",
        end_time="19:00",
        total_hours=1,
        base_price=200,
        total_amount=200,
        status="completed",
    )
    db.add(booking)
    db.commit()
    return booking


def test_review_lists_reviewer_name_and_average(db, booking, customer):
    service = ReviewService(db)
    service.create_review(ReviewCreate(bookingId="booking-1", rating=5, comment=" Great pitch "), customer)
    service.create_review(ReviewCreate(bookingId="booking-1", rating=4), customer)

    result = service.list_turf_reviews("turf-1")

    assert result["total_reviews"] == 2
    assert result["average_rating"] == 4.5
    assert {r["reviewer_name"] for r in result["reviews"]} == {"Jane Player"}
    assert "Great pitch" in {r["comment"] for r in result["reviews"]}


def test_turf_without_reviews_has_no_average(db, active_turf):
    result = ReviewService(db).list_turf_reviews("turf-1")

    assert result == {"reviews": [], "average_rating": None, "total_reviews": 0}


def test_new_review_invalidates_cached_list(db, booking, customer):
    service = ReviewService(db)
    assert service.list_turf_reviews("turf-1")["total_reviews"] == 0

    service.create_review(ReviewCreate(bookingId="booking-1", rating=3), customer)

    assert service.list_turf_reviews("turf-1")["total_reviews"] == 1


def test_only_the_booking_owner_may_review(db, booking, owner_user):
    with pytest.raises(HTTPException) as exc:
        ReviewService(db).create_review(ReviewCreate(bookingId="booking-1", rating=1), owner_user)
    assert exc.value.status_code == 404


def test_rating_must_be_between_one_and_five(client, booking, customer, current_user):
    current_user["user"] = customer

    too_high = client.post("/reviews", json={"bookingId": "booking-1", "rating": 6})
    ok = client.post("/reviews", json={"bookingId": "booking-1", "rating": 5})

    assert too_high.status_code == 422
    assert ok.status_code == 201
    assert client.get("/reviews/turf/turf-1").json()["average_rating"] == 5


@pytest.mark.parametrize("status", ["pending", "confirmed", "cancelled"])
def test_only_completed_bookings_can_be_reviewed(db, booking, customer, status):
    booking.status = status
    booking.booking_date = date.today() + timedelta(days=3)
    db.commit()

    with pytest.raises(HTTPException) as exc:
        ReviewService(db).create_review(ReviewCreate(bookingId="booking-1", rating=5), customer)

    assert exc.value.status_code == 400
    assert exc.value.detail == "Only completed bookings can be reviewed"
    assert ReviewService(db).list_turf_reviews("turf-1")["total_reviews"] == 0
