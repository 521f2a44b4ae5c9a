from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException

from turfconnect.domain.players.schemas import PlayerProfileSetup, PlayerProfileUpdate
from turfconnect.domain.players.service import PlayerService, generate_verification_code
from turfconnect.models import Profile, UserProfile, UserSportsProfile
from turfconnect.services import sms_service


def setup_form(**overrides):
    values = {
        "fullName": "Jane Player",
        "phoneNumber": "9876543210",
        "age": 24,
        "gender": "female",
        "location": "Indiranagar",
        "preferredSports": ["Football", "cricket", "football"],
        "skillLevel": "Advanced",
    }
    values.update(overrides)
    return PlayerProfileSetup(**values)


@pytest.fixture
def sent_codes(monkeypatch):
    codes = []

    async def fake_send(phone, code):
        codes.append((phone, code))
        return True, None

    monkeypatch.setattr(sms_service, "send_verification_code", fake_send)
    return codes


def test_verification_codes_are_six_digits():
    for _ in range(50):
        code = generate_verification_code()
        assert len(code) == 6 and code.isdigit() and code[0] != "0"


def test_profile_setup_creates_one_sports_profile_per_sport(db, customer):
    result = PlayerService(db).setup_profile(setup_form(), customer)

    assert result["redirect_to"] == "/find-players"
    sports = db.query(UserSportsProfile).filter(UserSportsProfile.user_id == customer.id).all()
    assert sorted(s.sport for s in sports) == ["cricket", "football"]
    assert {s.skill_level for s in sports} == {3}
    assert {s.experience_level for s in sports} == {"advanced"}


def test_my_profile_requires_setup(db, customer):
    with pytest.raises(HTTPException) as exc:
        PlayerService(db).get_my_profile(customer)
    assert exc.value.status_code == 404
    assert exc.value.headers["X-Redirect-To"] == "/player-profile-setup"


def test_changing_phone_number_requires_verification_again(db, customer):
    service = PlayerService(db)
    service.setup_profile(setup_form(), customer)
    profile = db.query(UserProfile).filter(UserProfile.user_id == customer.id).one()
    profile.phone_verified = True
    db.commit()

    updated = service.update_my_profile(PlayerProfileUpdate(phoneNumber="9123456780"), customer)

    assert updated["phone_number"] == "9123456780"
    assert updated["phone_verified"] is False


def test_availability_toggle(db, customer):
    service = PlayerService(db)
    service.setup_profile(setup_form(), customer)

    assert service.update_my_profile(PlayerProfileUpdate(isAvailable=False), customer)["is_available"] is False


async def test_phone_code_is_stored_with_ten_minute_expiry(db, customer, sent_codes):
    customer.phone_number = "9876543210"
    db.commit()

    result = await PlayerService(db).send_phone_code(customer)

    profile = db.query(UserProfile).filter(UserProfile.user_id == customer.id).one()
    assert sent_codes == [("9876543210", profile.phone_verification_code)]
    remaining = profile.phone_verification_expires_at - datetime.utcnow()
    assert timedelta(minutes=9) < remaining <= timedelta(minutes=10)
    assert result["title"] == "Verification Code Sent"


async def test_phone_code_needs_a_number(db, customer, sent_codes):
    with pytest.raises(HTTPException) as exc:
        await PlayerService(db).send_phone_code(customer)
    assert exc.value.status_code == 400
    assert sent_codes == []


async def test_correct_code_verifies_phone(db, customer, sent_codes):
    service = PlayerService(db)
    await service.send_phone_code(customer, "9876543210")
    code = sent_codes[0][1]

    result = service.verify_phone_code(customer, code)

    profile = db.query(UserProfile).filter(UserProfile.user_id == customer.id).one()
    assert result["redirect_to"] == "/find-players"
    assert profile.phone_verified is True
    assert profile.phone_verification_code is None


async def test_wrong_code_is_rejected(db, customer, sent_codes):
    service = PlayerService(db)
    await service.send_phone_code(customer, "9876543210")
    wrong = "111111" if sent_codes[0][1] != "111111" else "222222"

    with pytest.raises(HTTPException) as exc:
        service.verify_phone_code(customer, wrong)
    assert exc.value.detail == "The verification code is incorrect"


def test_expired_code_is_rejected(db, customer):
    db.add(
        UserProfile(
            user_id=customer.id,
            phone_number="9876543210",
            phone_verification_code="123456",
            phone_verification_expires_at=datetime.utcnow() - timedelta(minutes=1),
        )
    )
    db.commit()

    with pytest.raises(HTTPException) as exc:
        PlayerService(db).verify_phone_code(customer, "123456")
    assert exc.value.detail == "The verification code has expired. Please request a new one."


def test_short_codes_are_rejected_before_lookup(db, customer):
    with pytest.raises(HTTPException) as exc:
        PlayerService(db).verify_phone_code(customer, "123")
    assert exc.value.detail == "Please enter a 6-digit verification code"


def test_phone_status_sends_owners_to_dashboard(db, owner_user):
    assert PlayerService(db).phone_status(owner_user)["redirect_to"] == "/owner-dashboard"


def add_player(db, user_id, sport="football", skill=2, age=25, gender="male", rating=3.0, available=True):
    db.add(Profile(id=user_id, email=f"{user_id}@example.com", role="customer"))
    db.add(
        UserProfile(
            user_id=user_id,
            full_name=user_id.title(),
            age=age,
            gender=gender,
            location="HSR",
            is_available=available,
            overall_rating=rating,
        )
    )
    db.add(UserSportsProfile(user_id=user_id, sport=sport, skill_level=skill))
    db.commit()


def test_find_players_applies_filters_and_excludes_caller(db, customer):
    PlayerService(db).setup_profile(setup_form(), customer)
    add_player(db, "ravi", skill=2, age=25, rating=4.5)
    add_player(db, "arjun", skill=4, age=31, rating=3.0)
    add_player(db, "meera", skill=3, age=22, gender="female", rating=4.0, available=False)
    add_player(db, "sam", sport="tennis")
    service = PlayerService(db)

    everyone = service.find_players(customer, "Football")
    assert [p["user_id"] for p in everyone] == ["ravi", "meera", "arjun"]

    assert [p["user_id"] for p in service.find_players(customer, "football", available_only=True)] == [
        "ravi",
        "arjun",
    ]
    assert [p["user_id"] for p in service.find_players(customer, "football", skill_min=3, skill_max=4)] == [
        "meera",
        "arjun",
    ]
    assert [p["user_id"] for p in service.find_players(customer, "football", age_min=20, age_max=24)] == ["meera"]
    assert [p["user_id"] for p in service.find_players(customer, "football", gender="any", min_rating=4)] == [
        "ravi",
        "meera",
    ]
    # A single skill bound is ignored
    assert len(service.find_players(customer, "football", skill_min=4)) == 3


def test_find_players_is_capped_at_twenty(db, customer):
    for i in range(25):
        add_player(db, f"player{i:02d}")

    assert len(PlayerService(db).find_players(customer, "football")) == 20


def test_phone_verification_api(client, db, customer, current_user, sent_codes):
    current_user["user"] = customer

    sent = client.post("/players/phone/send-code", json={"phoneNumber": "+91 98765 43210"})
    bad = client.post("/players/phone/verify", json={"code": "12"})
    good = client.post("/players/phone/verify", json={"code": sent_codes[0][1]})

    assert sent.status_code == 200
    assert bad.status_code == 400
    assert good.json()["redirect_to"] == "/find-players"
    assert client.get("/players/phone/status").json()["phone_verified"] is True
