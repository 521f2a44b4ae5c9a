import json

from turfconnect.domain.auth.flow import AuthStep, Credentials, RegistrationFlow, SignupRole
from turfconnect.domain.auth.flow_store import RegistrationFlowStore


def test_draft_password_is_encrypted_at_rest(fake_redis):
    store = RegistrationFlowStore(redis_client=fake_redis, ttl_seconds=60)
    flow = store.create(is_sign_up=True)
    flow.selected_role = SignupRole.TURF_OWNER
    flow._hold_draft(
        Credentials("jane@example.com", "hunter22", "Jane Doe", "9876543210"), AuthStep.OWNER_DETAILS
    )

    store.save(flow)

    raw = fake_redis.get(f"auth_flow:{flow.id}")
    assert "hunter22" not in raw
    assert fake_redis.ttls[f"auth_flow:{flow.id}"] == 60

    loaded = store.load(flow.id)
    assert loaded.draft.password == "hunter22"
    assert loaded.step == AuthStep.OWNER_DETAILS


def test_tampered_draft_is_discarded(fake_redis):
    store = RegistrationFlowStore(redis_client=fake_redis)
    flow = RegistrationFlow(id="flow-1", is_sign_up=True, step=AuthStep.OWNER_DETAILS)
    fake_redis.setex(
        "auth_flow:flow-1",
        60,
        json.dumps({**flow.to_dict(), "draft": "not-a-fernet-token"}),
    )

    loaded = store.load("flow-1")

    assert loaded.draft is None
    assert loaded.step == AuthStep.OWNER_DETAILS


def test_missing_and_deleted_flows_load_as_none(fake_redis):
    store = RegistrationFlowStore(redis_client=fake_redis)
    flow = store.create()

    store.delete(flow.id)

    assert store.load(flow.id) is None
    assert store.load("unknown") is None
