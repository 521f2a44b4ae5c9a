"""Redis-backed persistence for in-progress registration flows"""

import base64
import hashlib
import json
import logging
import uuid
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from ...config import AUTH_FLOW_TTL_SECONDS, SECRET_KEY
from ...rate_limiter import get_redis_client
from .flow import RegistrationFlow

logger = logging.getLogger(__name__)

FLOW_KEY_PREFIX = "auth_flow"


# Generate encryption key from SECRET_KEY for held signup drafts
def get_fernet_key():
    key = hashlib.sha256(SECRET_KEY.encode()).digest()
    return base64.urlsafe_b64encode(key)


cipher = Fernet(get_fernet_key())


class RegistrationFlowStore:
    """Stores flows as JSON with the signup draft (password included) encrypted"""

    def __init__(self, redis_client=None, ttl_seconds: int = AUTH_FLOW_TTL_SECONDS):
        self._redis = redis_client
        self.ttl_seconds = ttl_seconds

    @property
    def redis(self):
        if self._redis is None:
            self._redis = get_redis_client()
        return self._redis

    @staticmethod
    def _key(flow_id: str) -> str:
        return f"{FLOW_KEY_PREFIX}:{flow_id}"

    def create(self, is_sign_up: bool = False) -> RegistrationFlow:
        flow = RegistrationFlow(id=str(uuid.uuid4()), is_sign_up=is_sign_up)
        self.save(flow)
        logger.info(f"🆕 Registration flow {flow.id} started (sign_up={is_sign_up})")
        return flow

    def save(self, flow: RegistrationFlow) -> None:
        data = flow.to_dict()
        draft = data.pop("draft")
        data["draft"] = cipher.encrypt(json.dumps(draft).encode()).decode() if draft else None
        self.redis.setex(self._key(flow.id), self.ttl_seconds, json.dumps(data))

    def load(self, flow_id: str) -> Optional[RegistrationFlow]:
        raw = self.redis.get(self._key(flow_id))
        if not raw:
            return None

        data = json.loads(raw)
        encrypted = data.get("draft")
        if encrypted:
            try:
                data["draft"] = json.loads(cipher.decrypt(encrypted.encode()).decode())
            except InvalidToken:
                logger.error(f"❌ Could not decrypt draft for flow {flow_id}; discarding it")
                data["draft"] = None
        return RegistrationFlow.from_dict(data)

    def delete(self, flow_id: str) -> None:
        self.redis.delete(self._key(flow_id))


def get_flow_store() -> RegistrationFlowStore:
    """Dependency injection for the registration flow store"""
    return RegistrationFlowStore()
