"""Bearer tokens for simulated users.

Tokens are signed with the same ``JWT_SECRET`` the target API verifies with,
so run Locust with the API's environment.
"""

import uuid

from shared.auth import Actor, create_access_token


def bearer_headers(role: str = "user", user_id: str | None = None, name: str | None = None) -> dict[str, str]:
    user_id = user_id or f"lt-{role}-{uuid.uuid4().hex[:8]}"
    token = create_access_token(Actor(id=user_id, role=role, name=name or user_id))
    return {"Authorization": f"Bearer {token}"}
