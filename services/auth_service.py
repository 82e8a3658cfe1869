# services/auth_service.py
import logging
from typing import Optional, Tuple

from api_client import ApiClient, ApiError
from domain.models import Principal

logger = logging.getLogger(__name__)


def fetch_profile(client: ApiClient) -> Tuple[bool, str, Optional[Principal]]:
    try:
        body = client.get("/auth/me")
        principal = Principal.from_dict(body.get("data") or {})
    except ApiError as e:
        return False, e.describe("Failed to load profile"), None
    except (KeyError, ValueError) as e:
        logger.error("Unexpected profile payload: %s", e)
        return False, "Failed to load profile", None
    return True, "Fetched", principal


def update_profile(client: ApiClient, session, name: str) -> Tuple[bool, str]:
    """
    Rename the logged-in user and keep the persisted session in step.
    """
    name = (name or "").strip()
    if not name:
        return False, "Name is required"
    try:
        client.put("/auth/profile", json={"name": name})
    except ApiError as e:
        return False, e.describe("Failed to update profile")
    session.update_principal_name(name)
    return True, "Your profile information has been updated successfully"


def change_password(client: ApiClient, new_password: str) -> Tuple[bool, str]:
    try:
        client.put("/auth/change-password", json={"newPassword": new_password})
    except ApiError as e:
        return False, e.describe("Failed to change password")
    return True, "Your password has been changed successfully"
