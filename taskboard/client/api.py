"""Async HTTP wrappers around the task board API."""

import logging
import os
from typing import Any, Dict, List, Optional

import httpx

API_URL = os.getenv("TASKBOARD_API_URL", "http://localhost:5000/api")

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class TaskBoardClient:
    """Holds the session token and issues one request per call.

    Pass ``transport`` to talk to an in-process app (e.g. ``httpx.ASGITransport``).
    """

    def __init__(
        self,
        base_url: str = API_URL,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.user: Optional[Dict[str, Any]] = None
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        await self._http.aclose()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        res = await self._http.request(method, url, headers=headers, **kwargs)
        if res.is_error:
            try:
                message = res.json().get("message") or res.reason_phrase
            except ValueError:
                message = res.text or res.reason_phrase
            logger.warning(f"{method} {url} failed with {res.status_code}: {message}")
            raise ApiError(res.status_code, message)
        return res.json()

    # --- Auth --- #

    async def register(
        self,
        full_name: str,
        username: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> Dict[str, Any]:
        if password != confirm_password:
            raise ValueError("Passwords do not match")
        return await self._request(
            "POST",
            "auth/register",
            json={
                "fullName": full_name,
                "username": username,
                "email": email,
                "password": password,
            },
        )

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        data = await self._request(
            "POST", "auth/login", json={"username": username, "password": password}
        )
        self.token = data["token"]
        self.user = data["user"]
        return self.user

    def logout(self):
        self.token = None
        self.user = None

    # --- Cards --- #

    async def list_cards(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "cards")

    async def create_card(self, card: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "cards", json=card)

    async def update_card(self, card: Dict[str, Any]) -> Dict[str, Any]:
        """PUT the whole card; the server keeps only the fields it allows."""
        return await self._request("PUT", f"cards/{card['id']}", json=card)

    async def delete_card(self, card_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"cards/{card_id}")
