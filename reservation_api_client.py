"""Reservation Store API client.

A thin wrapper around the HTTP routes of ``reservation_api`` for
front-ends and scripts.  Every method returns a tuple ``(data, error)``:
on success ``error`` is ``None``; on failure ``data`` is ``None`` (or an
empty list for listings) and ``error`` is a dictionary with
``status_code``, ``kind`` and ``message``.  ``kind`` is the service
error kind (``NotFound``, ``DuplicateEmail``, ``ValidationError``,
``Protected``) when the server reported one.

Typical use::

    api = ReservationAPI(base_url="http://localhost:8000")
    user, error = api.login("ana@x.com", "secret1")
    booking, error = api.create_booking("2026-03-01", "09:00")
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class ReservationAPI:
    """Client for the v1 routes of the reservation service."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:8000``.  The
                ``/api/v1`` prefix is added by the client.
            api_key: Optional bearer token.  ``login`` sets it.
            session: Optional requests session (anything with a
                compatible ``request`` method).  Created when omitted.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + "/api/v1"
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "kind": None, "message": str(exc)}

        if response.status_code >= 400:
            error = self._error_from(response)
            logger.error("API request failed (%s): %s", error["status_code"], error["message"])
            return None, error
        if response.content:
            return response.json(), None
        return None, None

    @staticmethod
    def _error_from(response) -> ApiError:
        kind = None
        try:
            detail = response.json().get("detail")
        except ValueError:
            detail = response.text
        if isinstance(detail, dict):
            kind = detail.get("kind")
            message = detail.get("message") or str(detail)
        elif isinstance(detail, list):
            # Request validation errors from FastAPI
            message = "; ".join(str(item.get("msg", item)) for item in detail)
        else:
            message = str(detail or getattr(response, "reason", None) or response.status_code)
        return {"status_code": response.status_code, "kind": kind, "message": message}

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------
    def login(self, email: str, credential: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Authenticate and keep the token for later calls.

        Returns the session user (id, name, email, role) on success.
        """
        data, error = self._request("POST", "/auth/login", json_body={"email": email, "credential": credential})
        if error:
            return None, error
        self.api_key = data["access_token"]
        return data["user"], None

    def logout(self) -> None:
        self.api_key = None

    def register(self, name: str, email: str, credential: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request(
            "POST", "/auth/register", json_body={"name": name, "email": email, "credential": credential}
        )

    def me(self) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("GET", "/auth/me")

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def create_account(
        self, name: str, email: str, credential: str, role: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request(
            "POST",
            "/accounts/",
            json_body={"name": name, "email": email, "credential": credential, "role": role},
        )

    def list_accounts(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._request("GET", "/accounts/")
        return data or [], error

    def get_account(self, account_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("GET", f"/accounts/{account_id}")

    def update_account(self, account_id: int, **fields: Any) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Send only the given fields (``name``, ``email``, ``credential``, ``role``)."""
        return self._request("PATCH", f"/accounts/{account_id}", json_body=fields)

    def delete_account(self, account_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Returns ``{"deletedAccount": ..., "cascadedCount": n}``."""
        return self._request("DELETE", f"/accounts/{account_id}")

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------
    def create_booking(self, date: str, time: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("POST", "/bookings/", json_body={"date": date, "time": time})

    def list_bookings(self, recent: bool = False) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._request("GET", "/bookings/", params={"recent": "true"} if recent else None)
        return data or [], error

    def list_today_bookings(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._request("GET", "/bookings/today")
        return data or [], error

    def list_my_bookings(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._request("GET", "/bookings/mine")
        return data or [], error

    def my_history(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        data, error = self._request("GET", "/bookings/mine/history")
        return data or [], error

    def booking_stats(self) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("GET", "/bookings/stats")

    def update_booking_status(self, booking_id: int, status: str) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("PATCH", f"/bookings/{booking_id}/status", json_body={"status": status})

    def cancel_booking(self, booking_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("POST", f"/bookings/{booking_id}/cancel")

    def reprogram_booking(
        self, booking_id: int, date: Optional[str] = None, time: Optional[str] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        body = {key: value for key, value in (("date", date), ("time", time)) if value is not None}
        return self._request("PATCH", f"/bookings/{booking_id}/schedule", json_body=body)

    def delete_booking(self, booking_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        return self._request("DELETE", f"/bookings/{booking_id}")
