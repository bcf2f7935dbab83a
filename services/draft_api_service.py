# -*- coding: utf-8 -*-
"""
Draft API Service - persists development wizard drafts via REST API.

Connects to the /v1/developer/drafts endpoints. `save_draft` is the
persistence function handed to the auto-save controller: it returns
nothing on success and raises on any failure.
"""

import json
import threading
from typing import Any, Dict, Optional

import requests

from app.config import Config
from services.exceptions import ApiException, DraftNotFoundException, NetworkException
from utils.logger import get_logger

logger = get_logger(__name__)


class DraftApiService:
    """
    Service for development draft operations via REST API.

    The first successful save creates the draft (POST); its id is kept and
    later saves update it in place (PUT).

    Usage:
        api = DraftApiService(auth_token=token)
        api.save_draft(store.snapshot())
        print(api.draft_id)
    """

    DRAFTS_ENDPOINT = "/v1/developer/drafts"
    DEVELOPMENTS_ENDPOINT = "/v1/developer/developments"

    def __init__(
        self,
        base_url: Optional[str] = None,
        auth_token: Optional[str] = None,
        timeout: Optional[int] = None,
        draft_id: Optional[Any] = None,
        session: Optional[requests.Session] = None
    ):
        self.base_url = (base_url or Config.API_BASE_URL).rstrip('/')
        self.timeout = timeout or Config.API_TIMEOUT
        self._auth_token = auth_token or Config.API_TOKEN
        self._lock = threading.Lock()
        self._draft_id = draft_id
        # Bumped whenever the client moves to another draft
        self._generation = 0
        self._session = session or requests.Session()

    def set_auth_token(self, token: str):
        """Set the authentication token."""
        self._auth_token = token

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"DevWizard-Desktop/{Config.VERSION}"
        }
        if self._auth_token:
            headers["Authorization"] = f"Bearer {self._auth_token}"
        return headers

    def _request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict] = None
    ) -> Any:
        """
        Execute an HTTP request and translate failures.

        Raises:
            ApiException: server answered with an error status
            NetworkException: connection error or timeout
        """
        url = f"{self.base_url}{endpoint}"
        logger.info(f"[API REQ] {method} {endpoint}")
        if json_data:
            logger.debug(f"[API REQ] Body: {json.dumps(json_data, ensure_ascii=False, default=str)[:1000]}")

        try:
            response = self._session.request(
                method=method,
                url=url,
                json=json_data,
                headers=self._headers(),
                timeout=self.timeout
            )
            response.raise_for_status()

            result = response.json() if response.text else None
            logger.info(f"[API RES] {response.status_code} {endpoint}")
            return result

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else 0
            response_data = {}
            try:
                response_data = e.response.json() if e.response is not None else {}
            except ValueError:
                pass
            logger.error(f"[API ERR] {status_code} {method} {endpoint} | Response: {response_data}")
            raise ApiException(
                message=str(e),
                status_code=status_code,
                response_data=response_data
            ) from e
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"Network error: {endpoint} - {e}")
            raise NetworkException(str(e)) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {endpoint} - {e}")
            raise NetworkException(str(e)) from e

    # ==================== Drafts ====================

    @property
    def draft_id(self) -> Optional[Any]:
        with self._lock:
            return self._draft_id

    def _switch_draft(self, draft_id: Optional[Any]):
        """Point the client at another draft; saves started before this are stale."""
        with self._lock:
            self._draft_id = draft_id
            self._generation += 1

    def save_draft(self, snapshot: Dict[str, Any]) -> None:
        """
        Create or update the draft on the server.

        Runs on the auto-save worker thread. If the draft was published,
        deleted or replaced while a first-time POST was running, the newly
        created draft is deleted again instead of being adopted.

        Args:
            snapshot: WizardStateStore.snapshot()
        """
        with self._lock:
            draft_id = self._draft_id
            generation = self._generation

        payload = {"draft_data": snapshot}
        if draft_id is not None:
            self._request("PUT", f"{self.DRAFTS_ENDPOINT}/{draft_id}", payload)
            return

        result = self._request("POST", self.DRAFTS_ENDPOINT, payload) or {}
        created_id = result.get("id")
        with self._lock:
            stale = generation != self._generation
            if not stale:
                self._draft_id = created_id

        if stale:
            logger.warning(f"Draft {created_id} was created for a closed session, deleting it")
            if created_id is not None:
                self._request("DELETE", f"{self.DRAFTS_ENDPOINT}/{created_id}")
            return
        logger.info(f"Created draft {created_id}")

    def get_draft(self, draft_id: Any) -> Dict[str, Any]:
        """
        Load a persisted draft snapshot.

        Raises:
            DraftNotFoundException: the id does not exist
        """
        try:
            result = self._request("GET", f"{self.DRAFTS_ENDPOINT}/{draft_id}") or {}
        except ApiException as e:
            if e.status_code == 404:
                raise DraftNotFoundException(draft_id, e.response_data)
            raise
        self._switch_draft(draft_id)
        return result.get("draft_data", result)

    def delete_draft(self, draft_id: Optional[Any] = None) -> bool:
        """Delete a draft (default: the current one)."""
        current = self.draft_id
        target = draft_id if draft_id is not None else current
        if target is None:
            return False
        self._request("DELETE", f"{self.DRAFTS_ENDPOINT}/{target}")
        if target == current:
            self._switch_draft(None)
        return True

    def publish(self, snapshot: Dict[str, Any]) -> Dict[str, Any]:
        """
        Publish the development; the server discards the draft.

        Returns:
            The created development record
        """
        payload = {"development": snapshot}
        current = self.draft_id
        if current is not None:
            payload["draft_id"] = current
        result = self._request("POST", f"{self.DEVELOPMENTS_ENDPOINT}/publish", payload) or {}
        logger.info(f"Published development {result.get('id')}")
        self._switch_draft(None)
        return result
