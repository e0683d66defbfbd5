"""Tourism flow records API client.

This module defines a small client wrapper around the REST API served
by :mod:`turismo_api`.  The client uses the ``requests`` library
internally and exposes one high-level method per HTTP operation:

* :meth:`list_records` – return all records, or one page of them.
* :meth:`get_record` – fetch a single record by its identifier.
* :meth:`create_record` – add a new record.
* :meth:`update_record` – replace the data of an existing record.
* :meth:`delete_record` – remove a record.
* :meth:`get_community_records` – fetch the records grouped under a
  community.

It also offers the client-side helpers front ends need to present the
data: :meth:`filter_by_start_date` and :meth:`community_codes`.

No method raises on HTTP or network failures.  Every call returns a
tuple ``(data, error)`` where ``error`` is ``None`` on success and a
dictionary with ``status_code`` and ``message`` otherwise.
"""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8083"

Error = Dict[str, Any]


class TurismoAPI:
    """Client for interacting with the tourism flow records API."""

    RESOURCE_PATH = "/api/turismo"

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API, e.g. ``http://localhost:8083``.
                Defaults to the ``TURISMO_BASE_URL`` environment variable
                and then to :data:`DEFAULT_BASE_URL`.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for the server on each request.
        """
        base_url = base_url or os.getenv("TURISMO_BASE_URL") or DEFAULT_BASE_URL
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url`.
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` is the decoded JSON body,
            or the plain text body for text responses such as the
            confirmation messages returned by mutations.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return self._decode(response), None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                body = self._decode(exc.response)
                if isinstance(body, dict):
                    message = str(body.get("detail") or body.get("message") or body)
                elif body:
                    message = str(body)
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        """Return the JSON body of ``response``, or its text if it is not JSON."""
        if not response.content:
            return None
        if "json" in response.headers.get("Content-Type", ""):
            try:
                return response.json()
            except ValueError:
                pass
        return response.text

    def _record_path(self, record_id: Any) -> str:
        return f"{self.RESOURCE_PATH}/{quote(str(record_id), safe='')}"

    # ------------------------------------------------------------------
    # Record operations
    # ------------------------------------------------------------------
    def list_records(
        self, page: Optional[int] = None, size: Optional[int] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all records, or a page when both ``page`` and ``size`` are set.

        Returns:
            A tuple ``(records, error)``.  ``records`` is empty on failure.
        """
        params: Dict[str, Any] = {}
        if page is not None and size is not None:
            params = {"page": page, "size": size}
        data, error = self._request("GET", self.RESOURCE_PATH, params=params or None)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    def get_record(self, record_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single record by ID.

        Returns:
            A tuple ``(record, error)``.
        """
        data, error = self._request("GET", self._record_path(record_id))
        if error:
            return None, error
        return data, None

    def create_record(self, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[Error]]:
        """Add a new record.

        Args:
            payload: Record data using the API field names (``from``,
                ``to``, ``timeRange``, ``total``).  ``from`` and
                ``timeRange`` are required by the server.
        Returns:
            A tuple ``(message, error)`` where ``message`` is the
            server's confirmation text.
        """
        return self._request("POST", self.RESOURCE_PATH, json_body=payload)

    def update_record(self, record_id: Any, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[Error]]:
        """Replace ``from``, ``to``, ``timeRange`` and ``total`` of a record.

        Returns:
            A tuple ``(message, error)``.
        """
        return self._request("PUT", self._record_path(record_id), json_body=payload)

    def delete_record(self, record_id: Any) -> Tuple[Optional[str], Optional[Error]]:
        """Delete a record.

        Returns:
            A tuple ``(message, error)``.
        """
        return self._request("DELETE", self._record_path(record_id))

    def get_community_records(self, community: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve the records grouped under ``community``.

        The community name is percent-encoded into the path, so names
        with spaces or accents are safe to pass as they are.  The server
        form-decodes the name again, so a literal ``+`` is read as a space
        and names containing one cannot be looked up.

        Returns:
            A tuple ``(records, error)``.  A community without records
            comes back as an error with ``status_code`` 404.
        """
        path = f"{self.RESOURCE_PATH}/community/{quote(community, safe='')}"
        data, error = self._request("GET", path)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    # ------------------------------------------------------------------
    # Client-side helpers
    # ------------------------------------------------------------------
    @staticmethod
    def filter_by_start_date(
        records: List[Dict[str, Any]], day: Union[date, str, None]
    ) -> List[Dict[str, Any]]:
        """Return the records whose ``timeRange.fecha_inicio`` equals ``day``.

        ``day`` may be a :class:`datetime.date` or an ISO ``YYYY-MM-DD``
        string.  ``None`` disables the filter and returns every record.
        """
        if day is None:
            return list(records)
        wanted = day.isoformat() if isinstance(day, date) else str(day)
        return [
            record for record in records
            if (record.get("timeRange") or {}).get("fecha_inicio") == wanted
        ]

    @staticmethod
    def community_codes(records: List[Dict[str, Any]]) -> List[str]:
        """Return the distinct destination communities, sorted alphabetically.

        Records without a destination community are skipped.
        """
        codes = {
            (record.get("to") or {}).get("comunidad")
            for record in records
        }
        codes.discard(None)
        return sorted(codes)
