"""Cloudflare DNS record management over the v4 REST API."""
from typing import Any, Dict, List, Optional

import requests

from opskit.core.config import CloudflareConfig
from opskit.core.logger import get_logger
from opskit.models import RECORD_TYPES, DNSRecord

logger = get_logger(__name__)

# Defaults for new records. A ttl of 1 means "automatic".
RECORD_DEFAULTS = {"ttl": 1, "proxied": False}


class ApiFailure(Exception):
    """Raised when the API envelope reports ``success: false``."""

    def __init__(self, errors: List[Any]):
        self.errors = list(errors or [])
        super().__init__(f"Cloudflare API error: {self.errors}")


def check_record_type(value: str) -> str:
    """Normalize a record type, rejecting anything outside RECORD_TYPES."""
    record_type = str(value).upper()
    if record_type not in RECORD_TYPES:
        raise ValueError(
            f"Unsupported record type '{value}'. Use one of: {', '.join(RECORD_TYPES)}"
        )
    return record_type


class CloudflareClient:
    """Authenticated client for one zone's DNS records.

    Example:
        client = CloudflareClient(CloudflareConfig.from_env())
        for record in client.list_records():
            print(record.name, record.content)
    """

    def __init__(self, config: CloudflareConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {config.api_token}",
            "Content-Type": "application/json",
        })

    @property
    def records_path(self) -> str:
        return f"/zones/{self.config.zone_id}/dns_records"

    def request(
        self,
        path: str,
        method: str = "GET",
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Call the API and unwrap the response envelope.

        Args:
            path: Path below the API base URL, starting with '/'
            method: HTTP method
            json: Request body
            params: Query string parameters

        Returns:
            The envelope's ``result`` payload

        Raises:
            ApiFailure: If the envelope's success flag is false
        """
        url = f"{self.config.base_url}{path}"
        logger.debug(f"{method} {url}")

        response = self.session.request(
            method,
            url,
            json=json,
            params=params,
            timeout=self.config.timeout,
        )
        envelope = response.json()

        if not envelope.get("success"):
            raise ApiFailure(envelope.get("errors") or [])

        return envelope.get("result")

    def list_records(
        self, record_type: Optional[str] = None, name: Optional[str] = None
    ) -> List[DNSRecord]:
        params = {}
        if record_type:
            params["type"] = record_type.upper()
        if name:
            params["name"] = name

        result = self.request(self.records_path, params=params or None)
        return [DNSRecord.model_validate(item) for item in result or []]

    def get_record(self, record_id: str) -> DNSRecord:
        return DNSRecord.model_validate(self.request(f"{self.records_path}/{record_id}"))

    def add_record(self, fields: Dict[str, Any]) -> DNSRecord:
        """Create a record from ``fields`` merged over :data:`RECORD_DEFAULTS`.

        ``fields`` needs at least type, name and content.
        """
        missing = [key for key in ("type", "name", "content") if not fields.get(key)]
        if missing:
            raise ValueError(f"Missing record field(s): {', '.join(missing)}")

        payload = {**RECORD_DEFAULTS, **fields}
        payload["type"] = check_record_type(payload["type"])

        logger.debug(f"Creating {payload['type']} record {payload['name']}")
        result = self.request(self.records_path, method="POST", json=payload)
        return DNSRecord.model_validate(result)

    def update_record(self, record_id: str, patch: Dict[str, Any]) -> DNSRecord:
        """Replace a record with its current fields shallow-merged with ``patch``.

        Only type, name, content, ttl and proxied are carried over from the
        current record; anything else the provider stores is not resubmitted.
        """
        current = self.get_record(record_id)

        payload: Dict[str, Any] = {
            "type": current.type,
            "name": current.name,
            "content": current.content,
            "ttl": current.ttl,
            "proxied": current.proxied if current.proxied is not None else False,
        }
        payload.update(patch)
        payload.pop("id", None)
        if "type" in patch:
            payload["type"] = check_record_type(patch["type"])

        logger.debug(f"Replacing record {record_id}")
        result = self.request(f"{self.records_path}/{record_id}", method="PUT", json=payload)
        return DNSRecord.model_validate(result)

    def delete_record(self, record_id: str) -> None:
        logger.debug(f"Deleting record {record_id}")
        self.request(f"{self.records_path}/{record_id}", method="DELETE")
