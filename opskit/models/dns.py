"""DNS record model as returned by the Cloudflare API."""
from typing import Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict

RecordType = Literal["A", "AAAA", "CNAME", "TXT", "MX"]
RECORD_TYPES = get_args(RecordType)


class DNSRecord(BaseModel):
    """Snapshot of a provider-owned DNS record.

    ``type`` is kept as a plain string so zones holding record types outside
    :data:`RecordType` (NS, SRV, ...) can still be listed. New records are
    checked against :data:`RECORD_TYPES` before they are submitted.
    """

    model_config = ConfigDict(extra='ignore')

    id: str
    type: str
    name: str
    content: str
    ttl: int = 1
    proxied: Optional[bool] = None
