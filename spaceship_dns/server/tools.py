"""
Tool handlers for Spaceship-DNS.

Each handler takes a SpaceshipClient and tool arguments and returns the text
shown to the MCP caller. Errors propagate unchanged.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from spaceship_dns.models.errors import ValidationError
from spaceship_dns.provider.spaceship import SpaceshipClient
from spaceship_dns.records.normalizer import deletion_keys, normalize

logger = logging.getLogger("spaceship-dns.server")


def _require_records(records: List[Dict[str, Any]]) -> None:
    if not records:
        raise ValidationError(
            "At least one record is required", field="records", value=records
        )


async def list_dns_records(client: SpaceshipClient, domain: str) -> str:
    records = await client.list_records(domain)
    return f"DNS records for {domain}:\n{json.dumps(records, indent=2)}"


async def _save(
    client: SpaceshipClient, domain: str, records: List[Dict[str, Any]], verb: str
) -> str:
    _require_records(records)
    items = normalize(records)
    await client.upsert_records(domain, items)
    return f"Successfully {verb} {len(items)} DNS record(s) for {domain}"


async def create_dns_records(
    client: SpaceshipClient, domain: str, records: List[Dict[str, Any]]
) -> str:
    return await _save(client, domain, records, "created")


async def update_dns_records(
    client: SpaceshipClient, domain: str, records: List[Dict[str, Any]]
) -> str:
    return await _save(client, domain, records, "updated")


async def delete_dns_records(
    client: SpaceshipClient, domain: str, records: List[Dict[str, Any]]
) -> str:
    _require_records(records)
    keys = deletion_keys(records)
    await client.delete_records(domain, keys)
    return f"Successfully deleted {len(keys)} DNS record(s) for {domain}"


# Single-record convenience builders. Each produces one record mapping that
# goes through the same normalization as the batch tools.


def _with_ttl(record: Dict[str, Any], ttl: Optional[int]) -> Dict[str, Any]:
    if ttl:
        record["ttl"] = ttl
    return record


def address_record(
    kind: str, name: str, address: str, ttl: Optional[int] = None
) -> Dict[str, Any]:
    return _with_ttl({"type": kind, "name": name, "address": address}, ttl)


def cname_record(name: str, target: str, ttl: Optional[int] = None) -> Dict[str, Any]:
    return _with_ttl({"type": "CNAME", "name": name, "target": target}, ttl)


def mx_record(
    name: str, priority: int, exchange: str, ttl: Optional[int] = None
) -> Dict[str, Any]:
    return _with_ttl(
        {"type": "MX", "name": name, "priority": priority, "exchange": exchange},
        ttl,
    )


def srv_record(
    name: str,
    priority: int,
    weight: int,
    port: int,
    target: str,
    service: Optional[str] = None,
    protocol: Optional[str] = None,
    ttl: Optional[int] = None,
) -> Dict[str, Any]:
    record = {
        "type": "SRV",
        "name": name,
        "priority": priority,
        "weight": weight,
        "port": port,
        "target": target,
    }
    if service:
        record["service"] = service
    if protocol:
        record["protocol"] = protocol
    return _with_ttl(record, ttl)


def txt_record(name: str, value: str, ttl: Optional[int] = None) -> Dict[str, Any]:
    return _with_ttl({"type": "TXT", "name": name, "value": value}, ttl)
