"""
Record normalizer module for Spaceship-DNS.

This module converts caller-supplied record descriptions into the exact item
shape expected by the Spaceship DNS API. It performs no I/O.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from spaceship_dns.models.errors import ValidationError
from spaceship_dns.models.models import (
    AddressRecord,
    CNAMERecord,
    MXRecord,
    OtherRecord,
    Record,
    RecordDeletionKey,
    RecordDescription,
    SRVRecord,
    TXTRecord,
    WireItem,
)

logger = logging.getLogger("spaceship-dns.records")


def split_service_name(name: str) -> Optional[Tuple[str, str]]:
    """
    Extract the SRV service and protocol labels from an owner name.

    ``"_autodiscover._tcp"`` and ``"_sip._udp.voice"`` both match; the labels
    keep their leading underscore.

    Args:
        name: Record owner name

    Returns:
        Optional[Tuple[str, str]]: (service, protocol), or None if the name does not match
    """
    parts = (name or "").split(".")
    if len(parts) >= 2 and parts[0].startswith("_") and parts[1].startswith("_"):
        return parts[0], parts[1]
    return None


_STRING_FIELDS = (
    "name",
    "value",
    "address",
    "target",
    "cname",
    "exchange",
    "service",
    "protocol",
)
_INTEGER_FIELDS = ("ttl", "priority", "weight", "port")


def _parse_int(token: str, field: str, value: str) -> int:
    # Plain ASCII digits only: no sign, no underscores
    if not (token.isascii() and token.isdigit()):
        raise ValidationError(
            f"Invalid {field} '{token}' in value: {value}. "
            "Expected a non-negative integer",
            field=field,
            value=value,
        )
    return int(token)


def _check_field_types(desc: RecordDescription) -> None:
    """
    Reject fields whose type cannot be sent as-is.

    Integer fields must be non-negative ints (bools excluded); text fields
    must be strings.
    """
    for field in _STRING_FIELDS:
        received = getattr(desc, field)
        if received is not None and not isinstance(received, str):
            raise ValidationError(
                f"Field '{field}' must be a string, got {received!r}",
                field=field,
                value=received,
            )
    for field in _INTEGER_FIELDS:
        received = getattr(desc, field)
        if received is None:
            continue
        if isinstance(received, bool) or not isinstance(received, int) or received < 0:
            raise ValidationError(
                f"Field '{field}' must be a non-negative integer, got {received!r}",
                field=field,
                value=received,
            )


def _normalize_address(desc: RecordDescription) -> Record:
    address = desc.address or desc.value
    if not address:
        raise ValidationError(
            f"{desc.kind} record must have either address or value field",
            field="address",
            value=address,
        )
    return AddressRecord(desc.name, desc.kind, desc.ttl, address=address)


def _normalize_cname(desc: RecordDescription) -> Record:
    target = desc.target or desc.cname or desc.value
    if not target:
        raise ValidationError(
            "CNAME record must have either target/cname or value field",
            field="target",
            value=target,
        )
    return CNAMERecord(desc.name, desc.kind, desc.ttl, cname=target)


def _normalize_mx(desc: RecordDescription) -> Record:
    if desc.priority is not None and desc.exchange:
        return MXRecord(
            desc.name,
            desc.kind,
            desc.ttl,
            priority=desc.priority,
            exchange=desc.exchange,
        )

    if desc.value:
        tokens = desc.value.split()
        if len(tokens) < 2:
            raise ValidationError(
                f"Invalid MX record value format: {desc.value}. "
                "Expected '<priority> <exchange>'",
                field="value",
                value=desc.value,
            )
        return MXRecord(
            desc.name,
            desc.kind,
            desc.ttl,
            priority=_parse_int(tokens[0], "priority", desc.value),
            exchange=" ".join(tokens[1:]),
        )

    raise ValidationError(
        "MX record must have either priority/exchange fields or value field",
        field="value",
        value=desc.value,
    )


def _normalize_srv(desc: RecordDescription) -> Record:
    discrete = (desc.priority, desc.weight, desc.port)
    if all(f is not None for f in discrete) and desc.target:
        # A name without service/protocol labels is tolerated here
        service, protocol = split_service_name(desc.name) or ("", "")
        return SRVRecord(
            desc.name,
            desc.kind,
            desc.ttl,
            service=desc.service or service,
            protocol=desc.protocol or protocol,
            priority=desc.priority,
            weight=desc.weight,
            port=desc.port,
            target=desc.target,
        )

    if desc.value:
        tokens = desc.value.split()
        if len(tokens) < 4:
            raise ValidationError(
                f"Invalid SRV record value format: {desc.value}. "
                "Expected '<priority> <weight> <port> <target>'",
                field="value",
                value=desc.value,
            )
        labels = split_service_name(desc.name)
        if labels is None:
            raise ValidationError(
                f"SRV record name must be in format _service._protocol: {desc.name}",
                field="name",
                value=desc.name,
            )
        return SRVRecord(
            desc.name,
            desc.kind,
            desc.ttl,
            service=labels[0],
            protocol=labels[1],
            priority=_parse_int(tokens[0], "priority", desc.value),
            weight=_parse_int(tokens[1], "weight", desc.value),
            port=_parse_int(tokens[2], "port", desc.value),
            target=tokens[3],
        )

    raise ValidationError(
        "SRV record must have either priority/weight/port/target fields or value field",
        field="value",
        value=desc.value,
    )


def _require_value(desc: RecordDescription) -> str:
    if desc.value is None:
        raise ValidationError(
            f"{desc.kind} record must have a value field",
            field="value",
            value=desc.value,
        )
    return desc.value


def _normalize_txt(desc: RecordDescription) -> Record:
    return TXTRecord(desc.name, desc.kind, desc.ttl, value=_require_value(desc))


def _normalize_other(desc: RecordDescription) -> Record:
    return OtherRecord(desc.name, desc.kind, desc.ttl, value=_require_value(desc))


_NORMALIZERS: Dict[str, Callable[[RecordDescription], Record]] = {
    "A": _normalize_address,
    "AAAA": _normalize_address,
    "CNAME": _normalize_cname,
    "MX": _normalize_mx,
    "SRV": _normalize_srv,
    "TXT": _normalize_txt,
}


def _as_description(record: Any) -> RecordDescription:
    if isinstance(record, RecordDescription):
        return record
    if isinstance(record, dict):
        return RecordDescription.from_dict(record)
    raise ValidationError(
        f"Record must be an object, got {type(record).__name__}",
        field="record",
        value=record,
    )


def _check_identity(desc: RecordDescription) -> None:
    if not desc.name or not isinstance(desc.name, str):
        raise ValidationError("Record name is required", field="name", value=desc.name)
    if not desc.kind:
        raise ValidationError("Record type is required", field="type", value=desc.kind)


def normalize_record(record: Any) -> Record:
    """
    Validate one record description and resolve it into a typed record.

    Args:
        record: RecordDescription or mapping of tool arguments

    Returns:
        Record: The typed record

    Raises:
        ValidationError: If the description is malformed
    """
    desc = _as_description(record)
    _check_identity(desc)
    _check_field_types(desc)
    return _NORMALIZERS.get(desc.kind, _normalize_other)(desc)


def normalize(records: Iterable[Any]) -> List[WireItem]:
    """
    Normalize a batch of record descriptions into API wire items.

    The whole batch is validated before anything is returned, so a single
    malformed record fails the batch.

    Args:
        records: Record descriptions

    Returns:
        List[WireItem]: Items ready to be sent to the API

    Raises:
        ValidationError: If any record is malformed
    """
    typed = [normalize_record(record) for record in records]
    logger.debug(f"Normalized {len(typed)} record(s)")
    return [record.to_wire() for record in typed]


def deletion_keys(records: Iterable[Any]) -> List[WireItem]:
    """
    Reduce records to the name/type pairs the delete operation needs.

    Any value fields on the input are dropped.

    Args:
        records: Record descriptions

    Returns:
        List[WireItem]: Deletion keys in wire form
    """
    keys = []
    for record in records:
        desc = _as_description(record)
        _check_identity(desc)
        keys.append(RecordDeletionKey(desc.name, desc.kind).to_wire())
    return keys
