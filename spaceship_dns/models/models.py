"""
Data models for Spaceship-DNS.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

WireItem = Dict[str, Any]


@dataclass(frozen=True)
class RecordDescription:
    """
    A DNS record as described by a caller, before normalization.

    Type-specific data may be given as discrete fields or as a single
    free-form ``value`` string that is parsed according to ``kind``.
    """

    name: str
    kind: str
    ttl: Optional[int] = None
    value: Optional[str] = None
    address: Optional[str] = None
    target: Optional[str] = None
    cname: Optional[str] = None
    priority: Optional[int] = None
    exchange: Optional[str] = None
    weight: Optional[int] = None
    port: Optional[int] = None
    service: Optional[str] = None
    protocol: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.kind, str):
            object.__setattr__(self, "kind", self.kind.upper())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecordDescription":
        """
        Build a description from tool arguments.

        Args:
            data: Record mapping; the record type may be given as ``type`` or ``kind``

        Returns:
            RecordDescription: The description
        """
        kind = data.get("type", data.get("kind")) or ""
        return cls(
            name=data.get("name", ""),
            kind=str(kind),
            ttl=data.get("ttl"),
            value=data.get("value"),
            address=data.get("address"),
            target=data.get("target"),
            cname=data.get("cname"),
            priority=data.get("priority"),
            exchange=data.get("exchange"),
            weight=data.get("weight"),
            port=data.get("port"),
            service=data.get("service"),
            protocol=data.get("protocol"),
        )


@dataclass(frozen=True)
class _BaseRecord:
    name: str
    kind: str
    ttl: Optional[int]

    def _header(self) -> WireItem:
        item: WireItem = {"type": self.kind, "name": self.name}
        if self.ttl:
            item["ttl"] = self.ttl
        return item


@dataclass(frozen=True)
class AddressRecord(_BaseRecord):
    """A or AAAA record."""

    address: str

    def to_wire(self) -> WireItem:
        return {**self._header(), "address": self.address}


@dataclass(frozen=True)
class CNAMERecord(_BaseRecord):
    cname: str

    def to_wire(self) -> WireItem:
        return {**self._header(), "cname": self.cname}


@dataclass(frozen=True)
class MXRecord(_BaseRecord):
    priority: int
    exchange: str

    def to_wire(self) -> WireItem:
        return {
            **self._header(),
            "priority": self.priority,
            "exchange": self.exchange,
        }


@dataclass(frozen=True)
class SRVRecord(_BaseRecord):
    service: str
    protocol: str
    priority: int
    weight: int
    port: int
    target: str

    def to_wire(self) -> WireItem:
        return {
            **self._header(),
            "service": self.service,
            "protocol": self.protocol,
            "priority": self.priority,
            "weight": self.weight,
            "port": self.port,
            "target": self.target,
        }


@dataclass(frozen=True)
class TXTRecord(_BaseRecord):
    value: Optional[str]

    def to_wire(self) -> WireItem:
        return {**self._header(), "value": self.value}


@dataclass(frozen=True)
class OtherRecord(_BaseRecord):
    """Any record type without dedicated handling; the value is opaque."""

    value: Optional[str]

    def to_wire(self) -> WireItem:
        return {**self._header(), "value": self.value}


Record = Union[AddressRecord, CNAMERecord, MXRecord, SRVRecord, TXTRecord, OtherRecord]


@dataclass(frozen=True)
class RecordDeletionKey:
    """
    Identifies records to delete. Only the name and type are sent.
    """

    name: str
    kind: str

    def to_wire(self) -> WireItem:
        return {"type": self.kind, "name": self.name}
