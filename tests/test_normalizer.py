import pytest

from spaceship_dns.models.errors import ValidationError
from spaceship_dns.models.models import MXRecord, RecordDescription, SRVRecord
from spaceship_dns.records.normalizer import (
    deletion_keys,
    normalize,
    normalize_record,
    split_service_name,
)


@pytest.mark.parametrize("kind,address", [("A", "192.0.2.10"), ("AAAA", "2001:db8::1")])
def test_address_from_value(kind, address):
    [item] = normalize([{"name": "www", "type": kind, "value": address}])
    assert item == {"type": kind, "name": "www", "address": address}


def test_address_field_wins_over_value():
    [item] = normalize(
        [{"name": "@", "type": "A", "address": "192.0.2.1", "value": "192.0.2.2"}]
    )
    assert item["address"] == "192.0.2.1"
    assert "value" not in item


def test_address_missing():
    with pytest.raises(ValidationError):
        normalize([{"name": "@", "type": "A"}])


def test_cname_sources():
    items = normalize(
        [
            {"name": "a", "type": "CNAME", "target": "one.example.com"},
            {"name": "b", "type": "CNAME", "cname": "two.example.com"},
            {"name": "c", "type": "CNAME", "value": "three.example.com"},
        ]
    )
    assert [i["cname"] for i in items] == [
        "one.example.com",
        "two.example.com",
        "three.example.com",
    ]


def test_mx_from_value():
    [item] = normalize([{"name": "@", "type": "MX", "value": "10 mail.example.com"}])
    assert item == {
        "type": "MX",
        "name": "@",
        "priority": 10,
        "exchange": "mail.example.com",
    }


def test_mx_value_extra_whitespace_is_collapsed():
    record = normalize_record({"name": "@", "type": "MX", "value": " 5   mx  host "})
    assert record == MXRecord("@", "MX", None, priority=5, exchange="mx host")


def test_mx_discrete_fields_win():
    [item] = normalize(
        [
            {
                "name": "@",
                "type": "MX",
                "priority": 0,
                "exchange": "mx.example.com",
                "value": "20 other.example.com",
            }
        ]
    )
    assert item["priority"] == 0
    assert item["exchange"] == "mx.example.com"


def test_mx_single_token_value():
    with pytest.raises(ValidationError) as exc_info:
        normalize([{"name": "@", "type": "MX", "value": "bad"}])
    assert "bad" in str(exc_info.value)
    assert exc_info.value.value == "bad"


def test_mx_non_numeric_priority():
    with pytest.raises(ValidationError) as exc_info:
        normalize([{"name": "@", "type": "MX", "value": "high mail.example.com"}])
    assert exc_info.value.field == "priority"


def test_mx_without_payload():
    with pytest.raises(ValidationError, match="priority/exchange fields or value"):
        normalize([{"name": "@", "type": "MX", "priority": 10}])


def test_srv_from_value():
    [item] = normalize(
        [
            {
                "name": "_autodiscover._tcp",
                "type": "SRV",
                "value": "0 1 443 target.example.com",
            }
        ]
    )
    assert item == {
        "type": "SRV",
        "name": "_autodiscover._tcp",
        "service": "_autodiscover",
        "protocol": "_tcp",
        "priority": 0,
        "weight": 1,
        "port": 443,
        "target": "target.example.com",
    }


def test_srv_value_requires_service_name():
    with pytest.raises(ValidationError) as exc_info:
        normalize([{"name": "autodiscover", "type": "SRV", "value": "0 1 443 t.example.com"}])
    assert exc_info.value.field == "name"


def test_srv_value_too_short():
    with pytest.raises(ValidationError, match="0 1 443"):
        normalize([{"name": "_sip._udp", "type": "SRV", "value": "0 1 443"}])


def test_srv_discrete_derives_labels():
    record = normalize_record(
        {
            "name": "_sip._udp.voice",
            "type": "SRV",
            "priority": 10,
            "weight": 0,
            "port": 5060,
            "target": "sip.example.com",
        }
    )
    assert isinstance(record, SRVRecord)
    assert (record.service, record.protocol) == ("_sip", "_udp")


def test_srv_discrete_tolerates_plain_name():
    [item] = normalize(
        [
            {
                "name": "plain",
                "type": "SRV",
                "priority": 1,
                "weight": 2,
                "port": 3,
                "target": "t.example.com",
            }
        ]
    )
    assert item["service"] == ""
    assert item["protocol"] == ""


def test_srv_explicit_labels_win():
    [item] = normalize(
        [
            {
                "name": "_a._b",
                "type": "SRV",
                "priority": 1,
                "weight": 2,
                "port": 3,
                "target": "t.example.com",
                "service": "_imaps",
                "protocol": "_tcp",
            }
        ]
    )
    assert (item["service"], item["protocol"]) == ("_imaps", "_tcp")


def test_srv_without_payload():
    with pytest.raises(ValidationError, match="priority/weight/port/target"):
        normalize([{"name": "_a._b", "type": "SRV", "priority": 1, "target": "t"}])


def test_txt_and_unknown_pass_through():
    items = normalize(
        [
            {"name": "@", "type": "TXT", "value": "v=spf1  include:x ~all"},
            {"name": "@", "type": "caa", "value": '0 issue "letsencrypt.org"'},
        ]
    )
    assert items[0]["value"] == "v=spf1  include:x ~all"
    assert items[1] == {"type": "CAA", "name": "@", "value": '0 issue "letsencrypt.org"'}


@pytest.mark.parametrize("ttl", [None, 0])
def test_ttl_omitted(ttl):
    [item] = normalize([{"name": "@", "type": "TXT", "value": "x", "ttl": ttl}])
    assert "ttl" not in item


def test_ttl_kept():
    [item] = normalize([{"name": "@", "type": "TXT", "value": "x", "ttl": 7200}])
    assert item["ttl"] == 7200


def test_batch_fails_as_a_whole():
    with pytest.raises(ValidationError):
        normalize(
            [
                {"name": "@", "type": "A", "value": "192.0.2.1"},
                {"name": "@", "type": "MX", "value": "bad"},
            ]
        )


def test_accepts_descriptions():
    desc = RecordDescription(name="@", kind="A", value="192.0.2.1")
    assert normalize([desc]) == [{"type": "A", "name": "@", "address": "192.0.2.1"}]


def test_missing_name_or_type():
    with pytest.raises(ValidationError):
        normalize([{"type": "A", "value": "192.0.2.1"}])
    with pytest.raises(ValidationError):
        normalize([{"name": "@", "value": "192.0.2.1"}])


def test_deletion_keys_drop_values():
    keys = deletion_keys(
        [
            {"name": "@", "type": "MX", "value": "10 mail.example.com", "ttl": 60},
            {"name": "www", "type": "a", "address": "192.0.2.1"},
        ]
    )
    assert keys == [{"type": "MX", "name": "@"}, {"type": "A", "name": "www"}]


@pytest.mark.parametrize(
    "name,expected",
    [
        ("_autodiscover._tcp", ("_autodiscover", "_tcp")),
        ("_sip._udp.example.com", ("_sip", "_udp")),
        ("_sip.udp", None),
        ("@", None),
        ("", None),
    ],
)
def test_split_service_name(name, expected):
    assert split_service_name(name) == expected


@pytest.mark.parametrize(
    "record,field",
    [
        ({"name": "@", "type": "MX", "value": 10}, "value"),
        ({"name": "@", "type": "MX", "priority": "10", "exchange": "mx"}, "priority"),
        ({"name": "@", "type": "MX", "priority": True, "exchange": "mx"}, "priority"),
        (
            {"name": "_a._b", "type": "SRV", "priority": 1, "weight": -1, "port": 3, "target": "t"},
            "weight",
        ),
        (
            {"name": "_a._b", "type": "SRV", "priority": 1, "weight": 2, "port": 4.5, "target": "t"},
            "port",
        ),
        ({"name": "@", "type": "TXT", "value": "x", "ttl": "3600"}, "ttl"),
        ({"name": "@", "type": "TXT", "value": "x", "ttl": -60}, "ttl"),
        ({"name": "@", "type": "CNAME", "target": ["a", "b"]}, "target"),
    ],
)
def test_field_types_rejected(record, field):
    with pytest.raises(ValidationError) as exc_info:
        normalize([record])
    assert exc_info.value.field == field
    assert exc_info.value.value == record[field]


def test_non_string_name_rejected():
    with pytest.raises(ValidationError) as exc_info:
        normalize([{"name": 5, "type": "A", "value": "192.0.2.1"}])
    assert exc_info.value.field == "name"


@pytest.mark.parametrize("value", ["-5 mx.example.com", "1_0 mx.example.com", "+5 mx.example.com"])
def test_mx_value_priority_must_be_plain_digits(value):
    with pytest.raises(ValidationError) as exc_info:
        normalize([{"name": "@", "type": "MX", "value": value}])
    assert exc_info.value.field == "priority"
    assert exc_info.value.value == value


def test_srv_value_negative_port():
    with pytest.raises(ValidationError) as exc_info:
        normalize([{"name": "_sip._udp", "type": "SRV", "value": "0 1 -443 t.example.com"}])
    assert exc_info.value.field == "port"


@pytest.mark.parametrize("kind", ["TXT", "CAA"])
def test_value_required_for_pass_through_kinds(kind):
    with pytest.raises(ValidationError, match=f"{kind} record must have a value field"):
        normalize([{"name": "@", "type": kind}])


def test_empty_txt_value_is_kept():
    [item] = normalize([{"name": "@", "type": "TXT", "value": ""}])
    assert item["value"] == ""


def test_description_kind_is_upper_cased():
    desc = RecordDescription(name="@", kind="mx", value="10 mail.example.com")
    assert desc.kind == "MX"
    assert normalize_record(desc) == MXRecord(
        "@", "MX", None, priority=10, exchange="mail.example.com"
    )
