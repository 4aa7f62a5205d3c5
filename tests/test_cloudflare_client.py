"""Tests for the Cloudflare DNS client."""
import pytest

from opskit.services.cloudflare import ApiFailure, CloudflareClient

from conftest import FakeSession, ok, record

RECORDS = "https://api.cloudflare.com/client/v4/zones/zone-1/dns_records"


def test_session_carries_auth_headers(cf_config):
    session = FakeSession()
    CloudflareClient(cf_config, session=session)

    assert session.headers["Authorization"] == "Bearer test-token"
    assert session.headers["Content-Type"] == "application/json"


def test_request_returns_result(cloudflare, fake_session):
    fake_session.queue(ok({"id": "zone-1"}))

    assert cloudflare.request("/zones/zone-1") == {"id": "zone-1"}
    sent = fake_session.requests[0]
    assert sent.method == "GET"
    assert sent.url == "https://api.cloudflare.com/client/v4/zones/zone-1"
    assert sent.timeout is None


def test_failed_envelope_raises(cloudflare, fake_session):
    errors = [{"code": 9109, "message": "Invalid access token"}]
    fake_session.queue({"success": False, "result": None, "errors": errors})

    with pytest.raises(ApiFailure) as exc_info:
        cloudflare.request("/zones/zone-1/dns_records")

    assert exc_info.value.errors == errors


def test_list_records(cloudflare, fake_session):
    fake_session.queue(ok([record(), record(id="def456", type="NS", name="ns.domain.com")]))

    records = cloudflare.list_records()

    assert [r.id for r in records] == ["abc123", "def456"]
    assert records[1].type == "NS"
    assert fake_session.requests[0].url == RECORDS
    assert fake_session.requests[0].params is None


def test_list_records_filters(cloudflare, fake_session):
    fake_session.queue(ok([]))

    cloudflare.list_records(record_type="cname", name="www.domain.com")

    assert fake_session.requests[0].params == {"type": "CNAME", "name": "www.domain.com"}


def test_add_record_merges_defaults(cloudflare, fake_session):
    fake_session.queue(ok(record(id="new-1")))

    created = cloudflare.add_record(
        {"type": "A", "name": "test.domain.com", "content": "1.1.1.1", "proxied": True}
    )

    sent = fake_session.requests[0]
    assert sent.method == "POST"
    assert sent.url == RECORDS
    assert sent.json == {
        "ttl": 1,
        "proxied": True,
        "type": "A",
        "name": "test.domain.com",
        "content": "1.1.1.1",
    }
    assert created.id == "new-1"


def test_add_record_defaults_proxied_false(cloudflare, fake_session):
    fake_session.queue(ok(record()))

    cloudflare.add_record({"type": "txt", "name": "x.domain.com", "content": "hello", "ttl": 120})

    assert fake_session.requests[0].json["proxied"] is False
    assert fake_session.requests[0].json["ttl"] == 120
    assert fake_session.requests[0].json["type"] == "TXT"


def test_add_record_rejects_unknown_type(cloudflare, fake_session):
    with pytest.raises(ValueError, match="Unsupported record type"):
        cloudflare.add_record({"type": "SRV", "name": "x", "content": "y"})
    assert fake_session.requests == []


def test_add_record_requires_fields(cloudflare, fake_session):
    with pytest.raises(ValueError, match="content"):
        cloudflare.add_record({"type": "A", "name": "x"})


def test_update_record_merges_over_current(cloudflare, fake_session):
    fake_session.queue(ok(record(ttl=300, proxied=True)))
    fake_session.queue(ok(record(content="8.8.8.8")))

    updated = cloudflare.update_record("abc123", {"content": "8.8.8.8"})

    get, put = fake_session.requests
    assert (get.method, get.url) == ("GET", f"{RECORDS}/abc123")
    assert (put.method, put.url) == ("PUT", f"{RECORDS}/abc123")
    assert put.json == {
        "type": "A",
        "name": "test.domain.com",
        "content": "8.8.8.8",
        "ttl": 300,
        "proxied": True,
    }
    assert updated.content == "8.8.8.8"


def test_update_record_defaults_missing_proxied(cloudflare, fake_session):
    current = record(type="TXT", content="v=spf1 -all")
    del current["proxied"]
    fake_session.queue(ok(current))
    fake_session.queue(ok(current))

    cloudflare.update_record("abc123", {"ttl": 60})

    put = fake_session.requests[1]
    assert put.json["proxied"] is False
    assert put.json["ttl"] == 60


def test_update_stops_when_fetch_fails(cloudflare, fake_session):
    fake_session.queue({"success": False, "result": None, "errors": [{"code": 81044, "message": "Record not found"}]})

    with pytest.raises(ApiFailure):
        cloudflare.update_record("missing", {"content": "1.2.3.4"})
    assert len(fake_session.requests) == 1


def test_delete_record(cloudflare, fake_session):
    fake_session.queue(ok({"id": "abc123"}))

    cloudflare.delete_record("abc123")

    assert fake_session.requests[0].method == "DELETE"
    assert fake_session.requests[0].url == f"{RECORDS}/abc123"
