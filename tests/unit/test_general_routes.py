# ---------------------------------------------------------------------------
# Unit Tests: /readGeneral and /createGeneral
#
# Exercises the HTTP contract end to end through FastAPI's TestClient:
#   - create then read returns the canonical JSON of the record
#   - reading an unknown identifier is a 404, not a 500
#   - malformed bodies are rejected before any storage call
#   - upstream S3 failures become 500s without leaking upstream details
#   - a misconfigured storage handle becomes a 500
#
# Storage is either a LocalStorage rooted in tmp_path or a mock, so no test
# touches the network.
# ---------------------------------------------------------------------------
import io
import json

import pytest
from botocore.exceptions import ClientError
from mangum import Mangum

from greenery_api.main import app, handler
from greenery_api.services.storage import S3Storage, reset_storage


def _client_error(code, status, message="upstream says no", op="GetObject"):
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        op,
    )


def test_create_then_read_returns_created_record(client, local_storage, record):
    resp = client.post("/createGeneral", json=record)
    assert resp.status_code == 200
    assert resp.content == b""

    resp = client.post("/readGeneral", json={"greenery_id": "g1"})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/json"
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.text == json.dumps(record, separators=(",", ":"))
    assert resp.json() == record


def test_read_missing_is_404(client, local_storage):
    resp = client.post("/readGeneral", json={"greenery_id": "missing"})
    assert resp.status_code == 404


def test_second_write_wins(client, local_storage, record):
    client.post("/createGeneral", json=record)
    updated = dict(record, name="Maple", phone="555-2")
    assert client.post("/createGeneral", json=updated).status_code == 200

    resp = client.post("/readGeneral", json={"greenery_id": "g1"})
    assert resp.json() == updated


def test_records_are_stored_under_general_prefix(client, local_storage, record):
    client.post("/createGeneral", json=record)
    assert local_storage.get_bytes("/general/g1.json").startswith(b'{"greenery_id":"g1"')


@pytest.mark.parametrize("field", ["greenery_id", "name", "phone", "email", "address"])
def test_create_missing_field_never_touches_storage(client, mocker, record, field):
    storage = mocker.Mock()
    reset_storage(storage)
    del record[field]

    resp = client.post("/createGeneral", json=record)

    assert resp.status_code == 422
    storage.put_bytes.assert_not_called()


@pytest.mark.parametrize("bad_id", ["", "../etc/passwd", "a/b", "..", "x y", "a" * 129])
def test_invalid_identifier_rejected(client, mocker, bad_id):
    storage = mocker.Mock()
    reset_storage(storage)

    resp = client.post("/readGeneral", json={"greenery_id": bad_id})

    assert resp.status_code == 422
    storage.get_bytes.assert_not_called()


def test_read_non_json_body_rejected(client, mocker):
    storage = mocker.Mock()
    reset_storage(storage)

    resp = client.post("/readGeneral", content=b"not json", headers={"content-type": "application/json"})

    assert resp.status_code == 422
    storage.get_bytes.assert_not_called()


def test_upstream_error_is_500_without_details(client, mocker):
    s3 = mocker.Mock()
    s3.get_object.side_effect = _client_error("InternalError", 503, message="secret upstream body")
    reset_storage(S3Storage(s3, "greenery-datastore"))

    resp = client.post("/readGeneral", json={"greenery_id": "g1"})

    assert resp.status_code == 500
    assert "secret upstream body" not in resp.text
    assert "503" not in resp.text


def test_s3_no_such_key_is_404(client, mocker):
    s3 = mocker.Mock()
    s3.get_object.side_effect = _client_error("NoSuchKey", 404)
    reset_storage(S3Storage(s3, "greenery-datastore"))

    resp = client.post("/readGeneral", json={"greenery_id": "missing"})

    assert resp.status_code == 404
    s3.get_object.assert_called_once_with(Bucket="greenery-datastore", Key="general/missing.json")


def test_read_invalid_utf8_is_500(client, mocker):
    storage = mocker.Mock()
    storage.get_bytes.return_value = b"\xff\xfe\xfa"
    reset_storage(storage)

    resp = client.post("/readGeneral", json={"greenery_id": "g1"})

    assert resp.status_code == 500


def test_create_upstream_error_is_500(client, mocker, record):
    s3 = mocker.Mock()
    s3.put_object.side_effect = _client_error("AccessDenied", 403, op="PutObject")
    reset_storage(S3Storage(s3, "greenery-datastore"))

    resp = client.post("/createGeneral", json=record)

    assert resp.status_code == 500
    assert "AccessDenied" not in resp.text


def test_misconfigured_storage_is_500(client, monkeypatch):
    monkeypatch.setenv("CREDENTIALS_SOURCE", "bogus")

    resp = client.post("/readGeneral", json={"greenery_id": "g1"})

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Storage is not configured"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_s3_object_key_has_no_leading_slash(client, mocker, record):
    s3 = mocker.Mock()
    s3.get_object.return_value = {"Body": io.BytesIO(b"{}")}
    reset_storage(S3Storage(s3, "greenery-datastore"))

    assert client.post("/createGeneral", json=record).status_code == 200
    assert client.post("/readGeneral", json={"greenery_id": "g1"}).status_code == 200

    assert s3.put_object.call_args.kwargs["Key"] == "general/g1.json"
    s3.get_object.assert_called_once_with(Bucket="greenery-datastore", Key="general/g1.json")


def test_preflight_is_permissive(client):
    resp = client.options("/readGeneral")

    assert resp.status_code == 204
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "POST" in resp.headers["access-control-allow-methods"]


def test_browser_preflight_allows_any_origin(client):
    resp = client.options(
        "/createGeneral",
        headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_lambda_handler_wraps_app():
    assert isinstance(handler, Mangum)
    assert handler.app is app
