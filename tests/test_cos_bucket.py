import httpx
import pytest

from tcsdk.cos_acl import AclHeader, BucketAcl
from tcsdk.cos_bucket import BucketOperations
from tcsdk.cos_request import CosError, ErrNo, Method


def _make(requests, status=200, content=b""):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, content=content)

    return BucketOperations(
        "foo",
        "secret",
        None,
        "qcloudtest-1256650966",
        "ap-guangzhou",
        transport=httpx.MockTransport(handler),
    )


def _auth_fields(value):
    return dict(item.split("=", 1) for item in value.split("&"))


@pytest.mark.asyncio
async def test_put_bucket_with_acl():
    requests = []
    client = _make(requests)
    acl = AclHeader().insert_bucket_acl(BucketAcl.PUBLIC_READ)
    resp = await client.put_bucket(acl)
    assert resp.error_no == ErrNo.SUCCESS
    sent = requests[0]
    assert sent.method == Method.PUT.value
    assert str(sent.url) == client.full_url("/")
    assert sent.headers["x-cos-acl"] == "publish-read"
    assert "x-cos-acl" in _auth_fields(sent.headers["authorization"])["q-header-list"]


@pytest.mark.asyncio
async def test_put_bucket_forbidden():
    client = _make([], status=403, content=b"<Error/>")
    with pytest.raises(CosError) as info:
        await client.put_bucket()
    assert info.value.error_no == ErrNo.STATUS
    assert "403" in info.value.message


@pytest.mark.asyncio
async def test_delete_bucket():
    requests = []
    client = _make(requests)
    await client.delete_bucket()
    assert requests[0].method == Method.DELETE.value
    assert requests[0].headers["host"] == client.host


@pytest.mark.asyncio
async def test_check_bucket_not_found():
    requests = []
    client = _make(requests, status=404)
    with pytest.raises(CosError) as info:
        await client.check_bucket()
    assert "404" in info.value.message
    assert requests[0].method == Method.HEAD.value


@pytest.mark.asyncio
async def test_list_objects_query():
    requests = []
    client = _make(requests, content=b"<ListBucketResult/>")
    resp = await client.list_objects("prefix", "", "", "/", 100)
    assert resp.result == b"<ListBucketResult/>"
    sent = requests[0]
    assert dict(sent.url.params) == {"prefix": "prefix", "marker": "/", "max-keys": "100"}
    fields = _auth_fields(sent.headers["authorization"])
    assert fields["q-url-param-list"] == "marker;max-keys;prefix"


@pytest.mark.asyncio
async def test_list_objects_drops_out_of_range_max_keys():
    requests = []
    client = _make(requests)
    await client.list_objects(max_keys=1001)
    await client.list_objects(max_keys=0)
    assert all(dict(r.url.params) == {} for r in requests)
    assert len(requests) == 2


@pytest.mark.asyncio
async def test_put_bucket_acl():
    requests = []
    client = _make(requests)
    acl = AclHeader().insert_bucket_acl(BucketAcl.PRIVATE).insert_bucket_grant_write(
        'id="1"'
    )
    await client.put_bucket_acl(acl)
    sent = requests[0]
    assert sent.method == Method.PUT.value
    assert "acl" in sent.url.params
    assert sent.headers["x-cos-acl"] == "private"
    assert sent.headers["x-cos-grant-write"] == 'id="1"'
    assert _auth_fields(sent.headers["authorization"])["q-url-param-list"] == "acl"