import json

import httpx
import pytest

from tcsdk.api_client import ApiError
from tcsdk.ddns import Ddns, DescribeRecordListResponse, RecordListItem

RECORDS = [
    {"RecordId": 1, "Value": "2001:db8::1", "Name": "www", "Type": "AAAA", "Line": "default"},
    {"RecordId": 2, "Value": "2001:db8::2", "Name": "home", "Type": "AAAA", "Line": "default"},
]


def make_ddns(responses, seen):
    def handler(request: httpx.Request) -> httpx.Response:
        action = request.headers["X-TC-Action"]
        seen.append((action, json.loads(request.content), request))
        return httpx.Response(200, json={"Response": responses[action]})

    return Ddns("id", "secret", "example.com", transport=httpx.MockTransport(handler))


def test_record_from_dict():
    item = RecordListItem.from_dict(RECORDS[0])
    assert item == RecordListItem(1, "2001:db8::1", "www", "AAAA", "default")


def test_response_without_list():
    assert DescribeRecordListResponse.from_dict({"RequestId": "r"}).record_list is None


@pytest.mark.asyncio
async def test_query_record_list_sends_request():
    seen = []
    ddns = make_ddns({"DescribeRecordList": {"RecordList": RECORDS}}, seen)
    result = await ddns.query_record_list()
    assert [r.record_id for r in result.record_list] == [1, 2]
    action, body, request = seen[0]
    assert action == "DescribeRecordList"
    assert body == {"Domain": "example.com", "RecordType": "AAAA"}
    assert request.headers["Host"] == "dnspod.tencentcloudapi.com"
    assert request.headers["Authorization"].startswith("TC3-HMAC-SHA256 Credential=id/")


@pytest.mark.asyncio
async def test_query_record_list_error():
    seen = []
    ddns = make_ddns(
        {"DescribeRecordList": {"Error": {"Code": "AuthFailure", "Message": "denied"}}}, seen
    )
    with pytest.raises(ApiError, match="denied"):
        await ddns.query_record_list()


@pytest.mark.asyncio
async def test_get_current_record_is_last():
    ddns = make_ddns({"DescribeRecordList": {"RecordList": RECORDS}}, [])
    record = await ddns.get_current_record()
    assert record.record_id == 2
    assert record.value == "2001:db8::2"


@pytest.mark.asyncio
async def test_get_current_record_none_on_error():
    ddns = make_ddns(
        {"DescribeRecordList": {"Error": {"Code": "X", "Message": "failure"}}}, []
    )
    assert await ddns.get_current_record() is None


@pytest.mark.asyncio
async def test_get_current_record_none_without_list():
    ddns = make_ddns({"DescribeRecordList": {"RequestId": "r"}}, [])
    assert await ddns.get_current_record() is None


@pytest.mark.asyncio
async def test_change_record():
    seen = []
    ddns = make_ddns({"ModifyRecord": {"RecordId": 1}}, seen)
    item = RecordListItem.from_dict(RECORDS[0])
    assert await ddns.change_record(item, "2001:db8::9") is True
    action, body, _ = seen[0]
    assert action == "ModifyRecord"
    assert body == {
        "Domain": "example.com",
        "RecordType": "AAAA",
        "RecordLine": "default",
        "Value": "2001:db8::9",
        "RecordId": 1,
        "SubDomain": "www",
    }


@pytest.mark.asyncio
async def test_change_record_error():
    ddns = make_ddns({"ModifyRecord": {"Error": {"Code": "X", "Message": "refused"}}}, [])
    item = RecordListItem.from_dict(RECORDS[0])
    with pytest.raises(ApiError, match="refused"):
        await ddns.change_record(item, "2001:db8::9")