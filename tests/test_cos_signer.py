import re
import time

import pytest

from tcsdk.cos_signer import Signer


@pytest.fixture
def example_headers():
    return {
        "Content-Type": "text/plain",
        "Content-Length": "13",
        "Host": "examplebucket-1250000000.cos.ap-beijing.myqcloud.com",
        "Content-MD5": "mQ/fVh815F3k6TAUm8m0eg==",
        "x-cos-acl": "private",
        "x-cos-grant-read": 'uin="100000000011"',
        "Date": "Thu, 16 May 2019 06:45:51 GMT",
    }


EXPECTED_HEADERS = (
    "content-length=13&content-md5=mQ%2FfVh815F3k6TAUm8m0eg%3D%3D&content-type=text%2Fplain"
    "&date=Thu%2C%2016%20May%202019%2006%3A45%3A51%20GMT"
    "&host=examplebucket-1250000000.cos.ap-beijing.myqcloud.com"
    "&x-cos-acl=private&x-cos-grant-read=uin%3D%22100000000011%22"
)


def test_key_time():
    before = int(time.time())
    start, end = map(int, Signer("", "").key_time(100).split(";"))
    after = int(time.time())
    assert before <= start <= after
    assert end - start == 100


def test_url_param_list_and_parameters():
    signer = Signer("", "", None, {"a": "a ", "B": " b"})
    assert signer.url_param_list() == "a;b"
    assert signer.http_parameters() == "a=a%20&b=%20b"


def test_http_string_and_string_to_sign():
    query = {"a": "a ", "B": " b"}
    headers = {"h": "h", "user-agent": "test"}
    signer = Signer("get", "/path", headers, query)
    assert signer.http_string() == "get\n/path\na=a%20&b=%20b\nh=h&user-agent=test\n"
    assert (
        signer.string_to_sign("1648999396;1648999496")
        == "sha1\n1648999396;1648999496\n963bfe30ee40d402ee00506981bab650e72134f6\n"
    )


def test_example_request(example_headers):
    signer = Signer("put", "/exampleobject(%E8%85%BE%E8%AE%AF%E4%BA%91)", example_headers, None)
    assert signer.url_param_list() == ""
    assert signer.http_parameters() == ""
    assert (
        signer.header_list()
        == "content-length;content-md5;content-type;date;host;x-cos-acl;x-cos-grant-read"
    )
    assert signer.header_string() == EXPECTED_HEADERS
    assert signer.http_string() == f"put\n/exampleobject(腾讯云)\n\n{EXPECTED_HEADERS}\n"
    assert (
        signer.string_to_sign("1557989151;1557996351")
        == "sha1\n1557989151;1557996351\n8b2751e77f43a0995d6e9eb9477f4b685cca4172\n"
    )


def test_sign_key_is_hex_sha1_and_deterministic():
    signer = Signer("get", "/")
    value = signer.sign_key("1557989151;1557996351", "secret")
    assert re.fullmatch(r"[0-9a-f]{40}", value)
    assert value == signer.sign_key("1557989151;1557996351", "secret")
    assert value != signer.sign_key("1557989151;1557996351", "token")


def test_signature_format(example_headers):
    signer = Signer("put", "/object", example_headers, {"uploadId": "abc", "partNumber": "1"})
    result = signer.signature("secret", "placeholder", None, 7200)
    match = re.fullmatch(
        r"q-sign-algorithm=sha1&q-ak=placeholder&q-sign-time=(\d+);(\d+)"
        r"&q-key-time=(\d+;\d+)&q-header-list=([^&]*)&q-url-param-list=([^&]*)"
        r"&q-signature=([0-9a-f]{40})&x-cos-security-token=",
        result,
    )
    assert match is not None
    assert int(match.group(2)) - int(match.group(1)) == 7200
    assert match.group(3) == f"{match.group(1)};{match.group(2)}"
    assert match.group(4) == signer.header_list()
    assert match.group(5) == "partnumber;uploadid"


def test_signature_includes_security_token():
    result = Signer("get", "/").signature("secret", "placeholder", "token", 60)
    assert result.endswith("&x-cos-security-token=token")
    assert "q-header-list=&q-url-param-list=&" in result


def test_invalid_utf8_path_raises():
    with pytest.raises(UnicodeDecodeError):
        Signer("get", "/%FF").http_string()