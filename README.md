# tcsdk

An asyncio client library for several Tencent Cloud services:

- **API 3.0 requests** signed with `TC3-HMAC-SHA256` (`tcsdk.api_client.ApiClient`)
- **Cloud Object Storage (COS)**: buckets, objects, multipart uploads and
  presigned download URLs (`tcsdk.cos.CosClient`)
- **DDNS on DNSPod**: keep an `AAAA` record in step with the host's public
  IPv6 address (`tcsdk.ddns.Ddns`, `tcsdk.ip_monitor.IpMonitor`)
- **SMS settings**: credentials plus client and HTTP profiles (`tcsdk.sms_profile`)

All HTTP goes through `httpx`. The clients take a keyword-only `transport`
argument, so an `httpx.MockTransport` can stand in for the network in tests.

## Installation

```
pip install tcsdk
```

To run the test suite:

```
pip install "tcsdk[test]"
pytest
```

## Object storage

```python
import asyncio

from tcsdk.cos import CosClient
from tcsdk.cos_acl import AclHeader, ObjectAcl
from tcsdk.cos_request import CosError


async def main():
    client = CosClient("placeholder", "secret", None, "examplebucket-1250000000", "ap-guangzhou")

    acl = AclHeader().insert_object_acl(ObjectAcl.AUTHENTICATED_READ)

    try:
        await client.put_object("notes.txt", "docs/notes.txt", "text/plain; charset=utf-8", acl)

        # Sent as a multipart upload in parts of part_size bytes.
        await client.put_big_object(
            "backup.tar", "backup.tar", "application/x-tar", "STANDARD", None, 100 * 1024 * 1024
        )

        resp = await client.get_object_binary("docs/notes.txt")
        print(resp.result)
        await client.get_object("docs/notes.txt", "notes-copy.txt")
        await client.delete_object("docs/notes.txt")
    except CosError as exc:
        print(exc.error_no, exc.message)

    print(client.presigned_download_url("backup.tar", 3600))


asyncio.run(main())
```

A successful operation returns a `tcsdk.cos_request.Response` with
`error_no` (`ErrNo.SUCCESS`), `error_message`, `result` (the raw body as
bytes) and `headers`. A failure raises `tcsdk.cos_request.CosError`, which
carries `error_no`, `message`, `result` and `headers`; `exc.response` gives the
same data as a `Response`. The codes are:

- `ErrNo.STATUS`: the server answered 4xx or 5xx; the message is the status line
- `ErrNo.CONNECT`, `ErrNo.DECODE`, `ErrNo.OTHER`: connection, decoding or other
  HTTP failures
- `ErrNo.IO`: a local file could not be read
- `ErrNo.DECODE` is also used when the answer to starting a multipart upload is
  not the expected XML

In `put_big_object`, a final piece of 1 MiB or less is sent together with the
part before it. If anything fails after the upload has started, the upload is
aborted before the error is raised. `part_size` must be positive.

Bucket-level calls are on the same client:

- `put_bucket(acl_header)` and `put_bucket_acl(acl_header)`, with ACLs from
  `AclHeader.insert_bucket_acl(BucketAcl...)` and the `insert_grant_*` methods
- `delete_bucket()`, `check_bucket()`
- `list_objects(prefix, delimiter, encoding_type, marker, max_keys)`: empty
  strings are left out of the query, as is a `max_keys` outside 1..1000
- `get_bucket_list()`: lists buckets in the client's region, or all of them
  when the region is empty

The multipart steps can also be driven by hand with
`put_object_get_upload_id`, `put_object_part`, `put_object_complete_part`
and `abort_object_part`.

### Signing on your own

`tcsdk.cos_signer.Signer` builds the COS `Authorization` value for any
request:

```python
from tcsdk.cos_signer import Signer

signer = Signer("get", "/photo.jpg", {"Host": "examplebucket-1250000000.cos.ap-guangzhou.myqcloud.com"}, None)
authorization = signer.signature("secret", "placeholder", None, 7200)
```

`tcsdk.cos_client.Client.headers_with_auth` does the same for a client and
adds the result to the request headers.

## API 3.0 requests

```python
from tcsdk.api_client import ApiClient

client = ApiClient("placeholder", "secret", "dnspod.tencentcloudapi.com", "dnspod")
reply = await client.send("DescribeRecordList", {"Domain": "example.com"})
```

`send` returns the `Response` member of the JSON answer. A failed request,
invalid JSON or an answer without `Response` raises
`tcsdk.api_client.ApiError`. `make_authorization` and `build_headers` expose
the signing steps. The hashing helpers live in `tcsdk.encryption`.

## Dynamic DNS

```python
from tcsdk.ddns import Ddns
from tcsdk.ip_monitor import IpMonitor, record_ip

ddns = Ddns("placeholder", "secret", "example.com")
monitor = IpMonitor(ddns, await record_ip(ddns))
await monitor.run()
```

`Ddns.get_current_record` returns the last `AAAA` record of the domain, or
`None`. `Ddns.change_record` points a record at a new value and raises
`ApiError` if the API reports an error.

`IpMonitor.run` waits `check_frequency` seconds (5 by default), then fetches
the public IPv6 address and updates the record when it differs. Failed
attempts are retried every `retry_delay` seconds (10 by default). It runs
forever unless given a number of `iterations`. `record_ip` falls back to `::1`
when the record is missing or does not hold an IPv6 address.

## SMS settings

```python
from tcsdk.sms_profile import ClientProfile, Credential

credential = Credential("placeholder", "secret")
profile = ClientProfile().with_debug(True)
```

`ClientProfile` holds an `HttpProfile` (method `POST`, 30 s timeout, scheme
`HTTPS`, endpoint `sms.tencentcloudapi.com`), the signing method, the language
and a debug flag.

## What this package does not do

- It sends no SMS messages. `tcsdk.sms_profile` holds only credentials and
  settings.
- It installs no command. The DDNS monitor is started from your own code, as
  shown above, and does not detach into a background service.