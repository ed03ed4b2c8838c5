# merchlib

Building blocks for backend services: exact fixed-point decimals for
money, RFC 4122 UUIDs, AES-CBC helpers, request signing and hashing,
per-key locks, blocking queues and worker pools, an in-memory cache,
structured JSON logging, thin HTTP wrappers over `requests`, and
Markdown to HTML rendering with highlighted code blocks.

## Installation

```
pip install merchlib
```

For running the test suite:

```
pip install "merchlib[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `merchlib.util.fixeddecimal` | `Decimal` (immutable `value * 10 ** exp`), `require_from_string` |
| `merchlib.util.decimal_codec` | JSON/binary encoding, `scan`, `NullDecimal`, `min_decimal`, `max_decimal`, `sum_decimal`, `avg_decimal`, `yuan_to_cent`, `cent_to_yuan` |
| `merchlib.util.uuids` | `UUID`, `Variant`, `Domain`, `new_v1` … `new_v5`, `uuid_and`, `uuid_or` |
| `merchlib.util.aes` | AES-CBC with PKCS#5/PKCS#7 padding, plain and base64 |
| `merchlib.util.dh` | `curve25519_keypair`, `curve25519_shared_key` |
| `merchlib.util.hashing` | `md5_hex`, `sha1_hex`, `hmac_sha1`, `hmac_sha256`, `hash_crc32` |
| `merchlib.util.text` | case conversion, random strings and names, base-62, `substr`, signing strings, `StringBuffer` |
| `merchlib.util.timefmt` | fixed date/time layouts and parsers |
| `merchlib.util.jsonutil` | `to_json`, `read_json`, `json_to_map` |
| `merchlib.util.paging` | `Page`, `to_page_num_or_default` |
| `merchlib.util.ip` | public/client IP, IP geolocation lookup, private address checks |
| `merchlib.keylock` | `KeyLock` |
| `merchlib.pool` | `Queue`, `Job`, `Collector`, `start_dispatcher`, `Worker` |
| `merchlib.cache` | `Cache` interface and `MemoryCache` |
| `merchlib.dbtime` | `BaseModel`, `YYYY-MM-DD HH:MM:SS` time encoding |
| `merchlib.logger` | `Options`, `configure`, `info`/`debug`/`warn`/`error`, `TLog` |
| `merchlib.network` | `get`, `post`, `put`, `post_form` and related helpers, `Response`, `HTTPStatusError` |
| `merchlib.markdown_html` | `to_html` |

## Quick tour

### Money and decimals

```python
from merchlib.util.fixeddecimal import Decimal
from merchlib.util.decimal_codec import yuan_to_cent, cent_to_yuan

price = Decimal.from_string("19.99")
total = price.mul(Decimal.from_string("3"))
print(total.string_fixed(2))        # 59.97
print(Decimal.from_float(5.45).round_bank(1).string_fixed(1))

print(yuan_to_cent(12.34))          # 1234
print(cent_to_yuan(1234))           # 12.34
```

Division rounds half away from zero to 16 fractional digits; `div_round`
takes an explicit precision. `Decimal` also supports `+`, `-`, `*`, `/`,
`%`, comparisons and hashing.

### UUIDs

```python
from merchlib.util.uuids import NAMESPACE_DNS, UUID, new_v4, new_v5

u = new_v4()
print(u.version())                  # 4
print(new_v5(NAMESPACE_DNS, "example.com"))
UUID.from_string("{6ba7b810-9dad-11d1-80b4-00c04fd430c8}")
UUID.from_string_or_nil("not a uuid")   # the nil UUID
```

### Text, hashing and signing

```python
from merchlib.util.text import underscore_name, camel_name, sign
from merchlib.util.hashing import md5_hex

underscore_name("MessageID")        # "message_id"
camel_name("user_age")              # "UserAge"
sign({"b": 2, "a": "x"}, "secret")  # md5 of "a=x&b=2&key=secret"
md5_hex("hello")
```

### AES

```python
import os
from merchlib.util.aes import aes_encrypt_pkcs7_base64, aes_decrypt_pkcs7_base64

key = os.urandom(16)
iv = os.urandom(16)
ciphertext = aes_encrypt_pkcs7_base64(b"payload", key, iv)
assert aes_decrypt_pkcs7_base64(ciphertext, key, iv) == b"payload"
```

### Concurrency helpers

```python
from merchlib.keylock import KeyLock
from merchlib.pool import Job, Queue, start_dispatcher

locks = KeyLock()
locks.lock("order-1")
try:
    ...
finally:
    locks.unlock("order-1")

q = Queue()
q.push("job")
print(q.pop())                      # "job"

with start_dispatcher(4) as collector:
    collector.submit(Job(data=42, job_func=lambda worker_id, data: print(data)))
```

`KeyLock.start_clean_loop()` drops idle locks in the background every
clean interval (one day by default) until `stop_clean_loop()`.

### Cache

```python
from merchlib.cache import MemoryCache

cache = MemoryCache()
cache.set_and_expire("session", "value", 30)
cache.get("session")                # "value", "" once expired or absent
```

### Logging

```python
from merchlib.logger import Options, TLog, configure

configure(Options(log_dir="logs"))
log = TLog("orders")
log.info("order created", order_id=7)
```

Each record is one JSON line on standard output and in `info.log`;
warnings and errors also go to `warn.log` and `error.log`. Files rotate at
500 MB with three backups.

### HTTP

```python
from merchlib.network import get, post_form

resp = get("https://api.example.com/items", {"page": "1"})
print(resp.status_code, resp.body)
data = post_form("https://api.example.com/login", {"user": "alice"})
```

Form helpers raise `HTTPStatusError` on a status other than 200, except
`post_form_xml`, which returns the body whatever the status.

### Markdown

```python
from merchlib.markdown_html import to_html

html = to_html("text\n```python\nprint('hi')\n```\n")
```

Code spans and blocks are wrapped in `<pre class="notranslate">`, code
blocks are highlighted with CSS classes, and absolute links get
`target="_blank"`.

## What it does not do

- There is no Redis client wrapper; `merchlib.cache.Cache` is an interface
  and the only implementation shipped is the in-process `MemoryCache`.
- There is no request/response waiter keyed by id.
- There is no HTTP server, router, database connection or migration
  runner, and no command-line program.