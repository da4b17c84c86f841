# awgcore

Pure-Python building blocks for a userspace AmneziaWG daemon. Each module
works alone, so you can use only the parts you need.

## Installation

```
pip install awgcore
```

For the test suite:

```
pip install "awgcore[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `awgcore.replay` | `Filter`, a sliding-window anti-replay check for message counters (RFC 6479). |
| `awgcore.ratelimiter` | `Ratelimiter`, a per-address token bucket (burst of 5, then 20 packets per second) with a background thread that drops idle entries. |
| `awgcore.tai64n` | `Timestamp`, `stamp()` and `now()`: 12-byte TAI64N timestamps with the low nanosecond bits whitened. |
| `awgcore.checksum` | Internet checksums (`checksum`, `checksum_no_fold`, `pseudo_header_checksum_no_fold`) and `TooManySegmentsError`. |
| `awgcore.dnsquery` | `is_domain_name`, `split_network`, `new_request`, `equal_ascii_name` and `check_response`: building DNS queries and matching replies to them. |
| `awgcore.resolver` | `check_header`, `answer_addresses`, `partial_deadline`, `order_addresses` and `DnsLookupError`: reading DNS replies and pacing dial attempts. |

## Examples

Reject replayed counters:

```python
from awgcore.replay import Filter

window = Filter()
limit = 2**64 - 2**13 - 1
assert window.validate_counter(5, limit)
assert not window.validate_counter(5, limit)
```

Rate-limit handshakes per source address (`allow` takes an address object or
a string):

```python
from awgcore.ratelimiter import Ratelimiter

limiter = Ratelimiter()
limiter.init()
allowed = limiter.allow("192.0.2.1")
limiter.close()
```

Build and compare timestamps:

```python
from awgcore.tai64n import stamp

first = stamp(0)
later = stamp(1_000_000_000)
assert later.after(first)
print(first)  # 1970-01-01 00:00:00 +0000 UTC
```

Compute an IP checksum:

```python
from awgcore.checksum import checksum

value = checksum(b"\x45\x00\x00\x1c", 0)
```

Prepare a DNS query and read the network name of a dial request:

```python
from awgcore.dnsquery import is_domain_name, new_request, split_network

assert is_domain_name("example.com")
query_id, udp_query, tcp_query = new_request("example.com.", "A")
assert tcp_query[2:] == udp_query
assert split_network("tcp4") == ("tcp", True, False)
```

Order resolved addresses and split a deadline between attempts:

```python
from awgcore.resolver import order_addresses, partial_deadline

order_addresses(["192.0.2.1"], ["2001:db8::1"], has_v6=True)
# ['2001:db8::1', '192.0.2.1']
partial_deadline(0.0, 10.0, 2)  # 5.0
```

## What it does not do

awgcore is a library of parts, not a daemon. It has no command to run, opens
no TUN device, and does not serve the UAPI configuration socket or parse its
`set`/`get` protocol. It builds DNS queries and reads replies but does not
send them; bring your own transport.