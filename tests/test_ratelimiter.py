import ipaddress

from awgcore.ratelimiter import PACKETS_BURSTABLE, PACKETS_PER_SECOND, Ratelimiter

STEP = 1_000_000_000 // PACKETS_PER_SECOND

EXPECTED = (
    [(0, True, "initial burst")] * PACKETS_BURSTABLE
    + [
        (0, False, "after burst"),
        (STEP, True, "filling tokens for single packet"),
        (0, False, "not having refilled enough"),
        (2 * STEP, True, "filling tokens for two packet burst"),
        (0, True, "second packet in 2 packet burst"),
        (0, False, "packet following 2 packet burst"),
    ]
)

IPS = [
    ipaddress.ip_address(text)
    for text in (
        "127.0.0.1",
        "192.168.1.1",
        "172.167.2.3",
        "97.231.252.215",
        "248.97.91.167",
        "188.208.233.47",
        "104.2.183.179",
        "72.129.46.120",
        "2001:0db8:0a0b:12f0:0000:0000:0000:0001",
        "f5c2:818f:c052:655a:9860:b136:6894:25f0",
        "b2d7:15ab:48a7:b07c:a541:f144:a9fe:54fc",
        "a47b:786e:1671:a22b:d6f9:4ab0:abc7:c918",
        "ea1e:d155:7f7a:98fb:2bf5:9483:80f6:5445",
        "3f0e:54a2:f5b4:cd19:a21d:58e1:3746:84c4",
    )
]


class _Clock:
    def __init__(self):
        self.now = 1_700_000_000_000_000_000

    def __call__(self):
        return self.now


def test_ratelimiter_reference_sequence():
    clock = _Clock()
    rate = Ratelimiter(time_now=clock)
    rate.init()
    try:
        for index, (wait, allowed, text) in enumerate(EXPECTED):
            clock.now += wait + 1
            rate.cleanup()
            for ip in IPS:
                assert rate.allow(ip) is allowed, f"{index}: {text}: {ip}"
    finally:
        rate.close()


def test_cleanup_removes_idle_entries():
    clock = _Clock()
    rate = Ratelimiter(time_now=clock)
    rate.init()
    try:
        for _ in range(PACKETS_BURSTABLE):
            assert rate.allow("10.0.0.1") is True
        assert rate.allow("10.0.0.1") is False
        assert rate.cleanup() is False
        clock.now += 2_000_000_000
        assert rate.cleanup() is True
        assert rate.allow("10.0.0.1") is True
    finally:
        rate.close()


def test_string_and_object_addresses_share_entry():
    clock = _Clock()
    rate = Ratelimiter(time_now=clock)
    rate.init()
    try:
        for _ in range(PACKETS_BURSTABLE):
            assert rate.allow("192.0.2.7") is True
        assert rate.allow(ipaddress.ip_address("192.0.2.7")) is False
    finally:
        rate.close()