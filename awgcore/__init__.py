"""Building blocks of a userspace AmneziaWG daemon: replay filter, rate limiter, TAI64N timestamps, checksums and DNS helpers."""

__version__ = "0.1.0"