"""Timestamps embedded in version-1 UUIDs.

A v1 UUID stores a 60-bit count of 100ns ticks since 1582-10-15 split
across the time-low, time-mid and time-high-and-version groups.
Input is not validated; check the UUID shape before calling.
"""

from datetime import datetime, timedelta, timezone


# 100ns ticks between 1582-10-15 and 1970-01-01
UUID_EPOCH_OFFSET = 122192928000000000
UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def get_time_int_from_uuid(uuid_str: str) -> int:
    time_low, time_mid, time_hi_and_version = uuid_str.split("-")[:3]
    # Drop the version nibble
    return int(time_hi_and_version[1:] + time_mid + time_low, 16)


def get_date_from_uuid(uuid_str: str) -> datetime:
    millis = (get_time_int_from_uuid(uuid_str) - UUID_EPOCH_OFFSET) // 10000
    return UNIX_EPOCH + timedelta(milliseconds=millis)
