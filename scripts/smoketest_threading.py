"""
Stress test for thread-safety of conversions that read the system timezone.

Note this isn't a unit test, because it mutates the process-wide TZ setting
"""

import sys
import time
from os import environ
from threading import Thread

from chronos import DateTime, Timestamp, reset_system_tz

if not hasattr(sys, "_is_gil_enabled") or sys._is_gil_enabled():
    # Running with GIL enabled can still be useful to compare performance,
    # but be sure to warn that threading hasn't been stress tested.
    print("WARNING: Running with GIL enabled. Threading not stress tested.")


NUM_THREADS = 16
NUM_ITERATIONS = 500
TZ_SAMPLE = [
    "UTC0",
    "XXX-3",
    "XXX+5",
    "XXX-5:30",
    "XXX-11",
    "XXX+9:30",
    "XXX-14",
]
assert (
    len(TZ_SAMPLE) % NUM_THREADS
), "TZ sample should not be evenly divisible by number of threads"
TZS = TZ_SAMPLE * (NUM_THREADS * NUM_ITERATIONS)
TIMESTAMP = Timestamp(1_718_452_800, 123)
ISO_STRINGS = [
    "2024-06-15T12:00:00",
    "2024-02-29 23:59:59.999999999",
    "-0044-03-15",
    "+12345-01-01T00:00:00.1",
]


def convert_and_parse(tzs):
    """Pure computations that must give the same answer in every thread"""
    expected = DateTime.from_timestamp_utc(TIMESTAMP)
    for n, _ in enumerate(tzs):
        dt = DateTime.from_timestamp_utc(TIMESTAMP)
        assert dt == expected
        assert dt.to_timestamp() == TIMESTAMP
        s = ISO_STRINGS[n % len(ISO_STRINGS)]
        parsed = DateTime.parse_iso8601(s)
        assert DateTime.parse_iso8601(parsed.to_iso8601_full()) == parsed


def set_system_tz(tzs):
    """Local conversions while other threads change the system timezone"""
    for tz in tzs:
        environ["TZ"] = tz
        reset_system_tz()
        local = DateTime.from_timestamp_local(TIMESTAMP)
        del local


def main(func):
    print(f"Starting test: {func.__name__}")
    threads = []

    start_time = time.time()

    for n in range(NUM_THREADS):
        thread = Thread(target=func, args=(TZS[n::NUM_THREADS],))
        threads.append(thread)
        thread.start()

    for thread in threads:
        thread.join()

    end_time = time.time()
    print(f"Execution time: {end_time - start_time:.2f} seconds")


if __name__ == "__main__":
    main(convert_and_parse)
    main(set_system_tz)
