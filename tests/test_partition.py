import pytest

from volunteer_hub.exceptions import FormatError
from volunteer_hub.scheduling.algorithms.partition import partition, partition_tokens
from volunteer_hub.scheduling.core.time_arithmetic import parse_clock
from volunteer_hub.scheduling.core.time_window import EventWindow
from volunteer_hub.scheduling.utils.slot_codec import decode


def window(start, end):
    return EventWindow(parse_clock(start), parse_clock(end))


def test_three_volunteers_over_three_hours():
    increments = partition(window("9:00", "12:00"), 3)
    assert [w.display_range() for w in increments] == [
        "9:00 A.M. - 10:00 A.M.",
        "10:00 A.M. - 11:00 A.M.",
        "11:00 A.M. - 12:00 P.M.",
    ]


def test_zero_volunteers_keeps_whole_window():
    w = window("9:00", "12:00")
    assert partition(w, 0) == [w]


def test_fractional_increment_within_the_hour():
    increments = partition(window("9:00", "10:00"), 3)
    assert [w.display_range() for w in increments] == [
        "9:00 A.M. - 9:20 A.M.",
        "9:20 A.M. - 9:40 A.M.",
        "9:40 A.M. - 10:00 A.M.",
    ]


def test_stops_when_cursor_reaches_end_hour():
    # 35-minute increments: the second boundary lands at 10:10, in the end hour
    increments = partition(window("9:00", "10:45"), 3)
    assert [w.display_range() for w in increments] == [
        "9:00 A.M. - 9:35 A.M.",
        "9:35 A.M. - 10:10 A.M.",
    ]


def test_truncates_accumulated_minutes():
    increments = partition(window("13:00", "14:40"), 3)
    assert [w.display_range() for w in increments] == [
        "1:00 P.M. - 1:33 P.M.",
        "1:33 P.M. - 2:06 P.M.",
    ]


@pytest.mark.parametrize("start,end,count", [
    ("9:00", "12:00", 3),
    ("8:15", "17:45", 7),
    ("6:00", "22:00", 16),
    ("10:10", "13:50", 4),
    ("0:00", "23:59", 5),
])
def test_increments_are_contiguous_and_bounded(start, end, count):
    w = window(start, end)
    increments = partition(w, count)
    total = w.duration().total_minutes

    assert 1 <= len(increments) <= count
    assert increments[0].start == w.start
    for before, after in zip(increments, increments[1:]):
        assert before.end == after.start
    assert increments[-1].end <= w.end
    covered = increments[-1].end.minutes_since_midnight - w.start.minutes_since_midnight
    assert total - covered <= total / count + 1


def test_rejects_negative_count():
    with pytest.raises(FormatError):
        partition(window("9:00", "12:00"), -1)


def test_rejects_more_volunteers_than_minutes():
    with pytest.raises(FormatError):
        partition(window("9:00", "9:10"), 11)


def test_partition_tokens_are_unclaimed_and_owned_by_event():
    tokens = partition_tokens("abc123", window("9:00", "12:00"), 3)
    assert tokens[0] == "abc123 9:00 A.M. - 10:00 A.M."
    for token in tokens:
        slot = decode(token, claimed=False)
        assert slot.event_id == "abc123"
        assert not slot.is_claimed


def test_window_inside_one_hour_yields_single_increment():
    # The first boundary is already in the end hour
    increments = partition(window("10:10", "10:50"), 4)
    assert [w.display_range() for w in increments] == ["10:10 A.M. - 10:20 A.M."]
