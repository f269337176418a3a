import datetime

import pytest

from trafficmeter.history import HistoryTraffic, HistoryTrafficFile, find_by_date

TODAY = datetime.date(2021, 6, 15)


def _write(path, lines):
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")


def _loaded(path):
    history = HistoryTrafficFile(path, today=TODAY)
    history.load()
    return history


def test_missing_file_gives_only_today(tmp_path):
    history = _loaded(tmp_path / "none.dat")
    assert len(history) == 1
    head = history.traffics[0]
    assert (head.year, head.month, head.day) == (2021, 6, 15)
    assert head.kbytes() == 0


def test_parse_split_and_mixed_lines(tmp_path):
    path = tmp_path / "h.dat"
    _write(path, ['lines: "2"', "2020/01/05 10/20", "2020/01/04 300"])
    history = _loaded(path)
    split = find_by_date(history.traffics, 2020, 1, 5)
    mixed = find_by_date(history.traffics, 2020, 1, 4)
    assert (split.up_kbytes, split.down_kbytes, split.mixed) == (10, 20, False)
    assert (mixed.up_kbytes, mixed.down_kbytes, mixed.mixed) == (0, 300, True)


def test_invalid_and_empty_lines_skipped(tmp_path):
    path = tmp_path / "h.dat"
    _write(path, [
        "2020/13/05 10/20",
        "1800/01/05 10/20",
        "2020/01/32 10/20",
        "short",
        "2020/01/05 0/0",
        "2020/02/03 5/6",
    ])
    history = _loaded(path)
    dates = [(t.year, t.month, t.day) for t in history.traffics]
    assert dates == [(2021, 6, 15), (2020, 2, 3)]


def test_sorted_newest_first(tmp_path):
    path = tmp_path / "h.dat"
    _write(path, ["2019/03/01 1/1", "2020/05/01 1/1", "2020/01/09 1/1"])
    history = _loaded(path)
    keys = [(t.year, t.month, t.day) for t in history.traffics]
    assert keys == sorted(keys, reverse=True)
    assert len(history) == len(history.traffics)


def test_same_date_entries_are_added(tmp_path):
    path = tmp_path / "h.dat"
    _write(path, ["2020/01/05 10/20", "2020/01/05 1/2"])
    history = _loaded(path)
    entry = find_by_date(history.traffics, 2020, 1, 5)
    assert (entry.up_kbytes, entry.down_kbytes) == (11, 22)
    assert sum(1 for t in history.traffics if t.same_date(entry)) == 1


def test_today_traffic_taken_from_file(tmp_path):
    path = tmp_path / "h.dat"
    _write(path, ["2021/06/15 7", "2021/06/14 1/1"])
    history = _loaded(path)
    assert history.today_up_traffic == 0
    assert history.today_down_traffic == 7 * 1024
    assert history.traffics[0].mixed is False
    assert len(history) == 2


def test_today_inserted_when_missing(tmp_path):
    path = tmp_path / "h.dat"
    _write(path, ["2021/06/14 3/4"])
    history = _loaded(path)
    assert len(history) == 2
    assert history.traffics[0].same_date(HistoryTraffic(2021, 6, 15))
    assert history.today_down_traffic == 0


def test_save_load_round_trip(tmp_path):
    path = tmp_path / "h.dat"
    _write(path, ["2020/01/05 10/20", "2020/01/04 300", "2021/06/15 8/9"])
    first = _loaded(path)
    out = tmp_path / "out.dat"
    first.file_path = out
    first.save()
    second = _loaded(out)
    assert second.traffics == first.traffics
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == f'lines: "{len(first.traffics)}"'
    assert "2020/01/05 10/20" in lines
    assert "2020/01/04 300" in lines


def test_load_size_reads_first_line(tmp_path):
    path = tmp_path / "h.dat"
    _write(path, ['lines: "42"', "2020/01/05 10/20"])
    history = HistoryTrafficFile(path, today=TODAY)
    history.load_size()
    assert len(history) == 42
    assert history.traffics == []


def test_load_stops_at_record_limit(tmp_path):
    path = tmp_path / "h.dat"
    start = datetime.date(1950, 1, 1)
    lines = [
        (start + datetime.timedelta(days=n)).strftime("%Y/%m/%d") + " 1/1"
        for n in range(10010)
    ]
    _write(path, lines)
    history = _loaded(path)
    assert len(history) == 10000 + 1


def test_merge_adds_same_dates(tmp_path):
    a_path, b_path = tmp_path / "a.dat", tmp_path / "b.dat"
    _write(a_path, ["2020/01/05 10/20"])
    _write(b_path, ["2020/01/05 1/2", "2020/01/06 5/5"])
    a, b = _loaded(a_path), _loaded(b_path)
    a.merge(b)
    entry = find_by_date(a.traffics, 2020, 1, 5)
    assert (entry.up_kbytes, entry.down_kbytes) == (11, 22)
    assert find_by_date(a.traffics, 2020, 1, 6) is not None


def test_merge_ignoring_same_dates(tmp_path):
    a_path, b_path = tmp_path / "a.dat", tmp_path / "b.dat"
    _write(a_path, ["2020/01/05 10/20"])
    _write(b_path, ["2020/01/05 1/2", "2020/01/06 5/5"])
    a, b = _loaded(a_path), _loaded(b_path)
    a.merge(b, ignore_same_data=True)
    entry = find_by_date(a.traffics, 2020, 1, 5)
    assert (entry.up_kbytes, entry.down_kbytes) == (10, 20)
    assert find_by_date(a.traffics, 2020, 1, 6).kbytes() == 10
    assert len(a) == len(a.traffics)


def test_merge_does_not_alias_other(tmp_path):
    a_path, b_path = tmp_path / "a.dat", tmp_path / "b.dat"
    _write(a_path, ["2020/01/07 1/1"])
    _write(b_path, ["2020/01/06 5/5"])
    a, b = _loaded(a_path), _loaded(b_path)
    a.merge(b)
    find_by_date(a.traffics, 2020, 1, 6).up_kbytes = 99
    assert find_by_date(b.traffics, 2020, 1, 6).up_kbytes == 5


def test_find_by_date_missing_returns_none():
    traffics = [HistoryTraffic(2020, 1, 9, 1, 1), HistoryTraffic(2020, 1, 5, 1, 1)]
    assert find_by_date(traffics, 2020, 1, 7) is None
    assert find_by_date(traffics, 2020, 1, 9) is traffics[0]
    assert find_by_date([], 2020, 1, 9) is None


@pytest.mark.parametrize("up,down", [(0, 0), (3, 4), (10**12, 1)])
def test_kbytes_is_sum(up, down):
    assert HistoryTraffic(2020, 1, 1, up, down).kbytes() == up + down