import re
import threading

import pytest

from tinyrt.demo import Signal, main, read_file, run_workers


def _start_waiter(signal):
    thread = threading.Thread(target=signal.wait, daemon=True)
    thread.start()
    return thread


def test_signal_post_releases_waiter():
    signal = Signal()
    waiter = _start_waiter(signal)
    signal.post()
    waiter.join(timeout=5)
    assert not waiter.is_alive()


def test_signal_wait_blocks_until_posted():
    signal = Signal()
    waiter = _start_waiter(signal)
    waiter.join(timeout=0.1)
    assert waiter.is_alive()
    signal.post()
    waiter.join(timeout=5)
    assert not waiter.is_alive()


def test_signal_repeated_post_releases_only_one_wait():
    signal = Signal()
    signal.post()
    signal.post()
    signal.wait()
    waiter = _start_waiter(signal)
    waiter.join(timeout=0.1)
    assert waiter.is_alive()
    signal.post()
    waiter.join(timeout=5)
    assert not waiter.is_alive()


def test_read_file_returns_contents(tmp_path):
    path = tmp_path / "data.txt"
    data = b"all: a.out\n\tclean\n\x00\xff"
    path.write_bytes(data)
    assert read_file(path) == data
    assert read_file(str(path)) == data


def test_read_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_file(tmp_path / "absent")


def test_run_workers_handles_every_task():
    emitted = []
    counts = run_workers(3, 30, emitted.append)
    assert len(emitted) == 30
    assert sum(counts) == 30
    assert len(counts) == 3
    assert set(emitted) <= {0, 1, 2}
    for number, count in enumerate(counts):
        assert emitted.count(number) == count


def test_run_workers_single_thread_does_all_work():
    emitted = []
    counts = run_workers(1, 7, emitted.append)
    assert counts == [7]
    assert emitted == [0] * 7


def test_run_workers_without_tasks():
    emitted = []
    counts = run_workers(4, 0, emitted.append)
    assert counts == [0, 0, 0, 0]
    assert emitted == []


def test_run_workers_more_threads_than_tasks():
    emitted = []
    counts = run_workers(5, 2, emitted.append)
    assert sum(counts) == 2
    assert len(emitted) == 2


@pytest.mark.parametrize("threads, tasks", [(0, 5), (-1, 5), (2, -1)])
def test_run_workers_rejects_bad_counts(threads, tasks):
    with pytest.raises(ValueError):
        run_workers(threads, tasks, lambda number: None)


def test_main_prints_file_then_rounds(tmp_path, capsys):
    path = tmp_path / "input.txt"
    path.write_text("hello\n")
    status = main([str(path), "--threads", "2", "--tasks", "4", "--rounds", "2"])
    out = capsys.readouterr().out
    assert status == 0
    assert out.startswith("hello\n")
    rounds = re.findall(r"([0-9]*)\nparent continues after iteration ([0-9]+)\n", out[len("hello\n"):])
    assert [number for _, number in rounds] == ["0", "1"]
    for digits, _ in rounds:
        assert len(digits) == 4
        assert set(digits) <= {"0", "1"}


def test_main_defaults_read_makefile(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "Makefile").write_text("all:\n")
    status = main([])
    out = capsys.readouterr().out
    assert status == 0
    assert out.startswith("all:\n")
    rounds = re.findall(r"([0-9]*)\nparent continues after iteration ([0-9]+)\n", out)
    assert [number for _, number in rounds] == ["0", "1", "2", "3", "4"]
    for digits, _ in rounds:
        assert len(digits) == 30
        assert set(digits) <= {"0", "1", "2"}


def test_main_missing_file_fails(tmp_path, capsys):
    status = main([str(tmp_path / "absent")])
    captured = capsys.readouterr()
    assert status == 1
    assert "parent continues" not in captured.out


def test_main_rejects_zero_threads(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text("x")
    with pytest.raises(SystemExit) as excinfo:
        main([str(path), "--threads", "0"])
    assert excinfo.value.code == 2