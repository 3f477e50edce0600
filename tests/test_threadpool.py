import threading

import pytest

from greatescape.threadpool import ThreadPool


def test_all_tasks_run_before_wait_returns():
    results = []
    lock = threading.Lock()

    def task(value):
        with lock:
            results.append(value)

    with ThreadPool(4) as pool:
        assert pool.workers == 4
        for i in range(100):
            pool.submit(lambda i=i: task(i))
        pool.wait()
        assert sorted(results) == list(range(100))


def test_pool_is_reusable_across_rounds():
    counter = []
    with ThreadPool(3) as pool:
        for _ in range(3):
            for _ in range(10):
                pool.submit(lambda: counter.append(1))
            pool.wait()
        assert len(counter) == 30


def test_wait_without_tasks_returns():
    results = []
    with ThreadPool(2) as pool:
        pool.wait()
        assert pool.workers == 2
        pool.submit(lambda: results.append("ran"))
        pool.wait()
        assert results == ["ran"]


def test_task_exception_is_raised_by_wait():
    def boom():
        raise ValueError("bad column")

    with ThreadPool(2) as pool:
        pool.submit(boom)
        with pytest.raises(ValueError, match="bad column"):
            pool.wait()


def test_submit_after_close_raises():
    pool = ThreadPool(1)
    pool.close()
    with pytest.raises(RuntimeError):
        pool.submit(lambda: None)


def test_zero_workers_rejected():
    with pytest.raises(ValueError):
        ThreadPool(0)


def test_default_worker_count_positive():
    with ThreadPool() as pool:
        assert pool.workers >= 1