import threading
from datetime import datetime

from models import CounterMeasure, Trend
from stores import CounterMeasureStore, IdGenerator, TrendStore


def _trend(trend_id, content="x"):
    return Trend(id=trend_id, date="5/9/2024", content=content, timestamp=datetime(2024, 5, 9))


def test_insert_front_orders_most_recent_first():
    store = TrendStore()
    store.insert_front(_trend("1", "first"))
    store.insert_front(_trend("2", "second"))
    assert [t.content for t in store.list()] == ["second", "first"]
    assert len(store) == 2


def test_list_returns_a_copy():
    store = TrendStore()
    store.insert_front(_trend("1"))
    store.list().clear()
    assert len(store) == 1


def test_find_by_id():
    store = CounterMeasureStore()
    record = CounterMeasure(id="42", searchResult="s", counterMeasure="c", timestamp=datetime(2024, 5, 9))
    store.insert_front(record)
    assert store.find_by_id("42") is record
    assert store.find_by_id("nope") is None


def test_id_generator_is_strictly_increasing_on_a_frozen_clock():
    ids = IdGenerator(clock=lambda: 1715241600.0)
    generated = [ids.next_id() for _ in range(5)]
    assert generated == ["1715241600000", "1715241600001", "1715241600002", "1715241600003", "1715241600004"]


def test_id_generator_unique_across_threads():
    ids = IdGenerator(clock=lambda: 1.0)
    results = []
    lock = threading.Lock()

    def worker():
        for _ in range(200):
            value = ids.next_id()
            with lock:
                results.append(value)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(set(results)) == 800


def test_trend_json_omits_missing_keywords():
    payload = _trend("1").to_json()
    assert "keywords" not in payload
    assert payload["timestamp"].startswith("2024-05-09T00:00:00")
