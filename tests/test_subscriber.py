import threading

from blegatt.subscriber import InvalidLengthError, Subscriber


def test_subscribe_and_lookup():
    sub = Subscriber()
    received = []
    sub.subscribe(0x0010, lambda b, err: received.append((b, err)))
    fn = sub.lookup(0x0010)
    fn(b"\x01", None)
    assert received == [(b"\x01", None)]
    assert len(sub) == 1


def test_lookup_missing_is_none():
    assert Subscriber().lookup(0x0020) is None


def test_unsubscribe_removes():
    sub = Subscriber()
    sub.subscribe(5, lambda b, err: None)
    sub.unsubscribe(5)
    assert sub.lookup(5) is None
    assert len(sub) == 0


def test_unsubscribe_unknown_handle_leaves_others():
    sub = Subscriber()
    sub.subscribe(1, lambda b, err: None)
    sub.unsubscribe(2)
    assert len(sub) == 1


def test_subscribe_replaces():
    sub = Subscriber()
    first = lambda b, err: "first"  # noqa: E731
    second = lambda b, err: "second"  # noqa: E731
    sub.subscribe(3, first)
    sub.subscribe(3, second)
    assert sub.lookup(3) is second


def test_concurrent_subscribe():
    sub = Subscriber()
    threads = [
        threading.Thread(target=sub.subscribe, args=(h, lambda b, err: None))
        for h in range(50)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(sub) == 50


def test_invalid_length_error_message():
    err = InvalidLengthError()
    assert "invalid length" in str(err)