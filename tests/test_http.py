from __future__ import annotations

import threading

from price_wise.utils.io.http import HTTPConfig, RequestsTransport


class RecordingSession:
    def __init__(self):
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return "resp"

    def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        return "resp"


def _recording_transport(**cfg) -> tuple[RequestsTransport, RecordingSession]:
    t = RequestsTransport(HTTPConfig(**cfg))
    rec = RecordingSession()
    t._new_session = lambda: rec  # type: ignore[method-assign]
    return t, rec


def test_default_config_is_single_attempt():
    t = RequestsTransport(HTTPConfig())

    adapter = t.session.get_adapter("https://www150.statcan.gc.ca")
    assert adapter.max_retries.total == 0


def test_get_passes_params_and_timeout():
    t, rec = _recording_transport(timeout_sec=7, headers={"User-Agent": "price-wise"})

    t.get("https://x.test/a", params={"vectorIds": "1"})

    method, url, kwargs = rec.calls[0]
    assert (method, url) == ("GET", "https://x.test/a")
    assert kwargs == {"params": {"vectorIds": "1"}, "headers": {"User-Agent": "price-wise"}, "timeout": 7}


def test_post_sends_json_content_type():
    t, rec = _recording_transport(timeout_sec=7, headers={"User-Agent": "price-wise"})

    t.post("https://x.test/b", json=[{"vectorId": 1}])

    method, url, kwargs = rec.calls[0]
    assert method == "POST"
    assert kwargs["json"] == [{"vectorId": 1}]
    assert kwargs["headers"] == {"User-Agent": "price-wise", "Content-Type": "application/json"}
    assert kwargs["timeout"] == 7


def test_each_thread_gets_its_own_session():
    t = RequestsTransport(HTTPConfig())
    main_session = t.session
    assert t.session is main_session  # reaproveitada na mesma thread

    other = []
    th = threading.Thread(target=lambda: other.append(t.session))
    th.start()
    th.join()

    assert other[0] is not main_session
