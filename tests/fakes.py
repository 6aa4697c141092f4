"""Test doubles for the generation service and HTTP sessions."""

from collections import deque

import requests


class FakeGenerator:
    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def generate(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.reply


class FakeResponse:
    def __init__(self, status_code=200, payload=None, json_error=False):
        self.status_code = status_code
        self._payload = payload
        self._json_error = json_error
        self.reason = "Error" if status_code >= 400 else "OK"

    def json(self):
        if self._json_error:
            raise ValueError("not json")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} {self.reason}", response=self)


class FakeSession:
    """Queues responses per HTTP method and records every call."""

    def __init__(self, post=None, get=None):
        self.headers = {}
        self._post = deque(post or [])
        self._get = deque(get or [])
        self.calls = []

    def _next(self, queue):
        item = queue.popleft()
        if isinstance(item, Exception):
            raise item
        return item

    def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        return self._next(self._post)

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return self._next(self._get)
