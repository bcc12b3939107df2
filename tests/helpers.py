"""Shared test helpers for tixte_client tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

Responder = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was asked to send."""

    def __init__(self, responder: Responder) -> None:
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return responder(request)

        super().__init__(handler)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


def json_responder(body: Any, status_code: int = 200) -> Responder:
    """Answer every request with the same JSON body."""

    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)

    return respond


def text_responder(text: str, status_code: int = 200) -> Responder:
    """Answer every request with a plain-text body."""

    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=text)

    return respond


def raising_responder(exc_type: type[httpx.RequestError], message: str) -> Responder:
    """Fail every request before any response exists."""

    def respond(request: httpx.Request) -> httpx.Response:
        raise exc_type(message, request=request)

    return respond
