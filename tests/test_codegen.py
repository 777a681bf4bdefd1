"""
Testing secret generation and the random.org client.
- random.org is never contacted: requests.get is replaced with monkeypatch.
"""

import pytest
import requests

import mastermind.random_client as random_client
from mastermind import config
from mastermind.codegen import generate
from mastermind.errors import InvalidParameters

@pytest.mark.parametrize("length", [1, 4, 6, 8])
def test_generate_shape_and_range(length):
    for _ in range(20):
        code = generate(length, 6)
        assert len(code) == length
        assert all(0 <= color < 6 for color in code)

def test_generate_two_colors():
    code = generate(50, 2)
    assert set(code) <= {0, 1}

@pytest.mark.parametrize("length, colors", [(0, 6), (-1, 6), (4, 1), (4, 0), (4, -3)])
def test_generate_rejects_bad_parameters(length, colors):
    with pytest.raises(InvalidParameters):
        generate(length, colors)

def test_generate_rejects_non_integers():
    with pytest.raises(InvalidParameters):
        generate(4.0, 6)
    with pytest.raises(InvalidParameters):
        generate(True, 6)


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_local_source_never_calls_the_network(monkeypatch):
    monkeypatch.setattr(config, "RANDOM_SOURCE", "local")

    def boom(*args, **kwargs):
        raise AssertionError("network used")
    monkeypatch.setattr(random_client.requests, "get", boom)

    code = random_client.fetch_code(6, 8)
    assert len(code) == 6

def test_random_org_success(monkeypatch):
    monkeypatch.setattr(config, "RANDOM_SOURCE", "random.org")
    seen = {}

    def fake_get(url, params, timeout):
        seen.update(params)
        return FakeResponse("5\n0\n3\n1\n")
    monkeypatch.setattr(random_client.requests, "get", fake_get)

    assert random_client.fetch_code(4, 6) == [5, 0, 3, 1]
    assert seen["num"] == 4
    assert seen["max"] == 5

def test_random_org_out_of_range_falls_back(monkeypatch):
    monkeypatch.setattr(config, "RANDOM_SOURCE", "random.org")
    monkeypatch.setattr(random_client.requests, "get", lambda *a, **k: FakeResponse("9\n0\n0\n0\n"))

    code = random_client.fetch_code(4, 6)
    assert len(code) == 4
    assert all(0 <= color < 6 for color in code)

def test_random_org_network_error_falls_back(monkeypatch):
    monkeypatch.setattr(config, "RANDOM_SOURCE", "random.org")

    def fake_get(*args, **kwargs):
        raise requests.ConnectionError("offline")
    monkeypatch.setattr(random_client.requests, "get", fake_get)

    code = random_client.fetch_code(8, 6)
    assert len(code) == 8

def test_random_org_http_error_falls_back(monkeypatch):
    monkeypatch.setattr(config, "RANDOM_SOURCE", "random.org")
    monkeypatch.setattr(random_client.requests, "get", lambda *a, **k: FakeResponse("", 503))

    assert len(random_client.fetch_code(4, 6)) == 4

def test_fetch_code_does_not_hide_bad_parameters(monkeypatch):
    monkeypatch.setattr(config, "RANDOM_SOURCE", "random.org")
    with pytest.raises(InvalidParameters):
        random_client.fetch_code(0, 6)
