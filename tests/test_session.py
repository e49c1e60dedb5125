"""Tests for httpx client wiring."""
import ssl

import httpx

from dlkit import session
from dlkit.config import Settings
from dlkit.user_agent import PlatformInfo

PIXEL = PlatformInfo(os_version="5.1", language="en", region="US", model="Pixel", build_id="ABC123", is_release=True)


def test_client_options_defaults():
    options = session.client_options(Settings(), PIXEL)
    assert "5.1; en-us; Pixel Build/ABC123" in options["headers"]["User-Agent"]
    assert options["timeout"].connect == 10.0
    assert options["timeout"].read == 15.0
    assert "verify" not in options


def test_client_options_custom_template():
    options = session.client_options(Settings(user_agent_template="Agent/%s/%s"), PIXEL)
    assert options["headers"]["User-Agent"] == "Agent/5.1; en-us; Pixel Build/ABC123/Mobile "


def test_client_options_trust_all(monkeypatch):
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    monkeypatch.setattr(session, "trust_all_connections", lambda: context)
    options = session.client_options(Settings(trust_all_certificates=True), PIXEL)
    assert options["verify"] is context


def test_client_options_trust_all_unavailable(monkeypatch):
    monkeypatch.setattr(session, "trust_all_connections", lambda: None)
    options = session.client_options(Settings(trust_all_certificates=True), PIXEL)
    assert "verify" not in options


def test_open_client():
    with session.open_client(Settings(), PIXEL, follow_redirects=False) as client:
        assert isinstance(client, httpx.Client)
        assert client.headers["User-Agent"].endswith("Mobile Safari/533.1")
        assert client.follow_redirects is False
