"""Tests for User-Agent composition."""
import locale
import platform
import unittest

from dlkit.user_agent import (
    DEFAULT_USER_AGENT_TEMPLATE,
    FallbackTemplateProvider,
    PlatformInfo,
    StaticTemplateProvider,
    build_platform_descriptor,
    build_user_agent,
)

PIXEL = PlatformInfo(
    os_version="5.1",
    language="en",
    region="US",
    model="Pixel",
    build_id="ABC123",
    is_release=True,
)


class _BrokenProvider:
    def template(self):
        raise RuntimeError("no platform resources")


class TestUserAgent(unittest.TestCase):
    def test_full_descriptor(self):
        self.assertEqual(build_platform_descriptor(PIXEL), "5.1; en-us; Pixel Build/ABC123")
        self.assertEqual(
            build_user_agent(PIXEL, FallbackTemplateProvider()),
            "Mozilla/5.0 (Linux; U; Android 5.1; en-us; Pixel Build/ABC123) "
            "AppleWebKit/533.1 (KHTML, like Gecko) Version/4.0 Mobile Safari/533.1",
        )

    def test_defaults(self):
        self.assertEqual(build_platform_descriptor(PlatformInfo()), "1.0; en")

    def test_model_only_for_release_builds(self):
        info = PlatformInfo(os_version="4.4", language="fr", model="Nexus", build_id="KRT16")
        self.assertEqual(build_platform_descriptor(info), "4.4; fr Build/KRT16")

    def test_language_without_region(self):
        info = PlatformInfo(os_version="9", language="DE")
        self.assertEqual(build_platform_descriptor(info), "9; de")

    def test_native_template(self):
        ua = build_user_agent(PIXEL, StaticTemplateProvider("UA (%s) [%s]"))
        self.assertEqual(ua, "UA (5.1; en-us; Pixel Build/ABC123) [Mobile ]")

    def test_fallback_template(self):
        expected = DEFAULT_USER_AGENT_TEMPLATE % ("5.1; en-us; Pixel Build/ABC123", "Mobile ")
        for provider in (None, StaticTemplateProvider(None), StaticTemplateProvider(""), _BrokenProvider()):
            with self.subTest(provider=provider):
                self.assertEqual(build_user_agent(PIXEL, provider), expected)

    def test_template_without_slots_falls_back(self):
        ua = build_user_agent(PIXEL, StaticTemplateProvider("fixed-agent"))
        self.assertTrue(ua.startswith("Mozilla/5.0 (Linux; U; Android 5.1;"))


def test_from_host(monkeypatch):
    monkeypatch.setattr(platform, "release", lambda: "6.1.0")
    monkeypatch.setattr(platform, "machine", lambda: "x86_64")
    monkeypatch.setattr(locale, "getlocale", lambda *args: ("de_DE", "UTF-8"))
    info = PlatformInfo.from_host()
    assert info == PlatformInfo(os_version="6.1.0", language="de", region="DE", model="x86_64", is_release=True)
    assert build_platform_descriptor(info) == "6.1.0; de-de; x86_64"


def test_from_host_without_locale(monkeypatch):
    monkeypatch.setattr(locale, "getlocale", lambda *args: (None, None))
    info = PlatformInfo.from_host()
    assert info.language == ""
    assert "; en" in build_user_agent(info)


if __name__ == "__main__":
    unittest.main()
