"""Tests for shared collector plumbing."""

from unittest.mock import MagicMock

from collectors import fetch_package_descriptions
from collectors.base import BaseCollector, get_session
from models import CollectorConfig
from conftest import make_response


class DummyCollector(BaseCollector):
    source_name = "dummy"

    def collect(self):
        return None


def test_get_session_mounts_retry_adapter():
    session = get_session(retries=2)
    adapter = session.get_adapter("https://example.test/")
    assert adapter.max_retries.total == 2
    assert 503 in adapter.max_retries.status_forcelist
    assert 404 not in adapter.max_retries.status_forcelist


def test_default_session_uses_configured_retries():
    collector = DummyCollector(config=CollectorConfig(http_retries=1))
    assert collector.session.get_adapter("https://example.test/").max_retries.total == 1


def test_attempts_sleeps_only_for_nonzero_delays():
    sleep = MagicMock()
    collector = DummyCollector(session=MagicMock(), sleep=sleep)

    assert list(collector.attempts([0, 2, 10])) == [0, 1, 2]
    assert [c.args[0] for c in sleep.call_args_list] == [2, 10]


def test_warn_records_and_prints(capsys):
    collector = DummyCollector(session=MagicMock())
    collector.warn("something broke")
    assert collector.errors == ["something broke"]
    assert capsys.readouterr().out == "WARNING: something broke\n"


def test_fetch_package_descriptions_prefers_debian(session):
    session.get.side_effect = [
        make_response(content="numpy (1:1.24.2-1) Fast array facility\n"),
        make_response(content={"numpy": "pip numpy", "pytest": "testing"}),
    ]

    packages = fetch_package_descriptions(session=session)

    assert packages == {"numpy": "Fast array facility", "pytest": "testing"}
    urls = [c.args[0] for c in session.get.call_args_list]
    config = CollectorConfig()
    assert urls == [config.debian_url, config.pip_url]
