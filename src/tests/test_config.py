from unittest import mock

from palmbot.config.config import Config


def test_missing_required_lists_unset_secrets():
    with mock.patch.object(Config, "LINE_CHANNEL_ACCESS_TOKEN", ""), \
        mock.patch.object(Config, "OPENAI_API_KEY", ""):
        assert Config.missing_required() == ["LINE_CHANNEL_ACCESS_TOKEN", "OPENAI_API_KEY"]


def test_missing_required_empty_when_configured():
    with mock.patch.object(Config, "LINE_CHANNEL_ACCESS_TOKEN", "line-token"), \
        mock.patch.object(Config, "OPENAI_API_KEY", "sk-test"):
        assert Config.missing_required() == []


def test_startup_check_only_reports():
    assert not hasattr(Config, "validate_required")


def test_webhook_deadline_below_worker_timeout():
    assert Config.WEBHOOK_DEADLINE < 60
    assert Config.LINE_TIMEOUT * 2 + Config.OPENAI_TIMEOUT < Config.WEBHOOK_DEADLINE
