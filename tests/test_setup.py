"""Test that the project setup is working correctly."""

import slack_alerts


def test_version() -> None:
    """Test that version is defined."""
    assert slack_alerts.__version__ == "0.1.0"


def test_import_modules() -> None:
    """Test that all submodules can be imported."""
    from slack_alerts import alerter, config, exceptions, logging_config

    # Just verify imports work
    assert alerter is not None
    assert config is not None
    assert exceptions is not None
    assert logging_config is not None


def test_public_exports() -> None:
    """Test that the main entry points are exported at package level."""
    assert slack_alerts.SlackAlert is slack_alerts.alerter.SlackAlert
    assert issubclass(slack_alerts.ConfigurationError, slack_alerts.SlackAlertsError)
    assert issubclass(slack_alerts.EmptyAttachmentError, slack_alerts.SlackAlertsError)
