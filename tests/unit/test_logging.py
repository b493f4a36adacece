from docserver.logging import redact_secrets


def test_redact_secrets_masks_only_secret_keys():
    event = {"event": "user_authenticated", "user_id": "u1", "token": "abc", "password": "pw"}

    result = redact_secrets(None, "info", event)

    assert result == {
        "event": "user_authenticated",
        "user_id": "u1",
        "token": "[redacted]",
        "password": "[redacted]",
    }


def test_redact_secrets_leaves_clean_events_alone():
    event = {"event": "cache_swept", "removed": 3}
    assert redact_secrets(None, "debug", dict(event)) == event
