from config.settings import Settings
from models.enums import DialogStateScope


def test_dialog_state_scope_is_parsed_into_enum():
    settings = Settings(dialog_state_scope="private_conversation")

    assert settings.dialog_state_scope is DialogStateScope.PRIVATE_CONVERSATION


def test_registration_defaults(monkeypatch):
    for name in ("TRIGGER_TEXT", "LOCALE", "DIALOG_STATE_SCOPE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(trigger_text="REGISTRAMI", locale="it", dialog_state_scope="user")

    assert settings.trigger_text == "REGISTRAMI"
    assert settings.dialog_state_scope == DialogStateScope.USER


def test_settings_only_carry_fields_the_bot_reads():
    assert set(Settings.model_fields) == {
        "telegram_bot_token",
        "trigger_text",
        "locale",
        "dialog_state_scope",
        "log_level",
    }
