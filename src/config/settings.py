from pydantic_settings import BaseSettings
from pydantic import Field
import os
from dotenv import load_dotenv

from models.enums import DialogStateScope

load_dotenv()

class Settings(BaseSettings):
    # Bot token
    telegram_bot_token: str = Field(default=os.getenv("TELEGRAM_BOT_TOKEN", ""))

    # Registration flow
    trigger_text: str = Field(default=os.getenv("TRIGGER_TEXT", "REGISTRAMI"))
    locale: str = Field(default=os.getenv("LOCALE", "it"))

    # Where form sessions live: per conversation, per user, or per user in each conversation
    dialog_state_scope: DialogStateScope = Field(
        default=os.getenv("DIALOG_STATE_SCOPE", DialogStateScope.USER.value),
        validate_default=True,
    )

    # Logging
    log_level: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))

    class Config:
        env_file = ".env"

settings = Settings()
