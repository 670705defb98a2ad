from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./rental.db"
    DOMAIN: str = "http://localhost:8000"
    LOG_LEVEL: str = "INFO"

    SESSION_COOKIE: str = "admin_session"
    SESSION_TTL_HOURS: int = 24

    SEED_DEMO_DATA: bool = False
    ADMIN_EMAIL: str = "admin@elegancecarrental.com"
    ADMIN_PASSWORD: str = "admin123"
    ALLOW_ADMIN_SIGNUP: bool = True

    MAIL_USERNAME: Optional[str] = None
    MAIL_PASSWORD: Optional[str] = None
    MAIL_FROM: Optional[str] = None
    MAIL_SERVER: str = "smtp.gmail.com"
    MAIL_PORT: int = 587

    TWILIO_SID: Optional[str] = None
    TWILIO_AUTH_TOKEN: Optional[str] = None
    TWILIO_WHATSAPP_FROM: Optional[str] = None
    ADMIN_WHATSAPP_TO: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="allow"
    )

    @property
    def mail_enabled(self) -> bool:
        return bool(self.MAIL_USERNAME and self.MAIL_PASSWORD and self.MAIL_FROM)

    @property
    def whatsapp_enabled(self) -> bool:
        return bool(self.TWILIO_SID and self.TWILIO_AUTH_TOKEN
                    and self.TWILIO_WHATSAPP_FROM and self.ADMIN_WHATSAPP_TO)


settings = Settings()
