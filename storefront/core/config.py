from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Settings class to retrieve environment variables.
    """

    DATABASE_URL: str
    DOMAIN: str = "localhost"     # localhost or production domain
    LOG_LEVEL: str = "INFO"

    # Pricing
    CURRENCY_SYMBOL: str = "₹"
    FREE_SHIPPING_ON_DISCOUNTED_SUBTOTAL: bool = True

    # Mail
    MAIL_USERNAME: str = ""
    MAIL_PASSWORD: str = ""
    MAIL_FROM: str = "noreply@example.com"
    MAIL_PORT: int = 587
    MAIL_SERVER: str = "localhost"
    MAIL_FROM_NAME: str = "Storefront"
    MAIL_STARTTLS: bool = True
    MAIL_SSL_TLS: bool = False
    USE_CREDENTIALS: bool = True
    VALIDATE_CERTS: bool = True
    MAIL_SUPPRESS_SEND: bool = False
    MAIL_TEMPLATE_FOLDER: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file='.env',
        extra='ignore',
    )


Config = Settings()
