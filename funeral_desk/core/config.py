"""Environment-driven configuration for the funeral desk API."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

MIN_TOKEN_MINUTES = 60
MAX_TOKEN_MINUTES = 24 * 60
CONTRACT_POLICIES = ("first", "latest")


@dataclass(slots=True)
class DatabaseSettings:
    """Location of the tabular row store."""

    url: str
    echo: bool = False


@dataclass(slots=True)
class AuthSettings:
    """Authentication settings loaded from environment variables."""

    secret_key: str
    algorithm: str
    access_token_expire_minutes: int
    admin_role: str = "Administrator"
    enabled: bool = True


@dataclass(slots=True)
class NotifySettings:
    """Credentials for the LINE Messaging API push channel."""

    channel_access_token: str
    user_id: str
    push_url: str = "https://api.line.me/v2/bot/message/push"

    @property
    def configured(self) -> bool:
        return bool(self.channel_access_token and self.user_id)


@dataclass(slots=True)
class Settings:
    """Top-level application configuration container."""

    database: DatabaseSettings
    auth: AuthSettings
    notify: NotifySettings
    environment: str = "development"
    timezone: str = "Asia/Taipei"
    currency_symbol: str = "NT$"
    contract_policy: str = "first"
    log_level: str = "INFO"
    log_dir: str = "logs"

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load configuration values from environment variables."""

        def _get_env(name: str, default: str) -> str:
            return os.getenv(name, default)

        def _flag(name: str, default: str) -> bool:
            return _get_env(name, default) not in {"0", "false", "False", ""}

        raw_minutes = _get_env("JWT_EXPIRE_MINUTES", str(MIN_TOKEN_MINUTES))
        try:
            minutes = int(raw_minutes)
        except ValueError as exc:
            raise ValueError(f"JWT_EXPIRE_MINUTES must be an integer, got {raw_minutes!r}") from exc

        settings = cls(
            database=DatabaseSettings(
                url=_get_env("DATABASE_URL", "sqlite:///./funeral_desk.db"),
                echo=_flag("SQLALCHEMY_ECHO", "0"),
            ),
            auth=AuthSettings(
                secret_key=_get_env("JWT_SECRET_KEY", "change-me"),
                algorithm=_get_env("JWT_ALGORITHM", "HS256"),
                access_token_expire_minutes=minutes,
                admin_role=_get_env("ADMIN_ROLE", "Administrator"),
                enabled=_flag("AUTH_ENABLED", "1"),
            ),
            notify=NotifySettings(
                channel_access_token=_get_env("LINE_CHANNEL_ACCESS_TOKEN", ""),
                user_id=_get_env("LINE_USER_ID", ""),
            ),
            environment=_get_env("APP_ENV", "development"),
            timezone=_get_env("APP_TIMEZONE", "Asia/Taipei"),
            currency_symbol=_get_env("CURRENCY_SYMBOL", "NT$"),
            contract_policy=_get_env("REPORT_CONTRACT_POLICY", "first").lower(),
            log_level=_get_env("LOG_LEVEL", "INFO"),
            log_dir=_get_env("LOG_DIR", "logs"),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Reject configurations the application cannot start with."""

        if not self.database.url:
            raise ValueError("DATABASE_URL must be set.")
        try:
            make_url(self.database.url)
        except ArgumentError as exc:
            raise ValueError(f"DATABASE_URL is not a valid database URL: {exc}") from exc

        minutes = self.auth.access_token_expire_minutes
        if not MIN_TOKEN_MINUTES <= minutes <= MAX_TOKEN_MINUTES:
            raise ValueError(
                f"JWT_EXPIRE_MINUTES must be between {MIN_TOKEN_MINUTES} and {MAX_TOKEN_MINUTES}."
            )
        if self.environment == "production" and self.auth.secret_key in {"", "change-me"}:
            raise ValueError("JWT_SECRET_KEY must be set in production.")
        if self.environment == "production" and not self.auth.enabled:
            raise ValueError("AUTH_ENABLED cannot be turned off in production.")

        if self.contract_policy not in CONTRACT_POLICIES:
            raise ValueError(
                "REPORT_CONTRACT_POLICY must be one of: " + ", ".join(CONTRACT_POLICIES)
            )
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"APP_TIMEZONE is not a known timezone: {self.timezone!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    settings = Settings.from_env()

    # Import locally to avoid circular dependencies during module import time.
    from .logger import get_logger

    logger = get_logger(__name__)
    logger.debug(
        "Settings initialised: env=%s tz=%s auth=%s (%s, %d min, admin role %r) "
        "contract_policy=%s line_notify=%s",
        settings.environment,
        settings.timezone,
        "on" if settings.auth.enabled else "off",
        settings.auth.algorithm,
        settings.auth.access_token_expire_minutes,
        settings.auth.admin_role,
        settings.contract_policy,
        "configured" if settings.notify.configured else "off",
    )
    return settings
