"""
Application Settings

Environment-based configuration for the SnapShop backend.

Responsibility:
    - Load .env file (python-dotenv) once per process
    - Parse environment variables into a typed, immutable Settings object
    - Provide a cached accessor for the running application

Architecture Notes:
    - Shared utility (used by API, Application and Infrastructure layers)
    - Settings is a frozen dataclass: tests build their own instance and pass
      it to create_app() instead of mutating os.environ
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

DEFAULT_ALLOWED_ORIGINS: tuple[str, ...] = (
    "https://ymagarwal.github.io",
    "http://localhost:3000",
    "http://localhost:5500",
    "http://127.0.0.1:5500",
)

STORAGE_BACKENDS = ("json", "redis")
NOTIFIER_MODES = ("background", "celery", "disabled")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration.

    Attributes:
        host: Bind address for uvicorn
        port: Listening port
        storage_backend: "json" (file-backed) or "redis" (document store)
        data_dir: Directory holding customers.json / merchants.json
        redis_url: Redis connection string for the document-store backend
        admin_password: Shared admin secret (None disables admin access)
        smtp_host: SMTP server for notification emails
        smtp_port: SMTP port (465 for implicit SSL)
        smtp_use_ssl: Use SMTP_SSL instead of STARTTLS
        smtp_user: SMTP login and sender address
        smtp_password: SMTP password (Gmail app password)
        notification_email: Fixed destination for notifications
        notifier_mode: "background", "celery" or "disabled"
        celery_broker_url: Broker used when notifier_mode == "celery"
        allowed_origins: Cross-origin allow-list (no wildcard)
        rate_limit_window_seconds: Rolling window length
        rate_limit_general_max: Requests per window for all /api/ traffic
        rate_limit_submit_max: Requests per window for POST /api/submit
        max_body_bytes: Maximum accepted JSON body size
        require_admin_for_list: Guard GET /api/customers|merchants with the admin secret
        log_level: Root logging level name

    Examples:
        >>> settings = Settings(data_dir="/tmp/snapshop", admin_password="s3cret")
        >>> settings.storage_backend
        'json'
    """

    host: str = "0.0.0.0"
    port: int = 3000

    storage_backend: str = "json"
    data_dir: str = "./data"
    redis_url: str = "redis://localhost:6379/0"

    admin_password: Optional[str] = None

    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    smtp_use_ssl: bool = True
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    notification_email: str = "inquiries.snapshop@gmail.com"
    notifier_mode: str = "background"
    celery_broker_url: str = "redis://localhost:6379/1"

    allowed_origins: tuple[str, ...] = field(default=DEFAULT_ALLOWED_ORIGINS)

    rate_limit_window_seconds: int = 15 * 60
    rate_limit_general_max: int = 100
    rate_limit_submit_max: int = 5
    max_body_bytes: int = 10 * 1024

    require_admin_for_list: bool = True
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, "
                f"got {self.storage_backend!r}"
            )
        if self.notifier_mode not in NOTIFIER_MODES:
            raise ValueError(
                f"NOTIFIER_MODE must be one of {', '.join(NOTIFIER_MODES)}, "
                f"got {self.notifier_mode!r}"
            )

    @property
    def notifications_configured(self) -> bool:
        """True when SMTP credentials are present."""
        return bool(self.smtp_user and self.smtp_password)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build Settings from environment variables (after loading .env).

        Returns:
            Settings populated from the environment, defaults elsewhere

        Raises:
            ValueError: If an enumerated variable has an unsupported value
        """
        load_dotenv()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            storage_backend=os.getenv("STORAGE_BACKEND", "json").strip().lower(),
            data_dir=os.getenv("DATA_DIR", "./data"),
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
            admin_password=os.getenv("ADMIN_PASSWORD") or None,
            smtp_host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
            smtp_port=int(os.getenv("SMTP_PORT", "465")),
            smtp_use_ssl=_env_bool("SMTP_USE_SSL", True),
            smtp_user=os.getenv("GMAIL_USER") or None,
            smtp_password=os.getenv("GMAIL_APP_PASSWORD") or None,
            notification_email=os.getenv(
                "NOTIFICATION_EMAIL", "inquiries.snapshop@gmail.com"
            ),
            notifier_mode=os.getenv("NOTIFIER_MODE", "background").strip().lower(),
            celery_broker_url=os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/1"),
            allowed_origins=_env_list("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS),
            rate_limit_window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900")),
            rate_limit_general_max=int(os.getenv("RATE_LIMIT_GENERAL_MAX", "100")),
            rate_limit_submit_max=int(os.getenv("RATE_LIMIT_SUBMIT_MAX", "5")),
            max_body_bytes=int(os.getenv("MAX_BODY_BYTES", "10240")),
            require_admin_for_list=_env_bool("REQUIRE_ADMIN_FOR_LIST", True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Process-wide settings (read once, cached).

    Tests call get_settings.cache_clear() after changing the environment.
    """
    return Settings.from_env()
