from typing import Literal, Optional

from pydantic import PrivateAttr
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Claims Management API"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./claims.db"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    api_prefix: str = ""

    # Token issuance
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60
    bcrypt_rounds: int = 12

    # Lifecycle switches
    claims_require_approved_policy: bool = True

    # Outbound notifications
    notification_backend: Literal["log", "smtp"] = "log"
    notification_timeout_seconds: float = 10.0
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    mail_from: str = "no-reply@claims.local"

    bootstrap_admin_contact: Optional[str] = None
    bootstrap_admin_password: Optional[str] = None
    bootstrap_admin_name: str = "Administrator"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    _is_sqlite: bool = PrivateAttr(default=False)
    _is_postgresql: bool = PrivateAttr(default=False)
    _is_memory_sqlite: bool = PrivateAttr(default=False)

    def model_post_init(self, __context: object) -> None:
        _scheme, _, _rest = self.database_url.partition(":")
        _scheme = _scheme.lower()
        object.__setattr__(self, "_is_sqlite", "sqlite" in _scheme)
        object.__setattr__(self, "_is_postgresql", "postgresql" in _scheme)
        # sqlite+aiosqlite:// and sqlite+aiosqlite:///:memory: both name a private in-memory database
        _path = _rest.lstrip("/").split("?")[0]
        object.__setattr__(
            self,
            "_is_memory_sqlite",
            self._is_sqlite and (_path in ("", ":memory:") or "mode=memory" in _rest),
        )

    @property
    def is_sqlite(self) -> bool:
        return self._is_sqlite

    @property
    def is_postgresql(self) -> bool:
        return self._is_postgresql

    @property
    def is_memory_sqlite(self) -> bool:
        return self._is_memory_sqlite


settings = Settings()
