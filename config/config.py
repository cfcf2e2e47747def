from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import ModuleType


@dataclass(frozen=True)
class Settings:
    """Startup configuration, read once and handed to the app and container."""

    secret_key: str
    db_config: dict = field(default_factory=dict)
    debug: bool = False
    testing: bool = False
    log_level: str = "INFO"

    # Dev helpers
    auto_init_db: bool = False
    auto_seed_db: bool = False

    # Attendance classification thresholds (hours)
    full_day_hours: Decimal = Decimal("8.0")
    half_day_hours: Decimal = Decimal("4.0")

    # Payroll status chain: refuse backward moves when True
    payroll_forward_only: bool = True

    @classmethod
    def from_module(cls, settings: ModuleType) -> "Settings":
        return cls(
            secret_key=str(getattr(settings, "SECRET_KEY")),
            db_config=dict(getattr(settings, "DB_CONFIG")),
            debug=bool(getattr(settings, "DEBUG", False)),
            testing=bool(getattr(settings, "TESTING", False)),
            log_level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
            auto_seed_db=bool(getattr(settings, "AUTO_SEED_DB", False)),
            full_day_hours=Decimal(str(getattr(settings, "FULL_DAY_HOURS", "8.0"))),
            half_day_hours=Decimal(str(getattr(settings, "HALF_DAY_HOURS", "4.0"))),
            payroll_forward_only=bool(getattr(settings, "PAYROLL_FORWARD_ONLY", True)),
        )

    def db_label(self) -> str:
        db = self.db_config
        return f"{db.get('user')}@{db.get('host')}:{db.get('port', 3306)}/{db.get('database')}"
