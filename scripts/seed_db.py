from __future__ import annotations

import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.clinic_workforce.clinic_workforce.database.bootstrap import apply_seed_sql


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)

    seed_path = REPO_ROOT / "database" / "seed.sql"
    apply_seed_sql(settings.db_config, seed_path=seed_path)
    print(f"OK: Seeded database -> {settings.db_label()}")


if __name__ == "__main__":
    main()
