from __future__ import annotations

import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.clinic_workforce.clinic_workforce.database.bootstrap import apply_schema, list_tables


def main() -> None:
    load_dotenv(override=False)
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(settings.db_config, schema_path=schema_path)
    tables = list_tables(settings.db_config)
    print(f"OK: Applied schema.sql -> {settings.db_label()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
