"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; business rules live in the services.
Needs a database prepared with ``scripts/init_db.py`` and ``scripts/seed_db.py``.
"""

from datetime import date

from dotenv import load_dotenv

from config import load_settings

from src.clinic_workforce.clinic_workforce.container import build_container


def main():
    load_dotenv(override=False)
    container = build_container(load_settings())

    for block in container.schedule_block_service.list_blocks(clinic_id=1, start=date.today(), end=date.today()):
        print(block.role_needed, f"{block.fill_count}/{block.qty_needed}", "filled" if block.is_filled else "open")


if __name__ == "__main__":
    main()
