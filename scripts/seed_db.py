from __future__ import annotations

import importlib

from dotenv import load_dotenv

from attendance_portal.config import get_settings_module
from attendance_portal.database.bootstrap import DEMO_USERS, ensure_demo_users


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_users(db_config)
    for full_name, email, password, role, _ in DEMO_USERS:
        print(f"OK: {role.value:<9} {email} / {password} ({full_name})")


if __name__ == "__main__":
    main()
