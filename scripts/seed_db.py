from __future__ import annotations

import importlib

from dotenv import load_dotenv

from academic_records.common.logging_config import setup_logging
from academic_records.config import get_settings_module
from academic_records.database.bootstrap import apply_seed_sql, ensure_demo_users


def main() -> None:
    load_dotenv(override=False)
    setup_logging("INFO", to_file=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config)
    ensure_demo_users(db_config)

    print(
        "OK: Seeded courses, assignments and demo identities -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
