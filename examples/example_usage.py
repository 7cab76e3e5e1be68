"""Drive the service layer directly, without Flask.

Controllers stay thin; the rules live in the services. Run after
``scripts/init_db.py`` and ``scripts/seed_db.py``.
"""

import importlib

from dotenv import load_dotenv

from academic_records.config import get_settings_module
from academic_records.container import build_container
from academic_records.core.enums import Role


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    scope = container.scope_resolver.resolve("usr-teacher", Role.TEACHER)
    print("courses in scope:", sorted(scope.course_ids))
    for row in container.report_builder.course_report(scope):
        print(row)

    print("GPA stu-demo:", container.gpa_service.compute_gpa("stu-demo"))


if __name__ == "__main__":
    main()
