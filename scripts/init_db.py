from __future__ import annotations

from _bootstrap import REPO_ROOT, describe, load_settings

from employee_attendance.database.bootstrap import apply_schema, list_tables


def main() -> None:
    settings = load_settings()
    db_config = dict(settings.DB_CONFIG)

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    print(f"OK: Applied schema.sql -> {describe(db_config)} (tables={len(tables)})")


if __name__ == "__main__":
    main()
