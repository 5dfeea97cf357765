from __future__ import annotations

from _bootstrap import REPO_ROOT, describe, load_settings

from employee_attendance.database.bootstrap import apply_seed_sql, ensure_demo_users


def main() -> None:
    settings = load_settings()
    db_config = dict(settings.DB_CONFIG)

    seed_path = REPO_ROOT / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    ensure_demo_users(db_config)

    print(f"OK: Seeded database -> {describe(db_config)}")


if __name__ == "__main__":
    main()
