#!/usr/bin/env python3
"""
Bring an existing database up to the current schema.

Creates missing tables and adds the one-application-per-applicant unique index
to ``job_applications`` tables created before the constraint existed.
"""
import sys

from sqlalchemy import inspect, text

from .database import engine, init_db

UNIQUE_APPLICATION_INDEX = "uq_job_applications_job_applicant"


def ensure_unique_application_index() -> bool:
    inspector = inspect(engine)
    existing_index_names = {i.get("name") for i in inspector.get_indexes("job_applications") if i.get("name")}
    existing_unique_names = {
        u.get("name") for u in inspector.get_unique_constraints("job_applications") if u.get("name")
    }
    if UNIQUE_APPLICATION_INDEX in existing_index_names or UNIQUE_APPLICATION_INDEX in existing_unique_names:
        print(f"✓ Unique index already exists: {UNIQUE_APPLICATION_INDEX}")
        return True

    try:
        with engine.begin() as conn:
            conn.execute(text(
                f"CREATE UNIQUE INDEX {UNIQUE_APPLICATION_INDEX} ON job_applications (job_id, applicant_id)"
            ))
    except Exception as e:
        # Usually pre-existing duplicates; they have to be cleaned up by hand.
        print(f"✗ Could not add unique index {UNIQUE_APPLICATION_INDEX}: {e}")
        return False

    print(f"✓ Added unique index: {UNIQUE_APPLICATION_INDEX}")
    return True


def migrate() -> bool:
    print("Initializing database with all models...")
    init_db()
    print("✓ Database initialized successfully")
    return ensure_unique_application_index()


def main() -> None:
    sys.exit(0 if migrate() else 1)


if __name__ == "__main__":
    main()
