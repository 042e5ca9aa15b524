"""
Initialize database: creates all tables and optionally seeds demo data.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--seed]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text
from transport_admin.database import SessionLocal, create_tables, engine
from transport_admin.config import settings
from transport_admin.gateway import SqlAlchemyGateway
from transport_admin.seeds import seed_database


def main():
    print("Transport Admin DB Initialization")
    print("=" * 40)
    print(f"Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")
    except Exception as e:
        print(f"Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  docker-compose up -d db")
        print("  # or: sudo systemctl start postgresql")
        sys.exit(1)

    print("\nCreating tables...")
    create_tables()
    print("All tables created")

    tables = sorted(inspect(engine).get_table_names())
    print(f"\nTables in database ({len(tables)} total):")
    for t in tables:
        print(f"   - {t}")

    if "--seed" in sys.argv:
        print("\nSeeding demo data...")
        db = SessionLocal()
        try:
            seeded = seed_database(SqlAlchemyGateway(db))
        finally:
            db.close()
        for table, count in seeded.items():
            print(f"   {table}: {count} rows added")

    print("\nDatabase ready! You can now start the backend:")
    print("   uvicorn transport_admin.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
