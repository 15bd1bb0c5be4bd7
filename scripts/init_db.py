#!/usr/bin/env python
"""Initialize PostgreSQL database for the legislative news service."""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import text

from storage.schema import (
    Base,
    create_engine_with_url,
    create_tables,
    get_database_url,
    get_sessionmaker,
    seed_reference_data,
    seed_sample_articles,
)


def main():
    """Create all tables, then seed states, topics and sample articles."""

    print("🔍 Legislative News - Database Initialization")
    print("=" * 60)

    database_url = get_database_url()
    print(f"\n📊 Database URL: {database_url}")

    # Create engine
    print("\n⚙️  Creating database engine...")
    try:
        engine = create_engine_with_url(database_url)
        print("✅ Engine created successfully")
    except Exception as e:
        print(f"❌ Error creating engine: {e}")
        return 1

    # Create all tables
    print("\n📋 Creating tables...")
    try:
        create_tables(engine)
        print("✅ All tables created successfully")
    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        return 1

    print("\n📚 Tables:")
    for table_name in Base.metadata.tables.keys():
        print(f"   - {table_name}")

    # Seed reference data and sample articles in one transaction
    print("\n🌱 Seeding data...")
    SessionLocal = get_sessionmaker(engine)
    session = SessionLocal()
    try:
        session.execute(text("SELECT 1"))
        seed_reference_data(session)
        added = seed_sample_articles(session)
        session.commit()
        print(f"✅ States and topics seeded, {added} sample articles added")
    except Exception as e:
        session.rollback()
        print(f"❌ Error seeding database: {e}")
        return 1
    finally:
        session.close()

    print("\n" + "=" * 60)
    print("✅ Database initialization complete!")
    print("\nNext steps:")
    print("  1. Start API: python -m legis_news.main")
    print("  2. Check health: curl http://localhost:8080/health")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
