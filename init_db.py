import logging

from vaccination.config import get_settings
from vaccination.database import SessionLocal, build_engine
from vaccination.seed import create_schema, seed_reference_data


# ======================================================
# MAIN
# ======================================================

def main():
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    database_url = settings.resolved_database_url
    engine = build_engine(database_url)
    create_schema(engine)
    print(f"Schema ready: {database_url}")

    db = SessionLocal(bind=engine)
    try:
        inserted = seed_reference_data(db)
    finally:
        db.close()

    for section, count in inserted.items():
        print(f"  {section}: +{count}")
    print("Reference data loaded.")


if __name__ == "__main__":
    main()
