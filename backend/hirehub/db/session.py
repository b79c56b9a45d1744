from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hirehub.core.config import settings

# SQLite connections are shared across the threadpool FastAPI runs handlers on
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Yield a database session and close it after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
