from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from ebe.core.config import settings

# The engine owns the connection pool for the configured database.
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

# One Session per request, handed out by ebe.api.deps.get_db.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
