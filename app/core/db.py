# =============================================================================================
# APP/CORE/DB.PY - SQLALCHEMY DATABASE ENGINE AND SESSION MANAGEMENT
# =============================================================================================
# This module sets up the database connection layer using SQLAlchemy ORM.
#
# KEY CONCEPTS:
# - Engine: Manages the connection pool (created once at startup)
# - SessionLocal: Factory for creating database sessions (one per request)
# - Base: Parent class for all ORM models (User, RefreshToken, Chirp)
# - get_db(): FastAPI dependency that provides a session per request
#
# FLOW:
# 1. Engine connects to DATABASE_URL from config
# 2. Each API request calls get_db() to get a fresh session
# 3. The stores (app/stores/) use that session to query/insert/update
# 4. Session auto-closes after the request (even if an error occurs)
# 5. On startup, init_db() creates tables if missing
# =============================================================================================

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from app.core.config import get_settings

# -------------------------
# Load configuration
# -------------------------
settings = get_settings()


def _engine_options(database_url: str) -> dict:
    # A locked or unresponsive database must fail after DATABASE_TIMEOUT_SECONDS
    # instead of blocking the request forever.
    if database_url.startswith("sqlite"):
        # FastAPI runs sync routes in a threadpool
        return {"connect_args": {"check_same_thread": False, "timeout": settings.DATABASE_TIMEOUT_SECONDS}}
    return {"pool_timeout": settings.DATABASE_TIMEOUT_SECONDS}


# -------------------------
# STEP 1: Create the database engine
# -------------------------
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Test connections before use
    **_engine_options(settings.DATABASE_URL),
)


# -------------------------
# SQLITE: foreign keys are OFF by default
# -------------------------
# Deleting a user (admin reset) must cascade to their chirps and refresh tokens.
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key enforcement on each new SQLite connection."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON;")
    cursor.close()


if engine.dialect.name == "sqlite":
    event.listen(engine, "connect", set_sqlite_pragma)

# -------------------------
# STEP 2: Create session factory
# -------------------------
# - autocommit=False: the stores commit explicitly
# - autoflush=False: no implicit flushes before queries
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# -------------------------
# STEP 3: Create declarative base for models
# -------------------------
Base = declarative_base()


# -------------------------
# STEP 4: Dependency for FastAPI routes
# -------------------------
def get_db() -> Session:
    """
    FastAPI dependency that provides a database session for each request.

    LIFECYCLE:
    1. Request arrives at endpoint decorated with Depends(get_db)
    2. FastAPI calls this function, creating a new session
    3. Session is injected into the route handler function
    4. After the route completes (or errors), `finally` closes the session

    USAGE IN ROUTES:
        @router.post("/api/users")
        def create_user(data: UserIn, db: Session = Depends(get_db)):
            return UserStore(db).create(data.email, hash_password(data.password))
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# -------------------------
# STEP 5: Database initialization helper
# -------------------------
def init_db() -> None:
    """
    Create all tables defined in models (CREATE TABLE IF NOT EXISTS).

    Called from the application lifespan in app/main.py.
    """
    # Import all models here so they're registered with Base.metadata
    from app.models import user, token, chirp  # noqa: F401 (imported for side effects)

    Base.metadata.create_all(bind=engine)
