import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event, literal_column
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from campusconnect.config import settings


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def newest_first(model):
    """Order by created_at descending, falling back to insertion order on ties."""
    return model.created_at.desc(), literal_column(f"{model.__tablename__}.rowid").desc()


SCHEMA_SQL = """\
-- ============================================================
-- ACCOUNTS (identity records behind the auth gate)
-- ============================================================
CREATE TABLE IF NOT EXISTS accounts (
    id            TEXT PRIMARY KEY,
    email         TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f','now') || '000Z')
);

-- ============================================================
-- AUTH THROTTLE
-- ============================================================
CREATE TABLE IF NOT EXISTS auth_throttle (
    key             TEXT PRIMARY KEY,
    failed_attempts INTEGER NOT NULL,
    last_failed_at  REAL NOT NULL
);

-- ============================================================
-- PROFILES
-- ============================================================
CREATE TABLE IF NOT EXISTS profiles (
    id                  TEXT PRIMARY KEY,
    account_id          TEXT NOT NULL UNIQUE REFERENCES accounts(id) ON DELETE CASCADE,
    full_name           TEXT NOT NULL,
    email               TEXT,
    avatar_url          TEXT,
    bio                 TEXT,
    role                TEXT NOT NULL DEFAULT 'SEEKER' CHECK(role IN ('SEEKER','FINDER')),
    department          TEXT,
    year                TEXT,
    skills              TEXT NOT NULL DEFAULT '[]',
    interests           TEXT NOT NULL DEFAULT '[]',
    billing_customer_id TEXT,
    created_at          TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f','now') || '000Z'),
    updated_at          TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f','now') || '000Z')
);

-- ============================================================
-- JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS jobs (
    id                 TEXT PRIMARY KEY,
    title              TEXT NOT NULL,
    type               TEXT CHECK(type IN ('ACADEMIC_PROJECT','STARTUP_COLLABORATION',
                                           'PART_TIME_JOB','COMPETITION_HACKATHON')),
    description        TEXT,
    requirements       TEXT,
    duration           TEXT,
    compensation       TEXT,
    location           TEXT,
    team_size          TEXT,
    tags               TEXT NOT NULL DEFAULT '[]',
    status             TEXT NOT NULL DEFAULT 'PENDING'
                       CHECK(status IN ('PENDING','APPROVED','REJECTED','POSTED')),
    rejection_reason   TEXT,
    is_published       INTEGER NOT NULL DEFAULT 0,
    is_filled          INTEGER NOT NULL DEFAULT 0,
    applications_count INTEGER NOT NULL DEFAULT 0,
    created_by_id      TEXT NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
    approved_by        TEXT,
    approved_at        TEXT,
    created_at         TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f','now') || '000Z'),
    updated_at         TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f','now') || '000Z')
);

CREATE INDEX IF NOT EXISTS idx_jobs_status ON jobs(status);
CREATE INDEX IF NOT EXISTS idx_jobs_created_by ON jobs(created_by_id);
CREATE INDEX IF NOT EXISTS idx_jobs_created_at ON jobs(created_at);

-- ============================================================
-- APPLICATIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS applications (
    id           TEXT PRIMARY KEY,
    job_id       TEXT NOT NULL REFERENCES jobs(id) ON DELETE CASCADE,
    applicant_id TEXT NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
    message      TEXT,
    resume_url   TEXT,
    status       TEXT NOT NULL DEFAULT 'PENDING'
                 CHECK(status IN ('PENDING','ACCEPTED','REJECTED')),
    created_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f','now') || '000Z'),
    updated_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f','now') || '000Z')
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_applications_job_applicant ON applications(job_id, applicant_id);
CREATE INDEX IF NOT EXISTS idx_applications_applicant ON applications(applicant_id);

-- ============================================================
-- NOTIFICATIONS
-- ============================================================
CREATE TABLE IF NOT EXISTS notifications (
    id         TEXT PRIMARY KEY,
    user_id    TEXT NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
    type       TEXT NOT NULL
               CHECK(type IN ('JOB_APPROVED','JOB_REJECTED','APPLICATION_ACCEPTED',
                              'APPLICATION_REJECTED','NEW_MESSAGE')),
    content    TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f','now') || '000Z')
);

CREATE INDEX IF NOT EXISTS idx_notifications_user ON notifications(user_id);

-- ============================================================
-- MESSAGES
-- ============================================================
CREATE TABLE IF NOT EXISTS messages (
    id           TEXT PRIMARY KEY,
    sender_id    TEXT NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
    recipient_id TEXT NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
    content      TEXT NOT NULL,
    created_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f','now') || '000Z')
);

CREATE INDEX IF NOT EXISTS idx_messages_sender ON messages(sender_id);
CREATE INDEX IF NOT EXISTS idx_messages_recipient ON messages(recipient_id);
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    conn.close()
