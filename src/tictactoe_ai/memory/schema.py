"""
Database schema for the experience store.

Tables:
    experience - One row per (state_key, move) with its bias.
                 banned=1 marks the BANNED sentinel; bias is then ignored.
    metadata   - Key-value store for settings

Indexes:
    idx_exp_state - Fast lookup of every move recorded for a state
"""

SCHEMA_VERSION = "1"

SCHEMA = """
CREATE TABLE IF NOT EXISTS experience (
    state_key TEXT NOT NULL,
    move INTEGER NOT NULL,
    bias REAL NOT NULL DEFAULT 0,
    banned INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (state_key, move)
);

CREATE INDEX IF NOT EXISTS idx_exp_state ON experience(state_key);

CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""

# Key under which the JSON backend marks a ban
JSON_BANNED = "banned"
