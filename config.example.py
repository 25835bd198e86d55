# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use a local, gitignored .env for machine-specific overrides.

This file exists to make the repo self-documenting without opening config.py.
"""

ENV_VARS = {
    # App / logging
    "TICKLIST_APP_NAME": "App display name (default: ticklist).",
    "TICKLIST_LOG_LEVEL": "Logging level (default: INFO).",
    # Paths (gitignored)
    "TICKLIST_DATA_DIR": "Local data directory (default: .local/ticklist).",
    "TICKLIST_STORE_DB_PATH": "Key-value store SQLite path (default: <data_dir>/store.sqlite3).",
    "TICKLIST_EXPORT_DIR": "Where /export writes tasks.json (default: <data_dir>/exports).",
    # Timing (seconds)
    "TICKLIST_SAVE_DEBOUNCE_SECONDS": "Quiet window before the task list is written (default: 0.25).",
    "TICKLIST_REMOVAL_DELAY_SECONDS": "Delay between marking and removing deleted tasks (default: 0.22).",
    "TICKLIST_TOAST_SECONDS": "How long a notification (and its undo) stays live (default: 2.5).",
    "TICKLIST_SEARCH_DEBOUNCE_SECONDS": "Delay before a typed search query applies (default: 0.12).",
}
