# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "PLANNER_APP_NAME": "App display name (default: academic-planner).",
    "PLANNER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "PLANNER_DATA_DIR": "Local data directory (default: .local/planner).",
    "PLANNER_STORE_PATH": "JSON store with subjects and tasks (default: <data_dir>/planner.json).",
    "PLANNER_LOG_DIR": "Directory for planner.log (default: <data_dir>).",
    # Presentation
    "PLANNER_DATE_FORMAT": "strftime format for task due dates (default: %d %B %Y).",
}
