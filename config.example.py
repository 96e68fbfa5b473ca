# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_SYNC_APP_NAME": "App display name, also the console title (default: todo-sync).",
    "TODO_SYNC_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Sync
    "TODO_SYNC_SERVER_URL": "Base URL of the task collection; /tasks is appended (default: http://[::]:8000).",
    "TODO_SYNC_SYNC_ENABLED": "Pull at startup and push periodically (true/false, default: true).",
    "TODO_SYNC_PULL_ON_START": "Issue the startup GET (true/false, default: true).",
    "TODO_SYNC_PUSH_INTERVAL_SECONDS": "Seconds between pushes (default: 5, minimum 0.5).",
    "TODO_SYNC_REQUEST_TIMEOUT_SECONDS": "HTTP timeout per request (default: 10).",
    # Storage (gitignored)
    "TODO_SYNC_PERSIST_ENABLED": "Save entries to disk after every change (true/false, default: true).",
    "TODO_SYNC_DATA_DIR": "Local data directory for storage and logs (default: .local/todo_sync).",
    "TODO_SYNC_STORAGE_PATH": "Storage JSON file (default: <data_dir>/storage.json).",
    "TODO_SYNC_STORAGE_KEY": "Key the entries blob is stored under (default: todo_sync.entries).",
    # Front-end
    "TODO_SYNC_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
}
