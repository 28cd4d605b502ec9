# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.

Example tasks file (TASK_PICKER_TASKS_FILE):

    {
      "configured": [
        {"label": "build", "type": "shell"},
        {"label": "serve", "type": "process", "scope": "file:///home/dev/app"}
      ],
      "detected": [
        {"label": "test", "source": "npm", "scope": "file:///home/dev/app"},
        {"label": "lint", "source": "eslint"}
      ]
    }
"""

ENV_VARS = {
    # App / logging
    "TASK_PICKER_APP_NAME": "App display name (default: task-picker).",
    "TASK_PICKER_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "TASK_PICKER_CONSOLE_ENABLED": "Enable the console connector (true/false, default: true).",
    # Paths (gitignored)
    "TASK_PICKER_DATA_DIR": "Local data directory (default: .local/task-picker).",
    "TASK_PICKER_TASKS_FILE": "Task definitions JSON (default: <data_dir>/tasks.json).",
    "TASK_PICKER_RECENT_TASKS_PATH": "Recent task history JSON (default: <data_dir>/recent_tasks.json).",
    # Workspace
    "TASK_PICKER_WORKSPACE": (
        "Workspace directory or workspace file. A file means multi-root and enables "
        "source/scope descriptions in the run picker."
    ),
    # Tuning
    "TASK_PICKER_RECENT_LIMIT": "Max entries kept in the recent task history (default: 20).",
}
