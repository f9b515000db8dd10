# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/workerdeck/config.py for parsing rules; unparsable values fall back to the defaults below.
"""

ENV_VARS = {
    # App / logging
    "WORKERDECK_APP_NAME": "App display name (default: workerdeck).",
    "WORKERDECK_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "WORKERDECK_DATA_DIR": "Where workerdeck.log is written (default: .local/workerdeck).",
    # Scheduler
    "WORKERDECK_AUTOSTART": "Start every worker at launch (true/false, default: true).",
    "WORKERDECK_STOP_GRACE_SECONDS": "How long a stop waits for a worker to wind down (default: 5).",
    # Console
    "WORKERDECK_STATUS_POLL_INTERVAL": "Refresh period of /watch in seconds (default: 0.1).",
    "WORKERDECK_LOG_HISTORY_SIZE": "Activity lines kept for /log (default: 500).",
    "WORKERDECK_ECHO_LOG": "Print worker activity live in the console (true/false, default: true).",
}
