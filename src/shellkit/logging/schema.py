"""Preferred key order for structured log events."""

DEFAULT_EVENT_KEY_ORDER: list[str] = ["ts", "level"]

EVENT_KEY_ORDER: dict[str, list[str]] = {
    # Application lifecycle events
    "app_start": ["ts", "level", "mode", "config_file", "log_file", "plugin_dir", "format", "role"],
    "app_stop": ["ts", "level", "reason", "uptime_ms", "error_type", "error"],
    "session_start": ["ts", "level", "prompt", "command_count", "alias_count", "variable_count"],
    "session_stop": ["ts", "level", "reason", "history_count"],
    # Command execution events
    "command_exec": ["ts", "level", "command", "args_summary", "success", "elapsed_ms"],
    "command_error": ["ts", "level", "command", "args_summary", "error_type", "error"],
    "command_not_found": ["ts", "level", "command"],
    # Configuration and scripts
    "config_loaded": ["ts", "level", "config_file", "alias_count", "variable_count", "warning_count"],
    "config_warning": ["ts", "level", "config_file", "warning"],
    "script_run": ["ts", "level", "script_file", "line_count", "error_count"],
    "script_line_error": ["ts", "level", "script_file", "line_number", "error_type", "error"],
    # Plugins
    "plugin_loaded": ["ts", "level", "plugin", "version", "command_count"],
    "plugin_error": ["ts", "level", "plugin", "plugin_file", "plugin_dir", "error_type", "error"],
}

LOG_PATH_FIELDS = {
    "config_file",
    "log_file",
    "plugin_dir",
    "plugin_file",
    "script_file",
}
