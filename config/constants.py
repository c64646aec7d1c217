INTERPRETER_VERSION = "1.1.0"

# WebDriver endpoint defaults
WEBDRIVER_HOST = "localhost"
WEBDRIVER_PORT = 4444
WEBDRIVER_PATH = "/wd/hub"
DEFAULT_BROWSER = "firefox"

# Timeouts
COMMAND_TIMEOUT = 120      # seconds, per WebDriver HTTP call
WAIT_TIMEOUT = 60          # seconds, budget for waitFor steps
POLL_INTERVAL = 0.5        # seconds between waitFor polls

# Script file suffixes picked up by globbing
SCRIPT_SUFFIXES = ('.json', '.yaml', '.yml')

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_LOAD_ERROR = 65       # EX_DATAERR
EXIT_PLUGIN_ERROR = 78     # EX_CONFIG
