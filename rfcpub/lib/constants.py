"""Shared constants."""

import re

SETTINGS_FILE = "rfcpub.env"
CONVERTER_FILE = "converter.yaml"

DEFAULT_DRAFTS_DIR = "drafts"
DEFAULT_PUBLISHED_DIR = "published"
DEFAULT_PUBLISHED_EXT = ".txt"
DRAFT_EXT = ".md"

DEFAULT_COMMIT_MESSAGE = "Automated changes from GitHub Actions"
DEFAULT_REMOTE = "origin"
DEFAULT_CONVERT_TIMEOUT = 600

# Published extensions: a dot followed by a short alphanumeric suffix
EXT_PATTERN = re.compile(r'^\.[A-Za-z0-9]{1,10}$')

# Exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2
# Same code coreutils `timeout` uses
EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127
