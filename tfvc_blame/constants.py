"""Internal defaults and constants for tfvc_blame."""

from __future__ import annotations

DEFAULT_EXECUTABLE = "TfsAnnotate"
DEFAULT_PARSER = "tfvc_annotate"
DEFAULT_STREAM_LIMIT = 10 * 1024 * 1024  # 10MB per stream

ANNOTATE_SUBCOMMAND = "annotate"
OUTPUT_ENCODING = "utf-8"

# Record layout of the annotate tool output: "<changeset>\t<author>\t<epoch millis>"
FIELD_SEPARATOR = "\t"
FIELD_COUNT = 3
REVISION_FIELD = 0
AUTHOR_FIELD = 1
DATE_FIELD = 2

LOGIN_FLAG = "/login:"
COLLECTION_FLAG = "/collection:"
MASKED_SECRET = "****"


CONFIG_ENV_VAR = "TFVC_BLAME_CONFIG_PATH"
EXECUTABLE_ENV_VAR = "TFVC_ANNOTATE_PATH"
USERNAME_ENV_VAR = "TFVC_USERNAME"
PASSWORD_ENV_VAR = "TFVC_PASSWORD"
DOMAIN_ENV_VAR = "TFVC_DOMAIN"
COLLECTION_URI_ENV_VAR = "TFVC_COLLECTION_URI"
TIMEOUT_ENV_VAR = "TFVC_TIMEOUT_SECONDS"

ENV_OVERRIDES: dict[str, str] = {
    EXECUTABLE_ENV_VAR: "executable",
    USERNAME_ENV_VAR: "username",
    PASSWORD_ENV_VAR: "password",
    DOMAIN_ENV_VAR: "domain",
    COLLECTION_URI_ENV_VAR: "collection_uri",
    TIMEOUT_ENV_VAR: "timeout_seconds",
}
