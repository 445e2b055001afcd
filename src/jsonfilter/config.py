"""Local configuration for jsonfilter."""

from __future__ import annotations

import os


DEFAULT_MAX_CONTENT_BYTES = 50 * 1024 * 1024
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_USER_AGENT = "jsonfilter/0.1"
DEFAULT_QUICKTYPE_BIN = "quicktype"
DEFAULT_SCHEMA_LANGUAGE = "typescript"

# Hard ceiling for any single ingested document, local or remote.
JSONFILTER_MAX_CONTENT_BYTES = int(os.getenv("JSONFILTER_MAX_CONTENT_BYTES", str(DEFAULT_MAX_CONTENT_BYTES)))
JSONFILTER_FETCH_TIMEOUT_S = float(os.getenv("JSONFILTER_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
JSONFILTER_USER_AGENT = os.getenv("JSONFILTER_USER_AGENT", DEFAULT_USER_AGENT)
JSONFILTER_ACCEPT = "application/json, text/plain, */*"
JSONFILTER_PREVIEW_BYTES = 200
JSONFILTER_QUICKTYPE_BIN = os.getenv("JSONFILTER_QUICKTYPE_BIN", DEFAULT_QUICKTYPE_BIN)
JSONFILTER_SCHEMA_LANGUAGE = os.getenv("JSONFILTER_SCHEMA_LANGUAGE", DEFAULT_SCHEMA_LANGUAGE)
JSONFILTER_SCHEMA_TYPE_NAME = "GeneratedType"
