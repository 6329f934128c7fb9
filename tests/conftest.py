"""Root conftest — shared test configuration."""

import os

# Human-readable logs in test output; no service disabled by the environment
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("DISABLED_SERVICES", "[]")
