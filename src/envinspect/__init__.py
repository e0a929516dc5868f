"""envinspect: scan repositories for environment variable usage and hard-coded secrets."""

from .env_file import create_env_example, generate_env_example, parse_env_file
from .redaction import redact_secret
from .report import build_report, scan_repository
from .scanner import scan_content

__all__ = [
    "build_report",
    "create_env_example",
    "generate_env_example",
    "parse_env_file",
    "redact_secret",
    "scan_content",
    "scan_repository",
]
