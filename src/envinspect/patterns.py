"""Secret detection and environment-access rules.

Every secret rule runs against every line; rule order only decides the order
findings are reported in. Confidence encodes how distinctive the shape is:

- high: vendor prefixes and formats that are almost always real credentials
- medium: generic key=value shapes keyed on words like ``password`` or ``token``
- low: structural matches only (long base64 runs), for human review
"""

import re
from dataclasses import dataclass

from .models import Confidence


@dataclass(frozen=True)
class SecretRule:
    label: str
    regex: re.Pattern
    confidence: Confidence
    remediation: str


@dataclass(frozen=True)
class EnvAccessRule:
    """A syntactic form of reading an environment variable.

    The pattern must define exactly one capture group, named ``name``.
    """

    regex: re.Pattern

    def __post_init__(self):
        if self.regex.groups != 1 or "name" not in self.regex.groupindex:
            raise ValueError(
                f"Env access rule {self.regex.pattern!r} must have exactly one capture group named 'name'"
            )

    def names(self, line: str):
        """Yield (column, name) for every non-empty capture in ``line``."""
        for match in self.regex.finditer(line):
            name = match.group("name")
            if name:
                yield match.start(), name


def _rule(label: str, pattern: str, confidence: Confidence, remediation: str) -> SecretRule:
    return SecretRule(
        label=label,
        regex=re.compile(pattern, re.IGNORECASE),
        confidence=confidence,
        remediation=remediation,
    )


SECRET_RULES: tuple[SecretRule, ...] = (
    _rule(
        "AWS Access Key ID",
        r"AKIA[0-9A-Z]{16}",
        Confidence.high,
        "Rotate AWS credentials immediately via AWS IAM console. Use AWS Secrets Manager or environment variables.",
    ),
    _rule(
        "AWS Secret Access Key",
        r"aws_secret_access_key\s*=\s*['\"]?[A-Za-z0-9/+=]{40}['\"]?",
        Confidence.high,
        "Rotate AWS credentials immediately via AWS IAM console.",
    ),
    _rule(
        "Google API Key",
        r"AIza[0-9A-Za-z_\-]{35}",
        Confidence.high,
        "Regenerate API key in Google Cloud Console and restrict by IP/domain.",
    ),
    _rule(
        "Slack Token",
        r"xox[pboa]-[0-9]{12}-[0-9]{12}-[0-9]{12}-[a-z0-9]{32}",
        Confidence.high,
        "Revoke token in Slack App settings and regenerate.",
    ),
    _rule(
        "Stripe API Key",
        r"sk_live_[0-9a-zA-Z]{24,}",
        Confidence.high,
        "Roll the API key in Stripe Dashboard immediately.",
    ),
    _rule(
        "Stripe Restricted API Key",
        r"rk_live_[0-9a-zA-Z]{24,}",
        Confidence.high,
        "Roll the API key in Stripe Dashboard immediately.",
    ),
    _rule(
        "GitHub Token",
        r"gh[pousr]_[A-Za-z0-9_]{36,}",
        Confidence.high,
        "Revoke token at github.com/settings/tokens and regenerate.",
    ),
    _rule(
        "Generic API Key",
        r"(?:api[_-]?key|apikey|api[_-]?secret)\s*[:=]\s*['\"]?[A-Za-z0-9_\-]{20,}['\"]?",
        Confidence.medium,
        "Verify if this is a real API key. If so, rotate it with your provider.",
    ),
    _rule(
        "Generic Secret",
        r"(?:secret|password|passwd|pwd)\s*[:=]\s*['\"]?[A-Za-z0-9!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]{8,}['\"]?",
        Confidence.medium,
        "Verify if this is a real secret. If so, rotate it immediately.",
    ),
    _rule(
        "Private Key (RSA)",
        r"-----BEGIN (?:RSA )?PRIVATE KEY-----",
        Confidence.high,
        "Regenerate the private key and update everywhere it is used. Never commit private keys.",
    ),
    _rule(
        "JWT Token",
        r"eyJ[A-Za-z0-9_\-]{10,}\.[A-Za-z0-9_\-]{10,}\.[A-Za-z0-9_\-]{10,}",
        Confidence.medium,
        "If this is a real token, invalidate it and investigate how it was exposed.",
    ),
    _rule(
        "Base64 High Entropy String",
        r"(?<![A-Za-z0-9+/])[A-Za-z0-9+/]{40,}={0,2}(?![A-Za-z0-9+/])",
        Confidence.low,
        "Review this string - it may be encoded credentials or a token.",
    ),
    _rule(
        "Heroku API Key",
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
        Confidence.medium,
        "Regenerate Heroku API key if this is legitimate.",
    ),
    _rule(
        "Generic Bearer Token",
        r"bearer\s+[A-Za-z0-9_\-.]{20,}",
        Confidence.medium,
        "Verify and rotate this bearer token with your auth provider.",
    ),
    _rule(
        "Database Connection String",
        r"(?:mongodb|mysql|postgresql|postgres)://[^\s'\"]+",
        Confidence.high,
        "Move connection string to environment variables. Rotate credentials if exposed.",
    ),
)


_VAR = r"(?P<name>[A-Z_][A-Z0-9_]*)"

ENV_ACCESS_RULES: tuple[EnvAccessRule, ...] = tuple(
    EnvAccessRule(re.compile(pattern))
    for pattern in (
        # process.env.VAR
        rf"process\.env\.{_VAR}",
        # process.env['VAR'] / process.env["VAR"]
        rf"process\.env\[['\"]{_VAR}['\"]\]",
        # process.env?.VAR
        rf"process\.env\?\.{_VAR}",
        # import.meta.env.VAR
        rf"import\.meta\.env\.{_VAR}",
        # import.meta.env['VAR']
        rf"import\.meta\.env\[['\"]{_VAR}['\"]\]",
        # process.env.VAR ?? 'default'
        rf"process\.env\.{_VAR}\s*\?\?",
        # os.environ['VAR']
        rf"os\.environ\[['\"]{_VAR}['\"]\]",
        # os.environ.get('VAR') / os.getenv('VAR')
        rf"os\.(?:environ\.get|getenv)\(\s*['\"]{_VAR}['\"]",
    )
)
