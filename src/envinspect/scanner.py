"""Apply the pattern registry to the text of a single file."""

from typing import Iterable, NamedTuple

from .models import EnvKeyLocation, EnvKeyUsage, SecretFinding
from .patterns import ENV_ACCESS_RULES, SECRET_RULES, EnvAccessRule, SecretRule
from .redaction import redact_secret

CONTEXT_MAX_CHARS = 80
USAGE_SNIPPET_MAX_CHARS = 100


class ContentScanResult(NamedTuple):
    secrets: list[SecretFinding]
    env_usages: list[EnvKeyUsage]


def _split_lines(content: str) -> list[str]:
    # Only "\n" separates lines; a trailing "\r" stays on the line and is
    # removed later by strip() when building context and snippets.
    return content.split("\n")


def detect_secrets_in_content(
    content: str,
    file: str,
    rules: Iterable[SecretRule] = SECRET_RULES,
) -> list[SecretFinding]:
    """Find every match of every secret rule, ordered by rule, line, then column."""
    lines = _split_lines(content)
    findings: list[SecretFinding] = []

    for rule in rules:
        for line_num, line in enumerate(lines, start=1):
            for match in rule.regex.finditer(line):
                findings.append(
                    SecretFinding(
                        type=rule.label,
                        file=file,
                        line=line_num,
                        snippet=redact_secret(match.group(0)),
                        confidence=rule.confidence,
                        remediation=rule.remediation,
                        context=line.strip()[:CONTEXT_MAX_CHARS],
                    )
                )

    return findings


def find_env_usages(
    content: str,
    file: str,
    rules: Iterable[EnvAccessRule] = ENV_ACCESS_RULES,
) -> list[EnvKeyUsage]:
    """Collect environment variable reads in one file, grouped by name.

    Overlapping rules that hit the same column on the same line (e.g. the
    ``?? default`` variant of plain access) are recorded once.
    """
    rules = tuple(rules)
    by_name: dict[str, list[EnvKeyLocation]] = {}
    seen: set[tuple[int, int, str]] = set()

    for line_num, line in enumerate(_split_lines(content), start=1):
        hits = sorted(
            (column, name) for rule in rules for column, name in rule.names(line)
        )
        for column, name in hits:
            if (line_num, column, name) in seen:
                continue
            seen.add((line_num, column, name))
            by_name.setdefault(name, []).append(
                EnvKeyLocation(
                    file=file,
                    line=line_num,
                    snippet=line.strip()[:USAGE_SNIPPET_MAX_CHARS],
                )
            )

    return [EnvKeyUsage(name=name, locations=locations) for name, locations in by_name.items()]


def merge_env_usages(partials: Iterable[list[EnvKeyUsage]]) -> list[EnvKeyUsage]:
    """Fold per-file usages into one entry per variable name.

    Names keep first-seen order; locations keep the order of the partials.
    """
    merged: dict[str, list[EnvKeyLocation]] = {}
    for usages in partials:
        for usage in usages:
            merged.setdefault(usage.name, []).extend(usage.locations)
    return [EnvKeyUsage(name=name, locations=locations) for name, locations in merged.items()]


def scan_content(content: str, file: str) -> ContentScanResult:
    """Scan one file's text for secrets and environment variable reads.

    Pure function of its inputs; safe to call concurrently on different files.
    """
    return ContentScanResult(
        secrets=detect_secrets_in_content(content, file),
        env_usages=find_env_usages(content, file),
    )
