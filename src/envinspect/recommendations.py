"""Generate actionable recommendations from scan results."""

from .models import Confidence, EnvFileRecord, EnvKeyUsage, SecretFinding

# More distinct variables than this and we suggest documenting them
UNDOCUMENTED_KEYS_THRESHOLD = 10


def _format(priority: str, action: str, details: str) -> str:
    return f"[{priority}] {action}: {details}"


def generate_recommendations(
    secrets: list[SecretFinding],
    env_files: list[EnvFileRecord],
    env_keys: list[EnvKeyUsage],
) -> list[str]:
    """Build ordered recommendations, most urgent first.

    The pre-commit hook suggestion is always included, last.
    """
    recs: list[str] = []

    high_count = sum(1 for s in secrets if s.confidence == Confidence.high)
    if high_count:
        recs.append(_format(
            "CRITICAL",
            f"Rotate {high_count} high-confidence secret(s) immediately",
            "High-confidence secrets detected in code. See remediation for each finding.",
        ))

    if any(f.is_committed for f in env_files):
        recs.append(_format(
            "CRITICAL",
            "Remove .env files from git tracking",
            "Add .env to .gitignore and use git filter-repo to remove it from history.",
        ))

    paths = {f.path for f in env_files}
    if ".env" in paths and ".env.example" not in paths:
        recs.append(_format(
            "HIGH",
            "Generate .env.example file",
            "Create a .env.example with placeholder values for team documentation.",
        ))

    if len(env_keys) > UNDOCUMENTED_KEYS_THRESHOLD:
        recs.append(_format(
            "MEDIUM",
            "Document environment variables",
            f"Found {len(env_keys)} environment variables. Document them in README.md or .env.example.",
        ))

    medium_count = sum(1 for s in secrets if s.confidence == Confidence.medium)
    if medium_count:
        recs.append(_format(
            "MEDIUM",
            f"Review {medium_count} medium-confidence finding(s)",
            "These may be false positives but should be verified.",
        ))

    recs.append(_format(
        "INFO",
        "Set up pre-commit hooks",
        "Run envinspect in a git pre-commit hook to prevent accidental commits.",
    ))

    return recs
