"""Risk aggregation: confidence counts and committed .env files -> one risk level."""

from .models import Confidence, RiskLevel, SecretFinding, SeverityCounts

# Thresholds are strict: more than this many findings escalate the level
MEDIUM_FINDINGS_FOR_HIGH = 3
LOW_FINDINGS_FOR_MEDIUM = 5


def count_by_confidence(secrets: list[SecretFinding]) -> SeverityCounts:
    """Count secret findings per confidence tier."""
    counts = SeverityCounts()
    for secret in secrets:
        if secret.confidence == Confidence.high:
            counts.high += 1
        elif secret.confidence == Confidence.medium:
            counts.medium += 1
        elif secret.confidence == Confidence.low:
            counts.low += 1
    return counts


def calculate_overall_risk(counts: SeverityCounts, committed_env_files: int = 0) -> RiskLevel:
    """Compute the overall risk level, first matching rule wins.

    A single high-confidence secret or committed .env file is always critical,
    whatever the volume of medium and low findings.
    """
    if counts.high > 0 or committed_env_files > 0:
        return RiskLevel.critical
    if counts.medium > MEDIUM_FINDINGS_FOR_HIGH:
        return RiskLevel.high
    if counts.medium > 0 or counts.low > LOW_FINDINGS_FOR_MEDIUM:
        return RiskLevel.medium
    if counts.low > 0:
        return RiskLevel.low
    return RiskLevel.none
