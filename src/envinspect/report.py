"""Run a full repository scan and assemble the report."""

import logging
from pathlib import Path
from typing import Callable, Optional

from .config import ScanConfig, load_config
from .env_file import analyze_env_files
from .file_walker import scan_directory
from .models import (
    EnvFileRecord,
    EnvKeyUsage,
    ScanReport,
    ScanSummary,
    SecretFinding,
)
from .recommendations import generate_recommendations
from .scorer import calculate_overall_risk, count_by_confidence

logger = logging.getLogger(__name__)


def build_report(
    secrets: list[SecretFinding],
    env_usages: list[EnvKeyUsage],
    env_files: list[EnvFileRecord],
    files_scanned: int = 0,
    files_skipped: int = 0,
    history_findings: Optional[list[SecretFinding]] = None,
) -> ScanReport:
    """Combine raw scan results into a report with summary and recommendations.

    ``history_findings`` come from an external git-history pass and are
    appended after the live findings.
    """
    all_secrets = list(secrets) + list(history_findings or [])
    counts = count_by_confidence(all_secrets)
    committed = sum(1 for f in env_files if f.is_committed)

    summary = ScanSummary(
        files_scanned=files_scanned,
        files_skipped=files_skipped,
        env_keys_found=len(env_usages),
        secrets_found=len(all_secrets),
        env_files_found=len(env_files),
        committed_env_files=committed,
        severity=counts,
        overall_risk=calculate_overall_risk(counts, committed),
    )

    return ScanReport(
        summary=summary,
        env_keys=env_usages,
        secrets=all_secrets,
        env_files=env_files,
        recommendations=generate_recommendations(all_secrets, env_files, env_usages),
    )


def scan_repository(
    root: str | Path,
    exclude: Optional[list[str]] = None,
    max_files: Optional[int] = None,
    config: Optional[ScanConfig] = None,
    is_tracked: Optional[Callable[[Path, str], bool]] = None,
    history_findings: Optional[list[SecretFinding]] = None,
) -> ScanReport:
    """Scan a repository for env var usage, secrets and .env files.

    Explicit ``exclude`` and ``max_files`` are applied on top of ``config``
    (loaded from the repository when not given).

    Raises:
        ValueError: if ``root`` does not exist or is not a directory.
    """
    root = Path(root).resolve()
    if not root.exists():
        raise ValueError(f"Path does not exist: {root}")
    if not root.is_dir():
        raise ValueError(f"Path is not a directory: {root}")

    config = config or load_config(root)
    exclude_patterns = list(dict.fromkeys(config.exclude + (exclude or [])))
    if max_files is None:
        max_files = config.max_files

    logger.info(f"Scanning repository: {root}")

    result = scan_directory(
        root,
        exclude=exclude_patterns,
        max_files=max_files,
        max_workers=config.max_workers,
        max_size=config.max_file_size,
    )
    env_files = analyze_env_files(root, exclude=exclude_patterns, is_tracked=is_tracked)

    logger.info(
        f"Scanned {result.files_scanned} files ({result.files_skipped} skipped): "
        f"{len(result.secrets)} secrets, {len(result.env_usages)} env keys, {len(env_files)} .env files"
    )

    return build_report(
        secrets=result.secrets,
        env_usages=result.env_usages,
        env_files=env_files,
        files_scanned=result.files_scanned,
        files_skipped=result.files_skipped,
        history_findings=history_findings,
    )
