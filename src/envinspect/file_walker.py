"""Discover candidate files under a scan root and scan them in parallel."""

import logging
import os
import re
import stat
from concurrent.futures import ThreadPoolExecutor
from fnmatch import fnmatch
from pathlib import Path
from typing import Generator, NamedTuple, Optional

from .config import MAX_FILE_SIZE
from .models import EnvKeyUsage, SecretFinding
from .scanner import ContentScanResult, merge_env_usages, scan_content

logger = logging.getLogger(__name__)

# Dependency, build, VCS and output directories
SKIP_DIRS = {
    "node_modules", ".git", "dist", "build", "coverage", ".next", ".nuxt",
    "out", "vendor", ".husky", "__pycache__", ".pytest_cache", ".mypy_cache",
    ".venv", "venv", ".tox", ".eggs", "target", "bower_components",
}

BINARY_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico", ".webp",
    ".woff", ".woff2", ".ttf", ".eot",
    ".pdf", ".zip", ".tar", ".gz", ".rar", ".7z",
    ".mp4", ".mp3", ".avi", ".mov", ".wav",
    ".exe", ".dll", ".so", ".dylib", ".pyc", ".pyo", ".class", ".o",
}

# Minified or bundled JavaScript
BUNDLE_SUFFIXES = (".min.js", ".bundle.js")

_BRACE_GROUP = re.compile(r"\{([^{}]*)\}")


class DirectoryScanResult(NamedTuple):
    secrets: list[SecretFinding]
    env_usages: list[EnvKeyUsage]
    files_scanned: int
    files_skipped: int


def _expand_braces(pattern: str) -> list[str]:
    """Expand a single ``{a,b}`` group: ``*.{png,jpg}`` -> ``*.png``, ``*.jpg``."""
    match = _BRACE_GROUP.search(pattern)
    if not match:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end():]
    return [f"{head}{option}{tail}" for option in match.group(1).split(",")]


def _match_segments(pattern: list[str], parts: list[str]) -> bool:
    """Match path segments against glob segments; ``**`` spans zero or more segments."""
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_match_segments(rest, parts[i:]) for i in range(len(parts) + 1))
    return bool(parts) and fnmatch(parts[0], head) and _match_segments(rest, parts[1:])


def matches_exclude(rel_path: str, patterns: list[str], is_dir: bool = False) -> bool:
    """Check whether a root-relative POSIX path matches any exclusion glob.

    Globs are matched one path segment at a time, so ``*`` never crosses a
    ``/`` and ``**`` spans zero or more directories. A path is also excluded
    when one of its parent directories matches. Supported shapes:
      - ``**/name/**`` or ``name/**``  (a directory anywhere / at the root)
      - ``**/*.ext`` or ``*.ext``      (a file name anywhere)
      - ``src/**/*.js``                 (a path from the root)
      - ``name`` or ``name/``           (any path component / any directory)
    """
    parts = rel_path.split("/")
    dir_parts = parts if is_dir else parts[:-1]

    for raw in patterns:
        for pat in _expand_braces(raw.replace("\\", "/")):
            dir_only = pat.endswith("/") and pat != "/"
            anchored = pat.startswith("/")
            pat = pat.strip("/")
            if not pat:
                continue

            segments = pat.split("/")
            if len(segments) == 1 and not anchored:
                segments = ["**"] + segments

            if not is_dir and not dir_only:
                # A trailing "**" needs at least one segment below the directory
                file_segments = segments[:-1] + ["*", "**"] if segments[-1] == "**" else segments
                if _match_segments(file_segments, parts):
                    return True

            if any(_match_segments(segments, dir_parts[:i]) for i in range(1, len(dir_parts) + 1)):
                return True

    return False


def is_baseline_excluded(name: str) -> bool:
    """Check a file name against the fixed binary and bundle exclusions."""
    lower = name.lower()
    if lower.endswith(BUNDLE_SUFFIXES):
        return True
    return Path(lower).suffix in BINARY_EXTENSIONS


def iter_candidate_files(
    root: str | Path,
    exclude: list[str] | None = None,
) -> Generator[Path, None, None]:
    """Walk ``root`` in sorted order, yielding files that survive exclusion.

    Dotfiles are included so that ``.env`` and friends are scanned.
    """
    root = Path(root)
    exclude = exclude or []

    for dirpath, dirs, files in os.walk(root):
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix()
        rel_dir = "" if rel_dir == "." else rel_dir + "/"

        dirs[:] = sorted(
            d for d in dirs
            if d not in SKIP_DIRS
            and not (exclude and matches_exclude(f"{rel_dir}{d}", exclude, is_dir=True))
        )

        for name in sorted(files):
            if is_baseline_excluded(name):
                continue
            if exclude and matches_exclude(f"{rel_dir}{name}", exclude):
                continue
            yield current / name


def read_text_file(path: str | Path, max_size: int = MAX_FILE_SIZE) -> Optional[str]:
    """Read a file as UTF-8 text, or return None if it should be skipped.

    Skips anything that is not a regular file (pipes, sockets, devices), files
    over ``max_size`` bytes, files containing NUL bytes, files that do not
    decode, and files that cannot be stat'ed or read.
    """
    path = Path(path)
    try:
        st = path.stat()
        if not stat.S_ISREG(st.st_mode):
            logger.debug(f"Skipping {path}: not a regular file")
            return None
        if st.st_size > max_size:
            logger.debug(f"Skipping {path}: larger than {max_size} bytes")
            return None
        data = path.read_bytes()
    except OSError as e:
        logger.debug(f"Skipping {path}: {e}")
        return None

    if b"\x00" in data:
        logger.debug(f"Skipping {path}: binary content")
        return None

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug(f"Skipping {path}: not valid UTF-8")
        return None


def display_path(file_path: Path, base_path: Path) -> str:
    try:
        return file_path.relative_to(base_path).as_posix()
    except ValueError:
        return str(file_path)


def scan_file(
    file_path: str | Path,
    base_path: str | Path | None = None,
    max_size: int = MAX_FILE_SIZE,
) -> Optional[ContentScanResult]:
    """Scan a single file. Returns None if the file was skipped."""
    file_path = Path(file_path)
    content = read_text_file(file_path, max_size=max_size)
    if content is None:
        return None

    shown = display_path(file_path, Path(base_path)) if base_path else str(file_path)
    return scan_content(content, shown)


def scan_directory(
    root: str | Path,
    exclude: list[str] | None = None,
    max_files: int | None = None,
    max_workers: int = 4,
    max_size: int = MAX_FILE_SIZE,
) -> DirectoryScanResult:
    """Scan every candidate file under ``root`` for secrets and env reads.

    Files are scanned on a thread pool and merged in discovery order, so the
    output does not depend on scheduling. A file that cannot be read is
    skipped and never aborts the scan.

    Raises:
        ValueError: if ``root`` does not exist or is not a directory.
    """
    root = Path(root)
    if not root.exists():
        raise ValueError(f"Path does not exist: {root}")
    if not root.is_dir():
        raise ValueError(f"Path is not a directory: {root}")

    candidates = list(iter_candidate_files(root, exclude))
    if max_files is not None:
        candidates = candidates[:max_files]

    logger.info(f"Scanning {len(candidates)} files under {root}")

    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        results = list(ex.map(lambda p: scan_file(p, root, max_size), candidates))

    scanned = [r for r in results if r is not None]
    secrets: list[SecretFinding] = []
    for result in scanned:
        secrets.extend(result.secrets)

    return DirectoryScanResult(
        secrets=secrets,
        env_usages=merge_env_usages(r.env_usages for r in scanned),
        files_scanned=len(scanned),
        files_skipped=len(results) - len(scanned),
    )
