"""Parse .env files, generate .env.example, and inventory .env* files.

Parsing is structural: every line becomes an entry that keeps its original
text, so comments and blank lines survive into the generated example.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Optional

from .file_walker import display_path, iter_candidate_files, read_text_file
from .git_utils import is_git_repository
from .git_utils import is_tracked as git_is_tracked
from .models import EnvFileEntry, EnvFileRecord, ExampleResult
from .placeholders import placeholder_for

logger = logging.getLogger(__name__)

EXAMPLE_FILE_NAME = ".env.example"

_VARIABLE_LINE = re.compile(r"^\s*([A-Z_][A-Z0-9_]*)\s*=\s*(.*)$", re.IGNORECASE)


def parse_env_file(content: str) -> list[EnvFileEntry]:
    """Split .env text into comment, empty and variable entries.

    Lines that are neither blank, comments, nor ``KEY=value`` are kept as
    comments so that nothing is ever dropped.
    """
    entries: list[EnvFileEntry] = []

    for line_number, line in enumerate(content.split("\n"), start=1):
        trimmed = line.strip()

        if not trimmed:
            entries.append(EnvFileEntry(type="empty", raw=line, line_number=line_number))
            continue
        if trimmed.startswith("#"):
            entries.append(EnvFileEntry(type="comment", raw=line, line_number=line_number))
            continue

        match = _VARIABLE_LINE.match(line)
        if match:
            key, value = match.groups()
            entries.append(
                EnvFileEntry(
                    type="variable",
                    raw=line,
                    line_number=line_number,
                    key=key,
                    value=value.strip(),
                )
            )
        else:
            # Malformed line, treat as comment
            entries.append(EnvFileEntry(type="comment", raw=line, line_number=line_number))

    return entries


def render_entries(entries: list[EnvFileEntry]) -> str:
    """Re-join parsed entries into the original text."""
    return "\n".join(entry.raw for entry in entries)


def generate_env_example(entries: list[EnvFileEntry]) -> str:
    """Replace every value with a placeholder, keeping all other lines verbatim."""
    lines = []
    for entry in entries:
        if entry.type == "variable":
            lines.append(f"{entry.key}={placeholder_for(entry.key)}")
        else:
            lines.append(entry.raw)
    return "\n".join(lines)


def create_env_example(
    env_path: str | Path,
    output: str | Path | None = None,
    force: bool = False,
) -> ExampleResult:
    """Write a .env.example next to ``env_path`` (or to ``output``).

    An existing destination is left untouched unless ``force`` is set; that
    case is reported as ``success=False, existed=True`` rather than raised.

    Raises:
        FileNotFoundError: if ``env_path`` does not exist.
        ValueError: if the destination is the source file, the destination
            directory does not exist, or the source is not valid UTF-8.
    """
    env_path = Path(env_path)
    output = Path(output) if output else env_path.parent / EXAMPLE_FILE_NAME

    if not env_path.is_file():
        raise FileNotFoundError(f".env file not found: {env_path}")
    if output.resolve() == env_path.resolve():
        raise ValueError(f"Output path is the source .env file: {output}")
    if not output.parent.is_dir():
        raise ValueError(f"Output directory does not exist: {output.parent}")

    if output.exists() and not force:
        return ExampleResult(
            success=False,
            existed=True,
            message=f"{output.name} already exists. Use force to overwrite.",
            env_path=str(env_path),
            example_path=str(output),
        )

    try:
        entries = parse_env_file(env_path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ValueError(f"Failed to create {output.name}: {env_path} is not valid UTF-8 ({e})") from e
    content = generate_env_example(entries)
    output.write_text(content, encoding="utf-8")

    keys_found = sum(1 for e in entries if e.type == "variable")
    logger.info(f"Wrote {output} ({keys_found} keys)")

    return ExampleResult(
        success=True,
        message=f"Created {output}",
        env_path=str(env_path),
        example_path=str(output),
        keys_found=keys_found,
        content=content,
    )


def find_env_files(root: str | Path, exclude: list[str] | None = None) -> list[Path]:
    """Find files whose name starts with ``.env`` anywhere under ``root``."""
    return [p for p in iter_candidate_files(root, exclude) if p.name.startswith(".env")]


def _never_tracked(root: Path, relative_path: str) -> bool:
    return False


def analyze_env_files(
    root: str | Path,
    exclude: list[str] | None = None,
    is_tracked: Optional[Callable[[Path, str], bool]] = None,
) -> list[EnvFileRecord]:
    """Report commit status and keys for every .env* file under ``root``.

    ``is_tracked(root, relative_path)`` defaults to asking git. Any error from
    it is treated as "not tracked".
    """
    root = Path(root)
    env_files = find_env_files(root, exclude)

    if is_tracked is None:
        if env_files and not is_git_repository(root):
            logger.info(f"{root} is not a git repository, .env files are reported as not committed")
            is_tracked = _never_tracked
        else:
            is_tracked = git_is_tracked

    records: list[EnvFileRecord] = []

    for env_file in env_files:
        relative = display_path(env_file, root)

        try:
            committed = bool(is_tracked(root, relative))
        except Exception as e:
            logger.warning(f"Could not determine git status of {relative}: {e}")
            committed = False

        content = read_text_file(env_file)
        keys = []
        if content is not None:
            keys = [e.key for e in parse_env_file(content) if e.type == "variable"]

        records.append(
            EnvFileRecord(
                path=relative,
                is_committed=committed,
                keys_found=len(keys),
                keys=keys,
                severity="high" if committed else "low",
                issue="Committed to git - should be in .gitignore" if committed else "Not committed (OK)",
            )
        )

    return records


def generate_gitignore_entry() -> str:
    """Suggested .gitignore block for local environment files."""
    return """
# Environment variables
.env
.env.local
.env.*.local
.env.development.local
.env.test.local
.env.production.local
"""
