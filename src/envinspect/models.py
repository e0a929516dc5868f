"""Pydantic models for envinspect."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, computed_field


class Confidence(str, Enum):
    """How likely a match is a genuine secret (precision, not impact)."""

    high = "high"
    medium = "medium"
    low = "low"


class RiskLevel(str, Enum):
    """Overall verdict for a scan, ordered none < low < medium < high < critical."""

    none = "none"
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"

    @property
    def rank(self) -> int:
        return _RISK_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


_RISK_ORDER = [RiskLevel.none, RiskLevel.low, RiskLevel.medium, RiskLevel.high, RiskLevel.critical]


class SecretFinding(BaseModel):
    """A single detected secret occurrence."""

    model_config = {"frozen": True}

    type: str = Field(description="Label of the rule that matched (e.g., 'AWS Access Key ID')")
    file: str = Field(description="File path relative to the scan root")
    line: int = Field(description="1-based line number (0 for git history)")
    snippet: str = Field(description="Redacted form of the matched text")
    confidence: Confidence = Field(description="Confidence tier of the rule")
    remediation: str = Field(description="Recommended action")
    context: str = Field(default="", description="Stripped source line, truncated to 80 chars")


class EnvKeyLocation(BaseModel):
    """Where an environment variable is read."""

    model_config = {"frozen": True}

    file: str
    line: int
    snippet: str = Field(description="Stripped source line, truncated to 100 chars")


class EnvKeyUsage(BaseModel):
    """All occurrences of one environment variable across a scan."""

    name: str = Field(description="Variable name")
    locations: list[EnvKeyLocation] = Field(default_factory=list)

    @computed_field
    @property
    def usage_count(self) -> int:
        return len(self.locations)


class EnvFileEntry(BaseModel):
    """One parsed line of a .env file."""

    model_config = {"frozen": True}

    type: Literal["comment", "empty", "variable"]
    raw: str = Field(description="Original line text, reproduced verbatim for non-variables")
    line_number: int
    key: Optional[str] = None
    value: Optional[str] = None


class EnvFileRecord(BaseModel):
    """Commit status and key inventory of a discovered .env* file."""

    path: str = Field(description="Path relative to the scan root")
    is_committed: bool = Field(default=False, description="Whether git tracks this file")
    keys_found: int = 0
    keys: list[str] = Field(default_factory=list)
    severity: Literal["high", "low"] = "low"
    issue: str = ""


class SeverityCounts(BaseModel):
    """Secret findings counted by confidence tier."""

    high: int = 0
    medium: int = 0
    low: int = 0


class ScanSummary(BaseModel):
    """Summary counts for a scan report."""

    files_scanned: int = Field(default=0, description="Files read and scanned")
    files_skipped: int = Field(default=0, description="Files skipped (oversized, binary, unreadable)")
    env_keys_found: int = Field(default=0, description="Distinct environment variable names")
    secrets_found: int = Field(default=0, description="Total secret findings")
    env_files_found: int = Field(default=0, description="Number of .env* files discovered")
    committed_env_files: int = Field(default=0, description="Number of .env* files tracked by git")
    severity: SeverityCounts = Field(default_factory=SeverityCounts)
    overall_risk: RiskLevel = RiskLevel.none


class ScanReport(BaseModel):
    """Full scan report handed to renderers."""

    summary: ScanSummary = Field(default_factory=ScanSummary)
    env_keys: list[EnvKeyUsage] = Field(default_factory=list)
    secrets: list[SecretFinding] = Field(default_factory=list)
    env_files: list[EnvFileRecord] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class ExampleResult(BaseModel):
    """Outcome of writing a .env.example file."""

    success: bool
    existed: bool = False
    message: str = ""
    env_path: str = ""
    example_path: str = ""
    keys_found: int = 0
    content: str = ""
