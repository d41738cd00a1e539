"""Domain models for secret loading."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SecretRecord:
    """One secret definition read from a CSV row."""
    name: str
    value: str
    description: str = ""
    line: int = 0  # 1-based line in the source file, 0 if unknown


@dataclass(frozen=True)
class PublishResult:
    """Identifier the secret service assigned to a created secret."""
    name: str
    identifier: str  # ARN for aws, resource name for gcp


@dataclass(frozen=True)
class RunConfig:
    """Settings for a single run, resolved once at startup."""
    input_path: Optional[str]
    task_definition: bool = False
    provider: str = "aws"
    region: Optional[str] = None
    profile: Optional[str] = None
    project_id: Optional[str] = None
