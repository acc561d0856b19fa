import json
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NormalMethod(str, Enum):
    """Normal sampler enum for stable JSON serialization."""

    ziggurat = "ziggurat"
    box_muller = "box_muller"
    polar = "polar"


class GeneratorConfig(BaseModel):
    """Normal variate generator settings"""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    method: NormalMethod = NormalMethod.ziggurat
    seed: Optional[int] = None


class StatsConfig(BaseModel):
    """Main configuration combining all sub-configs"""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)

    ci_confidence: float = 0.95

    @field_validator("ci_confidence")
    @classmethod
    def _check_confidence(cls, v: float) -> float:
        if not (0.0 < v < 1.0):
            raise ValueError("ci_confidence must be in (0, 1)")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """
        Export config to a JSON-serializable dict.
        """
        return self.model_dump(mode="json")

    def to_json(
        self,
        indent: int = 2,
        ensure_ascii: bool = False,
    ) -> str:
        return json.dumps(
            self.to_dict(),
            indent=indent,
            ensure_ascii=ensure_ascii,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatsConfig":
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, s: str) -> "StatsConfig":
        return cls.from_dict(json.loads(s))


def get_default_config() -> StatsConfig:
    """Get default configuration"""
    return StatsConfig()
