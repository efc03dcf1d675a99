"""Pydantic models for complex-code-spotter configuration files."""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from complex_code_spotter.models.complexity import MetricKind

OutputFormatName = Literal["markdown", "html", "json", "all"]


class MetricThresholdConfig(BaseModel):
    """One metric/threshold entry of a config file."""

    model_config = ConfigDict(extra="forbid")

    metric: str = Field(description="Metric name (cyclomatic, cognitive)")
    threshold: Optional[int] = Field(default=None, description="Threshold; metric default when omitted")

    @field_validator("metric")
    @classmethod
    def validate_metric(cls, v: str) -> str:
        """Reject unknown metric names early."""
        if v.strip().lower() not in MetricKind.names():
            raise ValueError(f"Unknown metric '{v}'. Possible values: {', '.join(MetricKind.names())}")
        return v.strip().lower()


class SpotterConfig(BaseModel):
    """Contents of a YAML configuration file.

    Example:
        complexities:
          - cyclomatic:20
          - metric: cognitive
            threshold: 25
        include: ["src/**"]
        exclude: ["**/generated/**"]
        output_format: html
    """

    model_config = ConfigDict(extra="forbid")

    complexities: List[Union[str, MetricThresholdConfig]] = Field(default_factory=list)
    include: List[str] = Field(default_factory=list)
    exclude: Optional[List[str]] = None
    output_format: Optional[OutputFormatName] = None
    max_workers: Optional[int] = Field(default=None, ge=0)
