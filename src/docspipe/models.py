from pydantic import BaseModel
from typing import List, Literal, Optional

from model import BuildContext, StepResult


class PipelineSummary(BaseModel):
    steps_count: int
    step_names: List[str]
    actions: List[str]
    gated: bool = False
    # Короткое текстовое описание для CLI
    description: str


class RunResponse(BaseModel):
    status: Literal["ok", "error", "cancelled"]
    context: BuildContext
    results: List[StepResult] = []
    warnings: List[str] = []
    logs: List[str] = []
    pipeline_summary: Optional[PipelineSummary] = None
