from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CompileTemplateResponse(BaseModel):
    stack_name: str
    template: dict[str, Any] = Field(..., description="Compiled CloudFormation template")


class EmptyBucketResponse(BaseModel):
    bucket_name: str
    deleted_count: int
