"""Pydantic models for request and response bodies.

These models express the structure of the HTTP API.  Response fields use
camelCase on the wire (``exitCode``, ``executionTime``) to match the
existing playground clients; they are declared as aliases so Python code
keeps snake_case names.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .executor import ExecutionResult


class ExecuteRequest(BaseModel):
    """Request body for executing a code snippet."""

    code: str = Field(..., min_length=1, description="Source code to execute.")
    language: str = Field(..., min_length=1, description="Language identifier, e.g. 'python'.")
    stdin: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("stdin", "input"),
        description="Standard input to pass to the program.",
    )


class ExecuteResponse(BaseModel):
    """Response body for code execution."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    output: str
    error: str
    exit_code: int = Field(alias="exitCode")
    execution_time: str = Field(alias="executionTime", description="Elapsed time as '<int>ms'.")
    language: str
    online: bool = Field(description="True when the hosted API ran the code.")

    @classmethod
    def from_result(cls, result: ExecutionResult) -> "ExecuteResponse":
        return cls.model_validate(result.to_response())


class LanguageInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    display_name: str = Field(alias="displayName")
    toolchain_version: str = Field(alias="toolchainVersion")


class LanguagesResponse(BaseModel):
    languages: List[LanguageInfo]
    count: int


class HealthResponse(BaseModel):
    available: bool
    detail: str


class TemplatesResponse(BaseModel):
    """Starter snippets for one language."""

    language: str
    templates: Dict[str, str]
