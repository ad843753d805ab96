from __future__ import annotations

from enum import Enum
from typing import List
from pydantic import BaseModel, Field


class Format(str, Enum):
    YAML = "yaml"
    JSON = "json"
    CSV = "csv"


class LineEndingStyle(str, Enum):
    LF = "\n"
    CRLF = "\r\n"
    CR = "\r"


class PreprocessResult(BaseModel):
    output: str
    modified: bool = False
    changes: List[str] = Field(default_factory=list)


class PreprocessRequest(BaseModel):
    content: str = Field(examples=['description: "say "hello" world"'])
    format: Format


class FilePreprocessResponse(BaseModel):
    filename: str
    format: Format
    encoding: str = Field(default="utf-8")
    result: PreprocessResult


class HealthResponse(BaseModel):
    ok: bool = True
