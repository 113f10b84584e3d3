from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class KnowledgeEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    answer: str
    keywords: Tuple[str, ...] = ()


class MatchResult(BaseModel):
    reply: str
    # "empty" | "unclear" | matched question text
    intent: str
    confidence: float = Field(ge=0.0, le=1.0)


class QueryRequest(BaseModel):
    text: str = ""


class SuggestionResponse(BaseModel):
    suggestions: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    ok: bool
    service: str
    ready: bool
    entries: int
    vocabulary: int
