"""Wiki result types and MediaWiki response envelopes."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class SearchResult:
    title: str
    url: str
    snippet: str | None = None


class ApiError(BaseModel):
    model_config = ConfigDict(extra="allow")

    code: str = ""
    info: str = ""


# --- action=query&list=search ---


class SearchHit(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str
    snippet: str | None = None


class SearchQuery(BaseModel):
    search: list[SearchHit] = []


class SearchEnvelope(BaseModel):
    query: SearchQuery | None = None
    error: ApiError | None = None


# --- action=query&list=categorymembers ---


class CategoryMember(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str


class CategoryQuery(BaseModel):
    categorymembers: list[CategoryMember] = []


class CategoryEnvelope(BaseModel):
    query: CategoryQuery | None = None
    error: ApiError | None = None


# --- action=parse ---


class ParsedText(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    html: str = Field(default="", alias="*")


class ParsedPage(BaseModel):
    """The ``parse`` member. Unlisted properties are kept as-is."""

    model_config = ConfigDict(extra="allow")

    title: str
    pageid: int | None = None
    revid: int | None = None
    displaytitle: str | None = None
    text: ParsedText = ParsedText()


class ParseEnvelope(BaseModel):
    parse: ParsedPage | None = None
    error: ApiError | None = None
