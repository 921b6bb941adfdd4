"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel


class CreateStory(BaseModel):
    source: str
    slug: str | None = None


class ImportStory(BaseModel):
    url: str
    slug: str | None = None


class ShowBody(BaseModel):
    passage: str | None = None


class ChooseBody(BaseModel):
    current: str
    choice: int


class RunScriptBody(BaseModel):
    script: str


class PrefValue(BaseModel):
    value: int | float | str
