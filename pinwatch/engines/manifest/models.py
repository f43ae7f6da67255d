"""Data models for SOURCES manifests."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SourceEntry(BaseModel):
    """One pinned dependency: a GitHub repo at a tag, or a raw URL."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    repo: str | None = Field(default=None, alias="Repo")
    tag: str | None = Field(default=None, alias="Tag")
    url: str | None = Field(default=None, alias="URL")

    @field_validator("repo", "tag", "url", mode="before")
    @classmethod
    def _blank_to_none(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @model_validator(mode="after")
    def _check_pin(self) -> SourceEntry:
        if self.url and self.repo:
            raise ValueError("cannot define a url and a repo; pick one")
        if self.repo and not self.tag:
            raise ValueError("when defining a repo you must also define a tag to pull")
        if not self.repo and not self.url:
            raise ValueError("an entry must define either a repo or a url")
        return self


class SourcesConfig(BaseModel):
    """All entries declared by one manifest, in file order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sources: tuple[SourceEntry, ...] = Field(default=(), alias="Sources")

    @field_validator("sources", mode="before")
    @classmethod
    def _null_sources(cls, v: object) -> object:
        return () if v is None else v
