"""Record Schemas - XRPC request and response envelopes.

Invariants:
    - CreateRecordRequest.record is Any: the check-in validator owns its rules
    - An empty rkey means "generate one", the same as an absent rkey
    - Field names follow the lexicon (camelCase) via aliases

Design Decisions:
    - populate_by_name: tests and internal callers may use snake_case
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreateRecordRequest(BaseModel):
    """com.atproto.repo.createRecord input."""
    collection: str
    record: Any = None
    rkey: str | None = Field(None, pattern=r"^[A-Za-z0-9._:~-]{1,512}$")

    @field_validator("rkey", mode="before")
    @classmethod
    def empty_rkey_means_generate(cls, value):
        return None if value == "" else value


class CreateRecordResponse(BaseModel):
    """com.atproto.repo.createRecord output."""
    uri: str
    cid: str


class UserSettingsBody(BaseModel):
    """app.dropanchor settings, read and written in lexicon casing."""
    model_config = ConfigDict(populate_by_name=True)

    enable_feed_posts: bool = Field(True, alias="enableFeedPosts")
