"""Pydantic models for policy parsing.

This module contains the models used to validate YAML/dict policy input
before it is converted to the dataclasses in ``mmpolicy.policy.types``:
- WhereModel: LIST filter (user_id or group_id)
- ExternalListModel: EXTERNAL LIST rule kind
- ListModel: LIST rule kind
- RuleModel: One rule, exactly one kind
- PolicyModel: Top-level policy document
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mmpolicy.policy.types import Show


class WhereModel(BaseModel):
    """Pydantic model for a LIST filter."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    user_id: int | None = Field(default=None, ge=0)
    group_id: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_single_filter(self) -> "WhereModel":
        """Exactly one of user_id and group_id must be set."""
        if (self.user_id is None) == (self.group_id is None):
            raise ValueError("where requires exactly one of 'user_id' or 'group_id'")
        return self


class ExternalListModel(BaseModel):
    """Pydantic model for an EXTERNAL LIST rule."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    exec_: str = Field(default="", alias="exec")


class ListModel(BaseModel):
    """Pydantic model for a LIST rule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    directories_plus: bool = False
    show: list[Show] = Field(default_factory=list)
    where: WhereModel | None = None

    @field_validator("show", mode="before")
    @classmethod
    def normalize_show(cls, v: object) -> object:
        """Accept show columns in any case, e.g. ``kb_allocated``."""
        if isinstance(v, str):
            v = [v]
        if isinstance(v, list):
            return [item.upper() if isinstance(item, str) else item for item in v]
        return v


class RuleModel(BaseModel):
    """Pydantic model for a single rule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str | None = Field(default=None, min_length=1)
    external_list: ExternalListModel | None = None
    list_: ListModel | None = Field(default=None, alias="list")

    @model_validator(mode="after")
    def validate_single_kind(self) -> "RuleModel":
        """A rule must declare exactly one rule kind."""
        kinds = [k for k in (self.external_list, self.list_) if k is not None]
        if len(kinds) != 1:
            raise ValueError("rule requires exactly one of 'external_list' or 'list'")
        return self


class PolicyModel(BaseModel):
    """Pydantic model for a policy document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    rules: list[RuleModel] = Field(default_factory=list)
