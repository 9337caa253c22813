"""Policy, rule and clause types.

This module contains the in-memory model of an IBM Storage Scale policy:
- Clause leaves: Name, Exec, DirectoriesPlus, Show, Where filters
- Rule kinds: ExternalList, List (closed union RuleType)
- Rule and Policy containers

The types perform no validation on construction. Checks that the policy
engine would otherwise trip over are done by the writer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import IO, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from mmpolicy.executor.options import RunOptions


@dataclass(frozen=True)
class Name:
    """Name of a rule or of a list."""

    value: str


@dataclass(frozen=True)
class Exec:
    """Executable invoked by the engine for an external list.

    An empty value tells the engine to run no program.
    """

    value: str = ""


@dataclass(frozen=True)
class DirectoriesPlus:
    """Whether to match all objects, not just regular files."""

    value: bool = False


class Show(Enum):
    """File attributes that can be shown in list output."""

    MODE = "MODE"
    NLINK = "NLINK"
    FILE_SIZE = "FILE_SIZE"
    KB_ALLOCATED = "KB_ALLOCATED"
    USER_ID = "USER_ID"
    GROUP_ID = "GROUP_ID"
    ACCESS_TIME = "ACCESS_TIME"
    MODIFICATION_TIME = "MODIFICATION_TIME"


@dataclass(frozen=True)
class UserId:
    """Filter: `WHERE USER_ID = <uid>`."""

    uid: int


@dataclass(frozen=True)
class GroupId:
    """Filter: `WHERE GROUP_ID = <gid>`."""

    gid: int


Where = Union[UserId, GroupId]


@dataclass(frozen=True)
class ExternalList:
    """`EXTERNAL LIST` rule kind."""

    name: Name
    exec: Exec = field(default_factory=Exec)


@dataclass(frozen=True)
class List:
    """`LIST` rule kind.

    Show columns are kept in the order given; the engine prints them in
    that order.
    """

    name: Name
    directories_plus: DirectoriesPlus = field(default_factory=DirectoriesPlus)
    show: tuple[Show, ...] = ()
    where: Where | None = None


RuleType = Union[ExternalList, List]


@dataclass
class Rule:
    """Single policy rule: an optional rule name and its kind."""

    rule_type: RuleType
    name: Name | None = None


@dataclass
class Policy:
    """Named, ordered collection of rules.

    Rule order matters: the engine evaluates rules top to bottom and the
    first matching rule decides a file's fate.
    """

    name: Name
    rules: list[Rule] = field(default_factory=list)

    @classmethod
    def new(cls, name: str) -> Policy:
        """Return an empty policy called ``name``."""
        return cls(name=Name(name))

    def add(self, rule_type: RuleType, name: str | None = None) -> Rule:
        """Append a rule and return it."""
        rule = Rule(rule_type=rule_type, name=Name(name) if name is not None else None)
        self.rules.append(rule)
        return rule

    def write(self, output: IO[str]) -> None:
        """Write the policy text to ``output``."""
        from mmpolicy.policy.writer import write_policy

        write_policy(self, output)

    def render(self) -> str:
        """Return the policy text."""
        from mmpolicy.policy.writer import render_policy

        return render_policy(self)

    def run(
        self,
        target: str | Path,
        policy_path: str | Path,
        report_prefix: str | Path | None = None,
        options: RunOptions | None = None,
    ) -> list[Path]:
        """Write the policy to ``policy_path`` and run it against ``target``.

        See :func:`mmpolicy.executor.mmapplypolicy.run_policy`.
        """
        from mmpolicy.executor.mmapplypolicy import run_policy

        return run_policy(self, target, policy_path, report_prefix, options)
