"""Construct, write and run IBM Storage Scale file system policies.

Example:
    >>> from mmpolicy import *
    >>> policy = Policy.new("size")
    >>> _ = policy.add(ExternalList(Name("size"), Exec("")))
    >>> _ = policy.add(
    ...     List(Name("size"), DirectoriesPlus(True), (Show.KB_ALLOCATED,)),
    ...     name="size",
    ... )
    >>> print(policy.render(), end="")
    RULE
      EXTERNAL LIST 'size'
      EXEC ''
    <BLANKLINE>
    RULE 'size'
      LIST 'size'
      DIRECTORIES_PLUS
      SHOW(VARCHAR(KB_ALLOCATED))

Running a policy writes it to a file and calls ``mmapplypolicy``::

    options = RunOptions(action="defer", choice_algorithm="fast",
                         information_level="0")
    reports = policy.run("/data/test", "/work/.policy/size.policy",
                         "/work/.policy/report", options)
"""

from mmpolicy.executor import RunOptions, run_policy
from mmpolicy.policy import (
    DirectoriesPlus,
    Exec,
    ExternalList,
    GroupId,
    List,
    Name,
    Policy,
    Rule,
    RuleType,
    Show,
    UserId,
    Where,
    load_policy,
    render_policy,
    write_policy,
)

__version__ = "0.1.0"

__all__ = [
    "DirectoriesPlus",
    "Exec",
    "ExternalList",
    "GroupId",
    "List",
    "Name",
    "Policy",
    "Rule",
    "RuleType",
    "RunOptions",
    "Show",
    "UserId",
    "Where",
    "load_policy",
    "render_policy",
    "run_policy",
    "write_policy",
]
