"""Policy text writer.

Renders a Policy into the line-oriented language read by ``mmapplypolicy``::

    RULE
      EXTERNAL LIST 'size'
      EXEC ''

    RULE 'size'
      LIST 'size'
      DIRECTORIES_PLUS
      SHOW(VARCHAR(KB_ALLOCATED))

Every rule block starts with ``RULE``, clauses are indented by two spaces
and consecutive blocks are separated by exactly one blank line.
"""

from __future__ import annotations

import io
from typing import IO

from mmpolicy.policy.exceptions import InvalidClauseError
from mmpolicy.policy.types import (
    ExternalList,
    GroupId,
    List,
    Policy,
    Rule,
    RuleType,
    Show,
    UserId,
    Where,
)

INDENT = "  "

# Characters that cannot appear inside a single-quoted literal
_FORBIDDEN_IN_LITERAL = ("'", "\n", "\r")

# Separator placed between SHOW columns (SQL string concatenation)
SHOW_SEPARATOR = " || ' ' || "


def _check_literal(value: str, field: str, *, required: bool) -> None:
    if required and not value:
        raise InvalidClauseError("value must not be empty", field)
    for char in _FORBIDDEN_IN_LITERAL:
        if char in value:
            raise InvalidClauseError(
                f"value {value!r} contains {char!r}, which cannot be quoted", field
            )


def validate_policy(policy: Policy) -> None:
    """Check that every quoted value of ``policy`` can be written.

    Raises:
        InvalidClauseError: On the first offending value, in rule order.
    """
    for index, rule in enumerate(policy.rules):
        prefix = f"rules[{index}]"
        if rule.name is not None:
            _check_literal(rule.name.value, f"{prefix}.name", required=True)

        rule_type = rule.rule_type
        if isinstance(rule_type, ExternalList):
            _check_literal(
                rule_type.name.value, f"{prefix}.external_list.name", required=True
            )
            _check_literal(
                rule_type.exec.value, f"{prefix}.external_list.exec", required=False
            )
        elif isinstance(rule_type, List):
            _check_literal(rule_type.name.value, f"{prefix}.list.name", required=True)
        else:
            raise InvalidClauseError(
                f"unknown rule type {type(rule_type).__name__}", prefix
            )


def _format_show(show: tuple[Show, ...]) -> str:
    columns = SHOW_SEPARATOR.join(f"VARCHAR({column.value})" for column in show)
    return f"SHOW({columns})"


def _format_where(where: Where) -> str:
    if isinstance(where, UserId):
        return f"WHERE USER_ID = {where.uid}"
    if isinstance(where, GroupId):
        return f"WHERE GROUP_ID = {where.gid}"
    raise TypeError(f"unknown filter {type(where).__name__}")


def _clause_lines(rule_type: RuleType) -> list[str]:
    if isinstance(rule_type, ExternalList):
        return [
            f"EXTERNAL LIST '{rule_type.name.value}'",
            f"EXEC '{rule_type.exec.value}'",
        ]

    lines = [f"LIST '{rule_type.name.value}'"]
    if rule_type.directories_plus.value:
        lines.append("DIRECTORIES_PLUS")
    if rule_type.show:
        lines.append(_format_show(tuple(rule_type.show)))
    if rule_type.where is not None:
        lines.append(_format_where(rule_type.where))
    return lines


def _write_rule(rule: Rule, output: IO[str]) -> None:
    if rule.name is not None:
        output.write(f"RULE '{rule.name.value}'\n")
    else:
        output.write("RULE\n")

    for line in _clause_lines(rule.rule_type):
        output.write(f"{INDENT}{line}\n")


def write_policy(policy: Policy, output: IO[str]) -> None:
    """Write ``policy`` to ``output``.

    The whole policy is validated before the first write, so a rejected
    policy leaves ``output`` untouched. Errors raised by ``output`` itself
    propagate unchanged.

    Args:
        policy: Policy to write.
        output: Text sink, e.g. an open file or ``io.StringIO``.

    Raises:
        InvalidClauseError: If a quoted value cannot be written.
        OSError: If writing to ``output`` fails.
    """
    validate_policy(policy)

    for index, rule in enumerate(policy.rules):
        if index:
            output.write("\n")
        _write_rule(rule, output)


def render_policy(policy: Policy) -> str:
    """Return the policy text for ``policy``."""
    buffer = io.StringIO()
    write_policy(policy, buffer)
    return buffer.getvalue()
