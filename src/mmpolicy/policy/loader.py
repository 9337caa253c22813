"""Policy loading from YAML files and dictionaries.

Structured policy input is validated with the Pydantic models in
``mmpolicy.policy.pydantic_models`` and converted to the dataclasses in
``mmpolicy.policy.types``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import ValidationError

from mmpolicy.policy.exceptions import PolicyValidationError
from mmpolicy.policy.pydantic_models import (
    ExternalListModel,
    ListModel,
    PolicyModel,
    RuleModel,
    WhereModel,
)
from mmpolicy.policy.types import (
    DirectoriesPlus,
    Exec,
    ExternalList,
    GroupId,
    List,
    Name,
    Policy,
    Rule,
    RuleType,
    UserId,
    Where,
)

logger = logging.getLogger(__name__)


def _convert_where(model: WhereModel) -> Where:
    if model.user_id is not None:
        return UserId(uid=model.user_id)
    # WhereModel guarantees one of the two is set
    return GroupId(gid=cast(int, model.group_id))


def _convert_external_list(model: ExternalListModel) -> ExternalList:
    return ExternalList(name=Name(model.name), exec=Exec(model.exec_))


def _convert_list(model: ListModel) -> List:
    return List(
        name=Name(model.name),
        directories_plus=DirectoriesPlus(model.directories_plus),
        show=tuple(model.show),
        where=_convert_where(model.where) if model.where is not None else None,
    )


def _convert_rule(model: RuleModel) -> Rule:
    rule_type: RuleType
    if model.external_list is not None:
        rule_type = _convert_external_list(model.external_list)
    else:
        rule_type = _convert_list(cast(ListModel, model.list_))

    return Rule(
        rule_type=rule_type,
        name=Name(model.name) if model.name is not None else None,
    )


def _convert_to_policy(model: PolicyModel) -> Policy:
    return Policy(
        name=Name(model.name),
        rules=[_convert_rule(rule) for rule in model.rules],
    )


def _format_validation_error(error: Exception) -> str:
    """Format a Pydantic validation error into a user-friendly message."""
    if isinstance(error, ValidationError):
        errors = error.errors()
        if errors:
            first_error = errors[0]
            loc = ".".join(str(x) for x in first_error.get("loc", []))
            msg = first_error.get("msg", str(error))
            if loc:
                return f"Policy validation failed: {loc}: {msg}"
            return f"Policy validation failed: {msg}"

    return f"Policy validation failed: {error}"


def _error_field(error: ValidationError) -> str | None:
    errors = error.errors()
    if not errors:
        return None
    loc = errors[0].get("loc", ())
    return ".".join(str(x) for x in loc) or None


def load_policy_from_dict(data: dict[str, Any]) -> Policy:
    """Load and validate a policy from a dictionary.

    Args:
        data: Dictionary containing the policy document.

    Returns:
        The policy.

    Raises:
        PolicyValidationError: If the policy data is invalid.
    """
    try:
        model = PolicyModel.model_validate(data)
    except ValidationError as e:
        raise PolicyValidationError(
            _format_validation_error(e), field=_error_field(e)
        ) from e

    policy = _convert_to_policy(model)
    logger.debug(
        "Loaded policy %s",
        policy.name.value,
        extra={"policy": policy.name.value, "rule_count": len(policy.rules)},
    )
    return policy


def load_policy(policy_path: Path) -> Policy:
    """Load and validate a policy from a YAML file.

    Args:
        policy_path: Path to the YAML policy file.

    Returns:
        The policy.

    Raises:
        PolicyValidationError: If the policy file is invalid.
        FileNotFoundError: If the policy file does not exist.
    """
    if not policy_path.exists():
        raise FileNotFoundError(f"Policy file not found: {policy_path}")

    try:
        with open(policy_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PolicyValidationError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise PolicyValidationError("Policy file is empty")

    if not isinstance(data, dict):
        raise PolicyValidationError("Policy file must be a YAML mapping")

    return load_policy_from_dict(data)
