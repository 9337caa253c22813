"""Policy module for mmpolicy.

This module provides the policy model and its text form:
- types: Policy, Rule and clause dataclasses
- writer: Rendering policies into mmapplypolicy's policy language
- loader: Policy loading from YAML files and dictionaries
- pydantic_models: Pydantic models for YAML parsing/validation
- exceptions: Policy error hierarchy
"""

from mmpolicy.policy.exceptions import (
    InvalidClauseError,
    PolicyError,
    PolicyValidationError,
)
from mmpolicy.policy.loader import load_policy, load_policy_from_dict
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
    Show,
    UserId,
    Where,
)
from mmpolicy.policy.writer import render_policy, validate_policy, write_policy

__all__ = [
    # Types
    "DirectoriesPlus",
    "Exec",
    "ExternalList",
    "GroupId",
    "List",
    "Name",
    "Policy",
    "Rule",
    "RuleType",
    "Show",
    "UserId",
    "Where",
    # Writer
    "render_policy",
    "validate_policy",
    "write_policy",
    # Loader
    "load_policy",
    "load_policy_from_dict",
    # Exceptions
    "InvalidClauseError",
    "PolicyError",
    "PolicyValidationError",
]
