"""Tests for loading policies from YAML and dictionaries."""

from pathlib import Path

import pytest

from mmpolicy.policy import (
    DirectoriesPlus,
    Exec,
    ExternalList,
    GroupId,
    List,
    Name,
    PolicyValidationError,
    Show,
    UserId,
    load_policy,
    load_policy_from_dict,
    render_policy,
)


class TestLoadPolicyFromDict:
    """Tests for load_policy_from_dict()."""

    def test_minimal_policy(self):
        """A name alone gives an empty policy."""
        policy = load_policy_from_dict({"name": "empty"})

        assert policy.name == Name("empty")
        assert policy.rules == []

    def test_external_list_rule(self):
        """external_list maps to ExternalList with exec defaulting to empty."""
        policy = load_policy_from_dict(
            {"name": "size", "rules": [{"external_list": {"name": "size"}}]}
        )

        rule = policy.rules[0]
        assert rule.name is None
        assert rule.rule_type == ExternalList(Name("size"), Exec(""))

    def test_list_rule_with_all_clauses(self):
        """list maps every clause to its dataclass."""
        policy = load_policy_from_dict(
            {
                "name": "size",
                "rules": [
                    {
                        "name": "owned",
                        "list": {
                            "name": "size",
                            "directories_plus": True,
                            "show": ["mode", "KB_ALLOCATED"],
                            "where": {"group_id": 100},
                        },
                    }
                ],
            }
        )

        rule = policy.rules[0]
        assert rule.name == Name("owned")
        assert rule.rule_type == List(
            Name("size"),
            DirectoriesPlus(True),
            (Show.MODE, Show.KB_ALLOCATED),
            GroupId(100),
        )

    def test_rule_order_is_preserved(self):
        """Rules keep document order."""
        policy = load_policy_from_dict(
            {
                "name": "ordered",
                "rules": [
                    {"list": {"name": "b"}},
                    {"list": {"name": "a"}},
                    {"external_list": {"name": "c"}},
                ],
            }
        )

        names = [rule.rule_type.name.value for rule in policy.rules]
        assert names == ["b", "a", "c"]

    def test_rule_requires_one_kind(self):
        """A rule with no kind is rejected."""
        with pytest.raises(PolicyValidationError, match="exactly one"):
            load_policy_from_dict({"name": "bad", "rules": [{"name": "x"}]})

    def test_rule_rejects_two_kinds(self):
        """A rule with both kinds is rejected."""
        with pytest.raises(PolicyValidationError, match="exactly one"):
            load_policy_from_dict(
                {
                    "name": "bad",
                    "rules": [
                        {"external_list": {"name": "a"}, "list": {"name": "b"}}
                    ],
                }
            )

    def test_unknown_show_column(self):
        """Show columns must be known attributes."""
        with pytest.raises(PolicyValidationError) as exc_info:
            load_policy_from_dict(
                {"name": "bad", "rules": [{"list": {"name": "a", "show": ["nope"]}}]}
            )

        assert exc_info.value.field is not None
        assert "show" in exc_info.value.field

    def test_unknown_key(self):
        """Unknown keys are rejected."""
        with pytest.raises(PolicyValidationError):
            load_policy_from_dict({"name": "bad", "extra": 1})

    def test_where_requires_single_filter(self):
        """where must name exactly one of user_id and group_id."""
        with pytest.raises(PolicyValidationError):
            load_policy_from_dict(
                {
                    "name": "bad",
                    "rules": [
                        {"list": {"name": "a", "where": {"user_id": 1, "group_id": 2}}}
                    ],
                }
            )

    def test_negative_id_rejected(self):
        """Ids must be non-negative."""
        with pytest.raises(PolicyValidationError):
            load_policy_from_dict(
                {"name": "bad", "rules": [{"list": {"name": "a", "where": {"user_id": -1}}}]}
            )

    def test_empty_list_name_rejected(self):
        """List names must not be empty."""
        with pytest.raises(PolicyValidationError):
            load_policy_from_dict({"name": "bad", "rules": [{"list": {"name": ""}}]})


class TestLoadPolicy:
    """Tests for load_policy()."""

    def test_example_policy(self, examples_dir: Path):
        """The shipped example loads and renders."""
        policy = load_policy(examples_dir / "size.yaml")

        assert policy.name == Name("size")
        assert policy.rules[1].rule_type.where == UserId(1000)
        assert render_policy(policy).startswith("RULE\n  EXTERNAL LIST 'size'\n")

    def test_missing_file(self, tmp_path: Path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_policy(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path: Path):
        """An empty file is rejected."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        with pytest.raises(PolicyValidationError, match="empty"):
            load_policy(path)

    def test_not_a_mapping(self, tmp_path: Path):
        """The document must be a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(PolicyValidationError, match="mapping"):
            load_policy(path)

    def test_invalid_yaml(self, tmp_path: Path):
        """YAML syntax errors are reported as validation errors."""
        path = tmp_path / "broken.yaml"
        path.write_text("name: [unclosed\n")

        with pytest.raises(PolicyValidationError, match="Invalid YAML"):
            load_policy(path)
