"""Tests for RunOptions."""

from pathlib import Path

from mmpolicy.executor import RunOptions


class TestRunOptions:
    """Tests for RunOptions.to_args()."""

    def test_unset_options_add_nothing(self):
        """Default options produce no arguments."""
        assert RunOptions().to_args() == []

    def test_each_option_maps_to_one_flag(self):
        """Every set field becomes exactly one flag/value pair."""
        options = RunOptions(
            action="defer",
            information_level="0",
            choice_algorithm="fast",
            nodes="filer1,filer2,filer3",
            local_work_dir=Path("/work/.policy/local"),
            global_work_dir=Path("/work/.policy/global"),
        )

        assert options.to_args() == [
            "-I",
            "defer",
            "-L",
            "0",
            "--choice-algorithm",
            "fast",
            "-N",
            "filer1,filer2,filer3",
            "-s",
            "/work/.policy/local",
            "-g",
            "/work/.policy/global",
        ]

    def test_values_pass_through_uninterpreted(self):
        """Values are not validated or rewritten."""
        options = RunOptions(action="not-an-engine-action")

        assert options.to_args() == ["-I", "not-an-engine-action"]

    def test_empty_string_is_still_set(self):
        """Only None means unset."""
        assert RunOptions(choice_algorithm="").to_args() == ["--choice-algorithm", ""]

    def test_is_quiet(self):
        """Information level 0 is quiet, anything else is not."""
        assert RunOptions(information_level="0").is_quiet
        assert not RunOptions(information_level="1").is_quiet
        assert not RunOptions().is_quiet
