"""Reusable click options forwarded to ``mmapplypolicy``.

All options are long-only and prefixed with ``--mm-`` so they can be added
to any command without clashing with its own options::

    @click.command()
    @mm_options
    def scan(**params):
        options = run_options_from_params(params)

``mm_parallel_options`` adds only the options for parallel execution
(``-N``, ``-s`` and ``-g``).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TypeVar

import click

from mmpolicy.executor.options import RunOptions

F = TypeVar("F", bound=Callable[..., Any])

_nodes_option = click.option(
    "--mm-N",
    "mm_nodes",
    metavar="all|mount|Node,...|NodeFile|NodeClass",
    default=None,
    help="List of nodes, used with `mmapplypolicy -N`.",
)

_local_work_dir_option = click.option(
    "--mm-s",
    "mm_local_work_dir",
    metavar="DIR",
    type=click.Path(path_type=Path),
    default=None,
    help="Local work directory, used with `mmapplypolicy -s`.",
)

_global_work_dir_option = click.option(
    "--mm-g",
    "mm_global_work_dir",
    metavar="DIR",
    type=click.Path(path_type=Path),
    default=None,
    help="Global work directory, used with `mmapplypolicy -g`.",
)

_action_option = click.option(
    "--mm-I",
    "mm_action",
    metavar="yes|defer|test|prepare",
    default=None,
    help="Action performed on files, used with `mmapplypolicy -I`.",
)

_information_level_option = click.option(
    "--mm-L",
    "mm_information_level",
    metavar="0|1|...|6",
    default=None,
    help="Information level, used with `mmapplypolicy -L`.",
)

_choice_algorithm_option = click.option(
    "--mm-choice-algorithm",
    "mm_choice_algorithm",
    metavar="best|exact|fast",
    default=None,
    help="Algorithm to select candidate files, used with "
    "`mmapplypolicy --choice-algorithm`.",
)

_PARALLEL_OPTIONS = (
    _nodes_option,
    _local_work_dir_option,
    _global_work_dir_option,
)

_ALL_OPTIONS = (
    *_PARALLEL_OPTIONS,
    _action_option,
    _information_level_option,
    _choice_algorithm_option,
)


def _apply(options: tuple[Callable[[F], F], ...], func: F) -> F:
    # click shows options in decoration order, so apply bottom-up
    for option in reversed(options):
        func = option(func)
    return func


def mm_options(func: F) -> F:
    """Add all ``--mm-*`` options to a click command."""
    return _apply(_ALL_OPTIONS, func)


def mm_parallel_options(func: F) -> F:
    """Add the parallel execution options ``--mm-N``, ``--mm-s``, ``--mm-g``."""
    return _apply(_PARALLEL_OPTIONS, func)


def run_options_from_params(params: Mapping[str, Any]) -> RunOptions:
    """Build RunOptions from parsed ``--mm-*`` parameters.

    Missing or None parameters leave the matching option unset.
    """
    return RunOptions(
        action=params.get("mm_action"),
        information_level=params.get("mm_information_level"),
        choice_algorithm=params.get("mm_choice_algorithm"),
        nodes=params.get("mm_nodes"),
        local_work_dir=params.get("mm_local_work_dir"),
        global_work_dir=params.get("mm_global_work_dir"),
    )
