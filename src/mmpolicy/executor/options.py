"""Options forwarded to ``mmapplypolicy``."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class RunOptions:
    """Options for running ``mmapplypolicy``.

    Every field defaults to unset. Unset fields add nothing to the command
    line, so the engine's own defaults apply; no value is chosen here.
    Values are passed through without interpretation.
    """

    action: str | None = None
    """Action performed on files, ``-I`` (yes, defer, test, prepare)."""

    information_level: str | None = None
    """Level of information displayed, ``-L`` (0 to 6)."""

    choice_algorithm: str | None = None
    """Algorithm to select candidate files, ``--choice-algorithm``."""

    nodes: str | None = None
    """Nodes for parallel execution, ``-N``."""

    local_work_dir: Path | None = None
    """Local work directory for parallel execution, ``-s``."""

    global_work_dir: Path | None = None
    """Global work directory for parallel execution, ``-g``."""

    @property
    def is_quiet(self) -> bool:
        """True if the engine was asked to print nothing (``-L 0``)."""
        return self.information_level == "0"

    def to_args(self) -> list[str]:
        """Return the command-line arguments for the set fields."""
        args: list[str] = []
        if self.action is not None:
            args.extend(["-I", self.action])
        if self.information_level is not None:
            args.extend(["-L", self.information_level])
        if self.choice_algorithm is not None:
            args.extend(["--choice-algorithm", self.choice_algorithm])
        if self.nodes is not None:
            args.extend(["-N", self.nodes])
        if self.local_work_dir is not None:
            args.extend(["-s", str(self.local_work_dir)])
        if self.global_work_dir is not None:
            args.extend(["-g", str(self.global_work_dir)])
        return args
