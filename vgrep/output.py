"""Final output for a finished session."""

from __future__ import annotations

import sys
from typing import TextIO

from .session import SessionOutcome, SessionState


def write_outcome(outcome: SessionOutcome, print_pattern: bool = False, stream: TextIO | None = None) -> None:
    """Write matched lines (or only the pattern) for a confirmed session.

    A cancelled session writes nothing.
    """
    if outcome.state is not SessionState.CONFIRMED:
        return
    stream = stream if stream is not None else sys.stdout
    if print_pattern:
        stream.write(f"{outcome.pattern}\n")
    else:
        stream.writelines(f"{line}\n" for line in outcome.matched_lines)
    stream.flush()
