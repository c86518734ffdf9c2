"""
Stack trace frame capping.

Long exception logs are mostly repeated frames. Each contiguous run of
frame lines keeps its first few lines, the next one becomes a single
omission marker, and the rest of the run is dropped. Any other line ends
the run, so the next group of frames gets its own allowance.
"""

OMITTED_FRAMES_MARKER = "... [remaining stack frames omitted]"

DEFAULT_MAX_FRAMES = 10


def is_stack_frame(line: str) -> bool:
    """A line is a frame if it starts with 'at ' or carries a ':line' reference."""
    return line.strip().startswith("at ") or ":line" in line


def cap_stack_frames(text: str, max_frames: int = DEFAULT_MAX_FRAMES) -> tuple[str, int]:
    """
    Cap every run of consecutive stack frame lines at max_frames.

    Args:
        text: Newline separated text (line endings already normalized).
        max_frames: Frames kept verbatim per run.

    Returns:
        A tuple of (capped_text, frames_omitted) where frames_omitted counts
        the lines that were replaced by the marker or dropped.
    """
    kept: list[str] = []
    run_length = 0
    omitted = 0

    for line in text.split("\n"):
        if not is_stack_frame(line):
            run_length = 0
            kept.append(line)
            continue

        run_length += 1
        if run_length <= max_frames:
            kept.append(line)
        else:
            if run_length == max_frames + 1:
                kept.append(OMITTED_FRAMES_MARKER)
            omitted += 1

    return "\n".join(kept), omitted
