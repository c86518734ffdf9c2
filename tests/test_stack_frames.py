"""
Tests for stack trace frame capping.
"""

import pytest

from log_scrubber.stack_frames import OMITTED_FRAMES_MARKER, cap_stack_frames, is_stack_frame


class TestIsStackFrame:

    @pytest.mark.parametrize("line", [
        "at Orders.Api.Run()",
        "    at Orders.Api.Run() in Handler.cs:line 42",
        "Handler.cs:line 7",
        "\tat java.base/java.lang.Thread.run(Thread.java:833)",
    ])
    def test_frames(self, line):
        """Should recognise frame lines."""
        assert is_stack_frame(line) is True

    @pytest.mark.parametrize("line", [
        "",
        "System.InvalidOperationException: boom",
        "attempt 3 failed",
        "retry at 10:30",
        "--- End of inner exception stack trace ---",
    ])
    def test_non_frames(self, line):
        """Should not mistake ordinary lines for frames."""
        assert is_stack_frame(line) is False


class TestCapStackFrames:

    def test_short_trace_is_unchanged(self):
        """Should leave a short trace alone."""
        text = "Error\nat A()\nat B()"

        assert cap_stack_frames(text) == (text, 0)

    def test_eleventh_frame_becomes_marker(self):
        """Should replace the eleventh frame with the marker."""
        frames = [f"at F{i}()" for i in range(11)]
        text, omitted = cap_stack_frames("\n".join(frames))

        assert text.split("\n") == frames[:10] + [OMITTED_FRAMES_MARKER]
        assert omitted == 1

    def test_later_frames_are_dropped(self):
        """Should drop frames after the marker."""
        frames = [f"at F{i}()" for i in range(15)]
        text, omitted = cap_stack_frames("Boom\n" + "\n".join(frames) + "\nDone")

        assert text.split("\n") == ["Boom"] + frames[:10] + [OMITTED_FRAMES_MARKER, "Done"]
        assert omitted == 5

    def test_each_run_gets_its_own_allowance(self):
        """Should reset the count after a non-frame line."""
        run = [f"at F{i}()" for i in range(4)]
        text, omitted = cap_stack_frames("\n".join(run + ["Caused by inner"] + run), max_frames=2)

        assert text.split("\n") == (
            run[:2] + [OMITTED_FRAMES_MARKER, "Caused by inner"] + run[:2] + [OMITTED_FRAMES_MARKER]
        )
        assert omitted == 4

    def test_blank_line_ends_a_run(self):
        """Should end a run at a blank line."""
        frames = [f"at F{i}()" for i in range(3)]
        text, _ = cap_stack_frames("\n".join(frames + [""] + frames), max_frames=3)

        assert OMITTED_FRAMES_MARKER not in text

    def test_capped_output_is_stable(self):
        """Should not re-cap capped output."""
        frames = [f"at F{i}()" for i in range(30)]
        once, _ = cap_stack_frames("\n".join(frames))

        assert cap_stack_frames(once) == (once, 0)
