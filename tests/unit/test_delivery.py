"""
Tests for streamed delivery: marker withholding and notifications
"""

from weft.agent.codec import STREAM_MARKER, ActionKind, decode_action
from weft.agent.delivery import MarkerScanner, tool_call_chunk, tool_result_chunk
from weft.errors import ToolNotFoundError

NARRATION = "Sure, let me look that up for you. "
CALL = '{"action":"call_tool","tool":"search","args":{"q":"weft"}}'


def _feed_all(scanner, pieces):
    forwarded = "".join(scanner.feed(p) for p in pieces)
    return forwarded + scanner.flush()


class TestMarkerScanner:
    """Test MarkerScanner."""

    def test_plain_text_is_forwarded_completely(self):
        scanner = MarkerScanner()
        text = "Just a normal answer without any actions."
        assert _feed_all(scanner, list(text)) == text
        assert not scanner.marker_found

    def test_lookahead_is_bounded(self):
        scanner = MarkerScanner()
        for ch in "abcdefghijklmnopqrstuvwxyz":
            scanner.feed(ch)
            assert len(scanner.pending) <= len(STREAM_MARKER)

    def test_marker_split_at_every_offset(self):
        text = NARRATION + CALL
        for offset in range(1, len(text)):
            scanner = MarkerScanner()
            forwarded = _feed_all(scanner, [text[:offset], text[offset:]])
            assert scanner.marker_found, offset
            assert forwarded == NARRATION, offset
            assert forwarded + scanner.withheld == text, offset
            assert scanner.full_content == text

    def test_marker_split_inside_small_chunks(self):
        text = NARRATION + CALL + " trailing words"
        for size in (1, 2, 3, 5, 8, 13):
            scanner = MarkerScanner()
            pieces = [text[i:i + size] for i in range(0, len(text), size)]
            forwarded = _feed_all(scanner, pieces)
            assert forwarded == NARRATION
            assert forwarded + scanner.withheld == text

    def test_marker_at_start(self):
        scanner = MarkerScanner()
        assert _feed_all(scanner, [CALL]) == ""
        assert scanner.withheld == CALL

    def test_nothing_forwarded_after_marker(self):
        scanner = MarkerScanner()
        scanner.feed(CALL)
        assert scanner.feed(" more narration that is long enough") == ""

    def test_passthrough_forwards_everything(self):
        scanner = MarkerScanner(passthrough=True)
        text = NARRATION + CALL
        assert _feed_all(scanner, [text[:40], text[40:]]) == text
        assert scanner.withheld == ""

    def test_empty_delta(self):
        scanner = MarkerScanner()
        assert scanner.feed("") == ""
        assert scanner.full_content == ""


class TestNotifications:
    def test_tool_call_chunk(self):
        chunk = tool_call_chunk(decode_action(CALL))
        assert chunk.kind == "tool_call"
        assert chunk.payload == {"action": "call_tool", "tool": "search", "args": {"q": "weft"}}
        assert not chunk.is_narration

    def test_tool_result_chunk(self):
        action = decode_action(CALL)
        chunk = tool_result_chunk(action, result="3 hits")
        assert chunk.kind == "tool_result"
        assert chunk.payload == {
            "action": "tool_result",
            "tool": "search",
            "args": {"q": "weft"},
            "result": "3 hits",
            "error": False,
            "message": "",
        }

    def test_tool_result_error_payload(self):
        action = decode_action(CALL)
        assert action.kind is ActionKind.CALL_TOOL
        chunk = tool_result_chunk(action, error=ToolNotFoundError("search"))
        assert chunk.payload["error"] is True
        assert chunk.payload["message"] == "tool not found: search"
        assert '"error":true' in chunk.content
