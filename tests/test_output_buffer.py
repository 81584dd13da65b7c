import json

from agent_conductor.session.output_buffer import OutputBuffer


def test_append_returns_running_length() -> None:
    buffer = OutputBuffer()
    assert buffer.append("s1", "abc") == 3
    assert buffer.append("s1", "de") == 5
    assert buffer.append("s2", "x") == 1
    assert buffer.get("s1") == "abcde"


def test_empty_and_cleared_sessions() -> None:
    buffer = OutputBuffer()
    assert buffer.get("s1") is None
    assert not buffer.has("s1")
    assert buffer.extract_text("s1") == ""

    buffer.append("s1", "data")
    assert buffer.has("s1")
    buffer.clear("s1")
    assert buffer.get("s1") is None
    assert not buffer.has("s1")
    buffer.clear("never-seen")


def test_sessions_are_isolated() -> None:
    buffer = OutputBuffer()
    buffer.append("a", '{"text": "from a"}\n')
    buffer.append("b", "plain shell output")
    assert buffer.extract_text("a") == "from a"
    assert buffer.extract_text("b") == "plain shell output"


def test_fragmented_jsonl_is_reassembled_for_extraction() -> None:
    stream = "\n".join(
        [
            json.dumps({"type": "assistant", "message": {"content": "Reading files"}}),
            json.dumps({"type": "assistant", "message": {"content": [{"type": "text", "text": "Found it"}]}}),
            json.dumps({"type": "result", "result": "Fixed the bug."}),
        ]
    ) + "\n"
    fragments = [stream[i : i + 7] for i in range(0, len(stream), 7)]
    buffer = OutputBuffer()

    seen = []
    for fragment in fragments:
        buffer.append("s1", fragment)
        seen.append(buffer.extract_text("s1", "claude-code"))

    assert buffer.get("s1") == stream
    assert seen[-1] == "Fixed the bug."
    assert "Reading files" in seen
    assert "Reading files\nFound it" in seen
