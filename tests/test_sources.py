import json

from lowtime.sources import (
    ClockNode,
    ReplaySource,
    is_active_node,
    pick_clock_pair,
    reading_from_nodes,
    self_active_signal,
)


def _node(text, top, classes=(), attributes=None, width=80.0, height=30.0):
    return ClockNode(text=text, classes=tuple(classes), attributes=attributes or {}, top=top, width=width, height=height)


def test_active_markers():
    assert is_active_node(_node("0:30", 0, classes=["clock", "clock-player-turn"]))
    assert is_active_node(_node("0:30", 0, attributes={"data-active": "true"}))
    assert not is_active_node(_node("0:30", 0, classes=["clock"]))
    assert not is_active_node(None)


def test_self_active_requires_opponent_inactive():
    mine = _node("0:30", 500, classes=["clock--active"])
    theirs = _node("1:00", 10, classes=["clock--active"])
    assert not self_active_signal(mine, theirs)
    assert self_active_signal(mine, _node("1:00", 10))


def test_pick_clock_pair_uses_vertical_position():
    top = _node("2:00", 40)
    bottom = _node("0:45", 620)
    hidden = _node("9:99", 300, width=0)
    self_node, opponent_node = pick_clock_pair([bottom, hidden, top])
    assert self_node is bottom
    assert opponent_node is top


def test_pick_clock_pair_needs_two_visible_nodes():
    assert pick_clock_pair([_node("1:00", 10), _node("1:00", float("nan"))]) == (None, None)


def test_reading_from_nodes():
    nodes = [_node("3:00", 20), _node("0:25", 600, classes=["clock-running"])]
    reading = reading_from_nodes(nodes, "https://www.chess.com/game/live/9")
    assert reading.self_text == "0:25"
    assert reading.opponent_text == "3:00"
    assert reading.self_active
    assert reading.navigation_key == "https://www.chess.com/game/live/9"


def test_replay_source_reads_both_line_kinds(tmp_path):
    path = tmp_path / "ticks.jsonl"
    lines = [
        json.dumps({"self": "0:31", "opponent": "1:00", "active": True, "url": "g1"}),
        "not json",
        "",
        json.dumps(
            {
                "url": "g1",
                "nodes": [
                    {"text": "1:00", "classes": "clock", "top": 10, "width": 50, "height": 20},
                    {"text": "0:29", "classes": "clock active", "top": 400, "width": 50, "height": 20},
                ],
            }
        ),
    ]
    path.write_text("\n".join(lines), encoding="utf-8")

    source = ReplaySource(path)
    first = source.read()
    second = source.read()

    assert (first.self_text, first.opponent_text, first.self_active) == ("0:31", "1:00", True)
    assert (second.self_text, second.opponent_text, second.self_active) == ("0:29", "1:00", True)
    assert not source.exhausted
    assert source.read() is None
    assert source.exhausted
