import gc
import json

import pytest

from clavis.commontypes import ContextError, Keycode
from clavis.context import ComposeEntry, ParseContext


def test_default_context_tables():
    context = ParseContext.default()
    assert context.keycodes["a"] == 30
    assert context.keycodes["lsft"] == context.keycodes["lshift"] == 42
    assert context.keycodes["'"] == 40
    assert context.shifted["A"] == 30
    assert context.shifted["!"] == 2
    assert context.shifted["~"] == 41
    assert "(" not in context.shifted
    assert ")" not in context.shifted
    assert context.shift_keycode == 42


def test_compose_for_first_entry_wins():
    context = ParseContext(
        keycodes={"a": Keycode(30)},
        compose=[
            ComposeEntry(trigger="é", keys="' e", description="e acute"),
            ComposeEntry(trigger="é", keys="e '"),
        ],
    )
    assert context.compose_for("é").keys == "' e"
    assert context.compose_for("x") is None


def test_compose_trigger_must_be_one_character():
    with pytest.raises(ValueError) as excinfo:
        ComposeEntry(trigger="ab", keys="a b")
    assert "exactly one character" in str(excinfo.value)


def test_load(tmp_path):
    src = tmp_path / "context.json"
    src.write_text(
        json.dumps(
            {
                "keycodes": {"a": 30, "b": "0x30"},
                "shifted": {"A": 30},
                "compose": [{"trigger": "é", "keys": "' e"}],
            }
        ),
        encoding="utf-8",
    )
    context = ParseContext.load(src)
    assert context.keycodes == {"a": 30, "b": 48}
    assert context.shifted == {"A": 30}
    assert context.compose == (ComposeEntry(trigger="é", keys="' e"),)
    assert context.shift_keycode == 42


@pytest.mark.parametrize(
    "raw",
    (
        pytest.param({"keycodes": {"a": True}}, id="bool-keycode"),
        pytest.param({"keycodes": {"a": "thirty"}}, id="bad-string-keycode"),
        pytest.param({"shifted": {}}, id="missing-keycodes"),
        pytest.param({"keycodes": {}, "compose": [{"trigger": "xy", "keys": "x"}]}, id="long-trigger"),
    ),
)
def test_load_invalid(tmp_path, raw):
    src = tmp_path / "context.json"
    src.write_text(json.dumps(raw), encoding="utf-8")
    with pytest.raises(ContextError):
        ParseContext.load(src)


def test_load_rejects_malformed_json(tmp_path):
    src = tmp_path / "context.json"
    src.write_text("{not json", encoding="utf-8")
    with pytest.raises(ContextError):
        ParseContext.load(src)


def test_unstructure_round_trips_through_load(tmp_path):
    context = ParseContext(
        keycodes={"a": Keycode(30), "b": Keycode(48)},
        shifted={"A": Keycode(30)},
        compose=[ComposeEntry(trigger="é", keys="' e", description="e acute")],
    )
    src = tmp_path / "context.json"
    src.write_text(json.dumps(context.unstructure()), encoding="utf-8")
    assert ParseContext.load(src) == context


@pytest.mark.filterwarnings("error::ResourceWarning")
def test_load_closes_file(tmp_path):
    src = tmp_path / "context.json"
    src.write_text(json.dumps({"keycodes": {"a": 30}}), encoding="utf-8")
    context = ParseContext.load(src)
    gc.collect()
    assert context.keycodes == {"a": 30}
