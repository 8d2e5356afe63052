import dataclasses

import pytest

from src.chat import Credential, PLACEHOLDER_API_KEY, Role, Transcript, Turn


def test_turn_accepts_string_roles_and_is_frozen():
    t = Turn("user", "hi")
    assert t.role is Role.USER
    assert t.to_dict() == {"role": "user", "content": "hi"}
    with pytest.raises(dataclasses.FrozenInstanceError):
        t.content = "changed"


def test_turn_content_never_none():
    assert Turn.assistant(None).content == ""


def test_turn_rejects_unknown_role():
    with pytest.raises(ValueError):
        Turn("tool", "x")


def test_transcript_keeps_insertion_order():
    tr = Transcript.with_system("You are helpful.")
    tr.add_user_turn("Hello!")
    tr.add_assistant_turn("Hi there")
    assert [t.role for t in tr] == [Role.SYSTEM, Role.USER, Role.ASSISTANT]
    assert len(tr) == 3


def test_set_system_turn_replaces_leading_system():
    tr = Transcript()
    tr.add_user_turn("q")
    tr.set_system_turn("first")
    tr.set_system_turn("second")
    assert [t.content for t in tr] == ["second", "q"]
    assert tr.clear_system_turn().content == "second"
    assert tr.clear_system_turn() is None
    assert [t.content for t in tr] == ["q"]


def test_transcript_itself_allows_several_system_turns():
    tr = Transcript([Turn.system("a"), Turn.system("b")])
    assert len(tr.system_turns()) == 2


def test_reset_forgets_prior_turns():
    tr = Transcript([Turn.user("one"), Turn.assistant("r"), Turn.user("two"), Turn.assistant("r2")])
    tr.reset()
    assert len(tr) == 0
    assert list(tr) == []


def test_turns_snapshot_is_detached():
    tr = Transcript()
    tr.add_user_turn("x")
    snap = tr.turns
    tr.add_user_turn("y")
    assert len(snap) == 1


def test_credential_placeholder_and_repr_hides_key():
    assert Credential(PLACEHOLDER_API_KEY).is_placeholder
    cred = Credential("sk-secret")
    assert not cred.is_placeholder
    assert "sk-secret" not in repr(cred)
