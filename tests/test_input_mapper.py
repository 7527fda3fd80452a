import pytest

pytest.importorskip("tkinter")

from pygoblin.domain.input_state import Move  # noqa: E402
from pygoblin.ui.input_mapper import TkInputMapper  # noqa: E402


@pytest.fixture()
def pressed(fake_root):
    moves = []
    starts = []
    TkInputMapper(fake_root, on_move=moves.append, on_new_game=lambda: starts.append(True))
    return moves, starts


def test_takes_focus(fake_root, pressed):
    assert fake_root.focused


@pytest.mark.parametrize("seq", ["<KeyPress-a>", "<KeyPress-A>", "<KeyPress-Left>"])
def test_left_keys(fake_root, pressed, seq):
    moves, _ = pressed
    fake_root.press(seq)
    assert moves == [Move.LEFT]


@pytest.mark.parametrize("seq", ["<KeyPress-l>", "<KeyPress-L>", "<KeyPress-Right>"])
def test_right_keys(fake_root, pressed, seq):
    moves, _ = pressed
    fake_root.press(seq)
    assert moves == [Move.RIGHT]


def test_return_requests_new_game(fake_root, pressed):
    moves, starts = pressed
    fake_root.press("<KeyPress-Return>")
    assert starts == [True]
    assert moves == []


def test_presses_arrive_in_order(fake_root, pressed):
    moves, _ = pressed
    for seq in ("<KeyPress-a>", "<KeyPress-l>", "<KeyPress-l>", "<KeyPress-a>"):
        fake_root.press(seq)
    assert moves == [Move.LEFT, Move.RIGHT, Move.RIGHT, Move.LEFT]
