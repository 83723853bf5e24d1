import pytest

from sizecompare.interaction import InteractionState, PointerEvent, RegionInteraction


class Counter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


@pytest.fixture
def selected():
    return Counter()


@pytest.fixture
def interaction(selected):
    return RegionInteraction(on_select=selected, threshold=3)


def test_pointer_down_stops_map_pan(interaction):
    event = PointerEvent(100, 100)
    interaction.pointer_down(event)
    assert event.propagation_stopped
    assert interaction.state is InteractionState.POINTER_DOWN


@pytest.mark.parametrize("moves", [
    [],
    [(101, 101)],
    [(102, 100), (100, 102), (101.5, 101.5)],
])
def test_small_movement_selects_once(interaction, selected, moves):
    interaction.pointer_down(PointerEvent(100, 100))
    for x, y in moves:
        interaction.pointer_move(PointerEvent(x, y))
    up = PointerEvent(*(moves[-1] if moves else (100, 100)))
    assert interaction.pointer_up(up) is True
    assert selected.calls == 1
    assert up.propagation_stopped
    assert interaction.state is InteractionState.IDLE


@pytest.mark.parametrize("moves", [
    [(103, 100)],
    [(102.2, 102.2)],
    [(120, 140), (100, 100)],
])
def test_drag_never_selects(interaction, selected, moves):
    interaction.pointer_down(PointerEvent(100, 100))
    for x, y in moves:
        interaction.pointer_move(PointerEvent(x, y))
    assert interaction.state is InteractionState.DRAGGING
    up = PointerEvent(100, 100)
    assert interaction.pointer_up(up) is False
    assert selected.calls == 0
    assert not up.propagation_stopped
    assert interaction.state is InteractionState.IDLE


@pytest.mark.parametrize("down, up", [
    ((0, 0), (10, 0)),
    ((100, 100), (103, 100)),
    ((100, 100), (97.8, 97.8)),
])
def test_release_away_from_press_point_is_a_drag(interaction, selected, down, up):
    interaction.pointer_down(PointerEvent(*down))
    event = PointerEvent(*up)
    assert interaction.pointer_up(event) is False
    assert selected.calls == 0
    assert not event.propagation_stopped
    assert interaction.state is InteractionState.IDLE


def test_release_near_press_point_selects(interaction, selected):
    interaction.pointer_down(PointerEvent(100, 100))
    assert interaction.pointer_up(PointerEvent(102, 101)) is True
    assert selected.calls == 1


def test_pointer_up_without_down_is_ignored(interaction, selected):
    assert interaction.pointer_up(PointerEvent(0, 0)) is False
    assert selected.calls == 0


def test_move_while_idle_does_nothing(interaction):
    interaction.pointer_move(PointerEvent(500, 500))
    assert interaction.state is InteractionState.IDLE


def test_new_gesture_after_drag_can_select(interaction, selected):
    interaction.pointer_down(PointerEvent(0, 0))
    interaction.pointer_move(PointerEvent(50, 0))
    interaction.pointer_up(PointerEvent(50, 0))

    assert interaction.click(50, 0) is True
    assert selected.calls == 1


def test_cancel_returns_to_idle(interaction, selected):
    interaction.pointer_down(PointerEvent(0, 0))
    interaction.cancel()
    assert interaction.state is InteractionState.IDLE
    assert interaction.pointer_up(PointerEvent(0, 0)) is False
    assert selected.calls == 0


def test_state_is_idle_even_if_selection_raises():
    def boom():
        raise RuntimeError("handler failed")

    interaction = RegionInteraction(on_select=boom)
    with pytest.raises(RuntimeError):
        interaction.click()
    assert interaction.state is InteractionState.IDLE
