import pytest

from deckframe.buttons import Button, ButtonState
from deckframe.errors import ButtonIndexOutOfBoundsError, StreamDeckError
from deckframe.matrix import ButtonMatrix


def test_new_matrix_holds_default_buttons():
    matrix = ButtonMatrix(5, 3)
    assert matrix.size() == 15
    assert len(list(matrix)) == matrix.size()
    assert all(button == Button() for button in matrix)


def test_dimensions():
    matrix = ButtonMatrix(5, 3)
    assert (matrix.width, matrix.height) == (5, 3)
    assert len(matrix) == 15


def test_negative_dimensions_rejected():
    with pytest.raises(ValueError):
        ButtonMatrix(-1, 3)


def test_set_and_get_by_coordinates():
    matrix = ButtonMatrix(5, 3)
    button = Button("Hello", state=ButtonState.ACTIVE)
    matrix.set_button(4, 2, button)
    assert matrix.get_button(4, 2) == button
    assert matrix.get_button(0, 0) == Button()


def test_index_runs_row_by_row():
    matrix = ButtonMatrix(5, 3)
    button = Button("Row two")
    matrix.set_button(1, 2, button)
    assert matrix.get_button_by_index(2 * 5 + 1) == button


def test_set_by_index_is_visible_by_coordinates():
    matrix = ButtonMatrix(5, 3)
    button = Button("Seven")
    matrix.set_button_by_index(7, button)
    assert matrix.get_button(7 % 5, 7 // 5) == button


def test_index_and_coordinates_agree_everywhere():
    matrix = ButtonMatrix(4, 3)
    for index in range(matrix.size()):
        matrix.set_button_by_index(index, Button(str(index)))
    for index in range(matrix.size()):
        assert matrix.get_button(index % 4, index // 4) is matrix.get_button_by_index(index)
    assert [button.text for button in matrix] == [str(i) for i in range(matrix.size())]


@pytest.mark.parametrize("x, y", [(5, 0), (0, 3), (-1, 0), (0, -1)])
def test_get_out_of_bounds_returns_none(x, y):
    assert ButtonMatrix(5, 3).get_button(x, y) is None


@pytest.mark.parametrize("index", [15, 100, -1])
def test_get_by_index_out_of_bounds_returns_none(index):
    assert ButtonMatrix(5, 3).get_button_by_index(index) is None


def test_set_out_of_bounds_raises():
    matrix = ButtonMatrix(5, 3)
    with pytest.raises(StreamDeckError, match="Button index out of bounds"):
        matrix.set_button(5, 0, Button("x"))


def test_set_by_index_out_of_bounds_raises():
    matrix = ButtonMatrix(5, 3)
    with pytest.raises(ButtonIndexOutOfBoundsError) as info:
        matrix.set_button_by_index(15, Button("x"))
    assert info.value.index == 15
    assert all(button == Button() for button in matrix)