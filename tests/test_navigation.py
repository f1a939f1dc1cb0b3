import asyncio

import pytest

from deckframe.buttons import Button
from deckframe.matrix import ButtonMatrix
from deckframe.navigation import NavigationEntry, View


class LabelView(View):
    def __init__(self, label: str) -> None:
        self.label = label
        self.fetched_with = None

    async def render(self) -> ButtonMatrix:
        matrix = ButtonMatrix(2, 1)
        matrix.set_button(0, 0, Button(self.label))
        return matrix

    async def on_click(self, context, index, navigation) -> None:
        if index == 0:
            await navigation.put(Page("other"))
        else:
            raise IndexError(index)

    async def fetch_all(self, context) -> None:
        self.fetched_with = context


class Page(NavigationEntry):
    def __init__(self, name: str = "main") -> None:
        self.name = name

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Page) and other.name == self.name

    async def get_view(self, context) -> View:
        return LabelView(f"{self.name}:{context}")


def test_navigation_entry_is_abstract():
    with pytest.raises(TypeError):
        NavigationEntry()


def test_view_is_abstract():
    with pytest.raises(TypeError):
        View()


@pytest.mark.asyncio
async def test_incomplete_view_cannot_be_built():
    class NoFetch(View):
        async def render(self):
            return ButtonMatrix(1, 1)

        async def on_click(self, context, index, navigation):
            await navigation.put(None)

    class Complete(NoFetch):
        async def fetch_all(self, context):
            return None

    with pytest.raises(TypeError):
        NoFetch()

    matrix = await Complete().render()
    assert matrix.size() == 1
    assert matrix.get_button(0, 0) == Button()


@pytest.mark.asyncio
async def test_default_entry_constructs_with_no_arguments():
    assert Page() == Page("main")
    assert Page() != Page("other")
    view = await Page().get_view("ctx")
    matrix = await view.render()
    assert matrix.get_button(0, 0) == Button("main:ctx")
    assert matrix.get_button(1, 0) == Button()


@pytest.mark.asyncio
async def test_get_view_renders_label():
    view = await Page("home").get_view("ctx")
    matrix = await view.render()
    assert matrix.get_button(0, 0).text == "home:ctx"
    assert matrix.get_button(1, 0) == Button()


@pytest.mark.asyncio
async def test_on_click_sends_navigation():
    view = await Page().get_view("ctx")
    queue: asyncio.Queue = asyncio.Queue(maxsize=1)
    await view.on_click("ctx", 0, queue)
    target = queue.get_nowait()
    assert target == Page("other")
    matrix = await (await target.get_view("ctx")).render()
    assert matrix.get_button(0, 0) == Button("other:ctx")


@pytest.mark.asyncio
async def test_on_click_error_propagates():
    view = await Page().get_view("ctx")
    matrix = await view.render()
    assert matrix.get_button_by_index(0) == Button("main:ctx")
    with pytest.raises(IndexError):
        await view.on_click("ctx", 1, asyncio.Queue())


@pytest.mark.asyncio
async def test_fetch_all_receives_context():
    view = await Page().get_view("ctx")
    await view.fetch_all({"key": "value"})
    assert view.fetched_with == {"key": "value"}
    matrix = await view.render()
    assert matrix.size() == ButtonMatrix(2, 1).size() == 2
    assert matrix.get_button_by_index(1) == Button()