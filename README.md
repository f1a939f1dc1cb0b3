# deckframe

An asyncio framework for applications that run on a Stream Deck style
grid of keys. It draws buttons to images with Pillow, keeps track of
the current screen and switches between screens. It also passes key
presses and releases to your handlers.

## Installation

```
pip install deckframe
```

Python 3.10 or later is needed. The only dependency is Pillow 10.1 or newer.

## Concepts

- **`deckframe.render.Deck`** is the device interface the framework
  drives. You supply an object with three async methods:
  - `set_button_image(index, image)` receives a Pillow RGBA image for key `index`.
  - `flush()` pushes pending images to the device.
  - `read(timeout)` returns a list of key events.

  Events are `deckframe.run.ButtonDown(index)` and `ButtonUp(index)`. Other
  objects in the list are ignored.
- **`deckframe.render.RenderConfig`** sets the key image size (`width`,
  `height`, default 72×72), `font_data` (TrueType bytes) and `font_scale`
  (default 14.0). When `font_data` is `None`, Pillow's default font is used.
- **`deckframe.render.render_button(button, config)`** draws a raw button
  description to an image. The descriptions are `TextButton`, `IconButton`,
  `IconWithTextButton`, `CustomImageButton` and `GradientButton`.
  **`set_button(deck, index, button, config)`** draws a button and uploads it.
- **`deckframe.theme.Theme`** holds the background and foreground colours
  for each state. Colours are `Color` values, built for example with
  `Color.from_rgba8(r, g, b, a)`. `Theme.dark()` (the default) and
  `Theme.light()` are the built-in themes.
- **`deckframe.buttons.Button`** is the logical button a view shows. It has
  `text`, an optional SVG `icon`, a `ButtonState` (`DEFAULT`, `PRESSED`,
  `ACTIVE`, `INACTIVE`, `ERROR`) and an optional per-button `theme`. It is
  immutable: `updated_text`, `updated_icon`, `updated_state` and
  `with_theme` return copies.
- **`deckframe.matrix.ButtonMatrix`** is a `width` × `height` grid of buttons.
  Buttons are addressed by `(x, y)` or by the key index `y * width + x`.
- **`deckframe.navigation`** defines the two abstract classes an application
  implements:
  - `NavigationEntry` is a screen. It must be constructible with no arguments,
    which gives the start screen, and it must compare equal to entries for
    the same screen. Its `get_view(context)` returns a `View`.
  - `View` has `render()`, `on_click(context, index, navigation)` and
    `fetch_all(context)`.
- **`deckframe.customizable.CustomizableView`** is a ready-made `View` that
  you fill key by key:
  - `set_button(x, y, button)` places a `ClickButton` or `ToggleButton`.
  - `set_navigation(x, y, entry, text, icon)` places a key that navigates to
    `entry`.
  - `remove_button(x, y)` clears a key.

  `ClickButton` runs an async `action(context)` when clicked. `ToggleButton`
  reads its state with `fetch_active(context)` and applies a new state with
  `push_active(context, active)`. Its active look can be changed with
  `when_active(text, icon)`. Subclass `CustomButton` for other behaviour.
- **`deckframe.manager.DisplayManager`** renders the current view to the
  deck. On a press it shows that key in the pressed state. On a release it
  delivers the click to the view and then redraws. Errors raised by a view's
  `fetch_all` or `on_click` are printed to stderr and do not stop the
  application.
- **`deckframe.run.run`** and **`run_with_external_triggers`** show the start
  screen and process events forever.
  - Views request a new screen by putting a navigation entry on the queue
    passed to `on_click`.
  - With `run_with_external_triggers`, `ExternalTrigger(navigation,
    switch_view)` items from an `asyncio.Queue` also change the screen.
    When `switch_view` is false, a trigger only re-shows the screen that is
    already being shown.

## Example

```python
from deckframe.customizable import ClickButton, CustomizableView, ToggleButton
from deckframe.navigation import NavigationEntry
from deckframe.render import RenderConfig
from deckframe.run import run
from deckframe.theme import Theme


class Screens(NavigationEntry):
    def __init__(self, name="main"):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, Screens) and other.name == self.name

    async def get_view(self, context):
        view = CustomizableView(5, 3)
        if self.name == "main":
            async def fetch(ctx):
                return False

            async def push(ctx, state):
                print("toggled", state)

            view.set_button(0, 0, ToggleButton("Toggle", None, fetch, push))
            view.set_navigation(0, 2, Screens("settings"), "Settings", None)
        else:
            async def clicked(ctx):
                print("option selected")

            view.set_button(0, 0, ClickButton("Option", None, clicked))
            view.set_navigation(4, 2, Screens("main"), "Back", None)
        return view


async def main(deck):
    await run(Screens, Theme.light(), RenderConfig(), deck, context=None)
```

Here `deck` is your own object that implements the `Deck` interface.

## Plugins

`deckframe.plugins` builds navigation from independent `Plugin` objects.

- A plugin has a `name()` and an async `get_view(context)`.
- `PluginNavigation(plugin)` is the navigation entry for a plugin. Two
  entries are equal when their plugins have the same name. Without a plugin,
  it leads to an empty 5×3 `CustomizableView`.
- `PluginContext(mapping)` holds shared objects. Plugins look them up with
  `await context.get_context(key)`. When `key` is a type, the stored object
  is returned only if it is an instance of that type; otherwise the result
  is `None`.

## Icons

Icons are SVG strings drawn in the foreground colour. The built-in
renderer fills these elements: `path`, `rect`, `circle`, `ellipse`,
`polygon` and `polyline`. It honours `fill="none"` and the root `viewBox`.
Strokes, transforms, gradients and CSS are not supported. A malformed icon
raises `RenderError`.

## Errors

Errors are subclasses of `deckframe.errors.StreamDeckError`:

- `DeviceError`
- `RenderError`
- `ImageError`
- `ButtonIndexOutOfBoundsError`
- `DeviceNotFoundError`

Out-of-range coordinates raise `StreamDeckError`.

## What it does not do

- deckframe does not talk to hardware: there is no USB or HID driver. You
  provide the `Deck` object.
- It ships no font and no icon set.
- It has no command-line program.