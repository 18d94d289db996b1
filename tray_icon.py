"""System-tray icon setup via pystray."""

from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu

from date_utils import DateUtils


def create_tray(
    icon_image: Image.Image,
    utils: DateUtils,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_today: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Picker", lambda _icon, _item: on_show(), default=True),
    ]
    if on_today is not None:
        items.append(MenuItem("Go to Today", lambda _icon, _item: on_today()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    menu = Menu(*items)
    title = utils.format(utils.date(), "fullDateWithWeekday")
    return pystray.Icon("date-picker", icon_image, f"Date Picker – {title}", menu)
