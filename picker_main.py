"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import ctypes
import logging
import threading

from date_utils import DateUtils
from icon_gen import create_icon_image
from picker_window import PickerWindow
from tray_icon import create_tray

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # DPI awareness so positions / fonts are crisp on Hi-DPI monitors (Windows only)
    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        logger.debug("DPI awareness not available on this platform")

    utils = DateUtils()
    picker = PickerWindow(utils)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        picker.root.after(0, picker.toggle)

    def on_today() -> None:
        picker.root.after(0, picker.show)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            picker.root.destroy()
        picker.root.after(0, _quit)

    tray = create_tray(create_icon_image(utils), utils, on_show, on_exit,
                       on_today=on_today)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()
    logger.info("Date picker running (locale %s)", utils.get_current_locale_code())

    # tkinter main loop on the main thread
    picker.root.mainloop()


if __name__ == "__main__":
    main()
