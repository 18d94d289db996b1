"""Multi-month date picker window (tkinter) driven by ``DateUtils``."""

import logging
import tkinter as tk
from tkinter import font as tkfont

from PIL import ImageTk

from date_utils import DateUtils
from date_value import DateValue
from icon_gen import create_icon_image

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
WN_FG = "#888888"
OUTSIDE_FG = "#BBBBBB"

MAX_WEEKS = 6


class _MonthPanel:
    """Pre-allocated widget pool for a single month (header + 6 weeks max)."""

    __slots__ = ("frame", "header", "week_nums", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict, weekdays: list[str],
                 on_press, on_motion, on_release) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        self.header = tk.Label(
            self.frame, font=fonts["header"], bg=HEADER_BG, fg="#333333",
        )
        self.header.grid(row=0, column=0, columnspan=8, sticky="we", pady=(0, 2))

        tk.Label(
            self.frame, text="Wk", font=fonts["bold"], bg=GRID_BG, fg=WN_FG, width=3,
        ).grid(row=1, column=0)
        for col, abbr in enumerate(weekdays):
            fg = "#CC0000" if col >= 5 else "#333333"
            tk.Label(
                self.frame, text=abbr, font=fonts["bold"], bg=GRID_BG, fg=fg, width=3,
            ).grid(row=1, column=col + 1)

        self.week_nums: list[tk.Label] = []
        self.day_cells: list[list[tk.Label]] = []
        for r in range(MAX_WEEKS):
            grid_row = r + 2
            wn = tk.Label(self.frame, font=fonts["wn"], bg=GRID_BG, fg=WN_FG, width=3)
            wn.grid(row=grid_row, column=0)
            self.week_nums.append(wn)

            row_cells: list[tk.Label] = []
            for c in range(7):
                cell = tk.Label(self.frame, font=fonts["normal"], bg=GRID_BG, width=3)
                cell.grid(row=grid_row, column=c + 1)
                # Bind drag events once — handler checks _widget_dates
                cell.bind("<ButtonPress-1>", on_press)
                cell.bind("<B1-Motion>", on_motion)
                cell.bind("<ButtonRelease-1>", on_release)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class PickerWindow:
    """Shows ``months_shown`` consecutive months and a drag-selected range."""

    def __init__(self, utils: DateUtils | None = None, months_shown: int = 3) -> None:
        self.utils = utils or DateUtils()
        self.months_shown = max(1, months_shown)

        self.root = tk.Tk()
        self.root.title("Date Picker")
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)
        self._icon = ImageTk.PhotoImage(create_icon_image(self.utils))
        self.root.iconphoto(True, self._icon)

        self._setup_fonts()

        self.center = self.utils.start_of_month(self.utils.date())

        # Selection state
        self.sel_start: DateValue | None = None
        self.sel_end: DateValue | None = None
        self._dragging = False

        # Widget-to-date mapping (filled during _rebuild_months)
        self._widget_dates: dict[int, DateValue] = {}
        # (date, cell, in displayed month, weekend); padding days appear in two panels
        self._day_cells: list[tuple[DateValue, tk.Label, bool, bool]] = []

        self._panels: list[_MonthPanel] = []
        self._build_shell()
        self._rebuild_months()

        self.root.bind("<Escape>", self._on_escape)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_wn = tkfont.Font(family=base, size=8)
        self._panel_fonts = {
            "header": self.font_header, "bold": self.font_bold,
            "normal": self.font_normal, "wn": self.font_wn,
        }

    # ------------------------------------------------------------------
    # Build shell (once) — nav bar + months frame + footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        outer = tk.Frame(self.root, bg=GRID_BG)
        outer.pack(padx=6, pady=4)

        # Navigation row: ◀◀  ◀  Today  ▶  ▶▶
        nav = tk.Frame(outer, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 2))

        buttons = (
            ("◀◀", "left", lambda _e: self._navigate_year(-1)),
            ("◀", "left", lambda _e: self._navigate(-1)),
            ("▶▶", "right", lambda _e: self._navigate_year(1)),
            ("▶", "right", lambda _e: self._navigate(1)),
        )
        for text, side, handler in buttons:
            btn = tk.Label(nav, text=text, font=self.font_nav, bg=GRID_BG, cursor="hand2")
            btn.pack(side=side, padx=6)
            btn.bind("<Button-1>", handler)

        btn_today = tk.Label(
            nav, text="Today", font=self.font_bold, bg=GRID_BG, fg=ACCENT,
            cursor="hand2",
        )
        btn_today.pack(side="left", padx=6)
        btn_today.bind("<Button-1>", lambda _e: self.go_today())

        self._months_frame = tk.Frame(outer, bg=GRID_BG)
        self._months_frame.pack()

        self._footer_label = tk.Label(
            outer, text=self._footer_text(), font=self.font_normal,
            bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(4, 0))

    # ------------------------------------------------------------------
    # Rebuild month panels
    # ------------------------------------------------------------------
    def _rebuild_months(self) -> None:
        self._widget_dates.clear()
        self._day_cells.clear()

        weekdays = self.utils.get_weekdays()
        while len(self._panels) < self.months_shown:
            self._panels.append(_MonthPanel(
                self._months_frame, self._panel_fonts, weekdays,
                self._on_press, self._on_motion, self._on_release,
            ))

        month = self.center
        for i in range(self.months_shown):
            panel = self._panels[i]
            panel.frame.grid(row=0, column=i, padx=6, pady=2, sticky="n")
            self._fill_panel(panel, month)
            month = self.utils.get_next_month(month)

        self._update_highlight()

    def _fill_panel(self, panel: _MonthPanel, month: DateValue) -> None:
        """Reconfigure an existing panel's labels — no widget creation."""
        utils = self.utils
        panel.header.configure(text=utils.format(month, "monthAndYear"))

        grid = utils.get_week_array(month)
        weeks = utils.get_week_numbers(month)
        for r in range(MAX_WEEKS):
            if r >= len(grid):
                panel.week_nums[r].configure(text="")
                for cell in panel.day_cells[r]:
                    cell.configure(text="", bg=GRID_BG, cursor="")
                continue
            panel.week_nums[r].configure(text=str(weeks[r]))
            for c, day in enumerate(grid[r]):
                cell = panel.day_cells[r][c]
                in_month = utils.is_same_month(day, month)
                cell.configure(text=utils.format(day, "dayOfMonth"), cursor="hand2")
                self._widget_dates[id(cell)] = day
                self._day_cells.append((day, cell, in_month, c >= 5))

    # ------------------------------------------------------------------
    # Selection helpers
    # ------------------------------------------------------------------
    def selected_range(self) -> tuple[DateValue | None, DateValue | None]:
        if self.sel_start is None or self.sel_end is None:
            return None, None
        if self.utils.is_after(self.sel_start, self.sel_end):
            return self.sel_end, self.sel_start
        return self.sel_start, self.sel_end

    def _clear_selection(self) -> None:
        self.sel_start = None
        self.sel_end = None
        self._dragging = False

    # ------------------------------------------------------------------
    # Drag-to-select events
    # ------------------------------------------------------------------
    def _on_press(self, event: tk.Event) -> None:
        d = self._widget_dates.get(id(event.widget))
        if d is not None:
            self.sel_start = d
            self.sel_end = d
            self._dragging = True
            self._update_highlight()

    def _on_motion(self, event: tk.Event) -> None:
        if not self._dragging:
            return
        w = event.widget.winfo_containing(event.x_root, event.y_root)
        if w and id(w) in self._widget_dates:
            new_end = self._widget_dates[id(w)]
            if new_end != self.sel_end:
                self.sel_end = new_end
                self._update_highlight()

    def _on_release(self, event: tk.Event) -> None:
        if not self._dragging:
            return
        self._dragging = False
        w = event.widget.winfo_containing(event.x_root, event.y_root)
        if w and id(w) in self._widget_dates:
            self.sel_end = self._widget_dates[id(w)]
        self._update_highlight()
        lo, hi = self.selected_range()
        logger.debug("Selected %s .. %s", lo, hi)

    # ------------------------------------------------------------------
    # Update highlights without full rebuild
    # ------------------------------------------------------------------
    def _update_highlight(self) -> None:
        utils = self.utils
        today = utils.date()
        sel_lo, sel_hi = self.selected_range()

        for d, cell, in_month, is_weekend in self._day_cells:
            is_today = utils.is_same_day(d, today)
            in_sel = sel_lo is not None and utils.is_within_range(d, (sel_lo, sel_hi))
            bg, fg = self._day_colors(is_today, is_weekend, in_sel, in_month)
            cell.configure(bg=bg, fg=fg,
                           font=self.font_bold if is_today else self.font_normal)

        self._footer_label.configure(text=self._footer_text())

    @staticmethod
    def _day_colors(is_today: bool, is_weekend: bool, in_sel: bool,
                    in_month: bool) -> tuple[str, str]:
        if is_today:
            return ACCENT, "white"
        if in_sel:
            return SEL_BG, "black"
        if not in_month:
            return GRID_BG, OUTSIDE_FG
        if is_weekend:
            return GRID_BG, "#CC0000"
        return GRID_BG, "black"

    # ------------------------------------------------------------------
    # Footer text
    # ------------------------------------------------------------------
    def _footer_text(self) -> str:
        utils = self.utils
        today_str = f"Today: {utils.format(utils.date(), 'fullDate')}"
        sel_lo, sel_hi = self.selected_range()
        if sel_lo is None or utils.is_same_day(sel_lo, sel_hi):
            return today_str

        range_str = (f"{utils.format(sel_lo, 'shortDate')} → "
                     f"{utils.format(sel_hi, 'shortDate')}")
        return f"{range_str}:  {utils.selection_summary(sel_lo, sel_hi)}     {today_str}"

    # ------------------------------------------------------------------
    # ESC clears selection first, then hides
    # ------------------------------------------------------------------
    def _on_escape(self, _event: tk.Event) -> None:
        if self.sel_start is not None:
            self._clear_selection()
            self._update_highlight()
        else:
            self.hide()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _navigate(self, direction: int) -> None:
        if direction < 0:
            self.center = self.utils.get_previous_month(self.center)
        else:
            self.center = self.utils.get_next_month(self.center)
        self._rebuild_months()

    def _navigate_year(self, direction: int) -> None:
        self.center = self.utils.add_years(self.center, direction)
        self._rebuild_months()

    def go_today(self) -> None:
        self.center = self.utils.start_of_month(self.utils.date())
        self._clear_selection()
        self._rebuild_months()

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.go_today()
        self.root.deiconify()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.root.withdraw()
