"""CalendarWindow: month grid with per-day annotation indicators."""

from __future__ import annotations

from datetime import date
from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.viewmodels.calendar_vm import CalendarVM
from app.viewmodels.day_editor_vm import DayEditorVM, ImageIngestion
from app.views import theme
from app.views.components.menu_controller import MenuController
from app.views.constants import GRID_SPACING_PX, THEME_LIGHT, WINDOW_SIZE_RATIO, WINDOW_TITLE
from app.views.dialogs.day_dialog import DayDialog
from app.views.photo_cache import PhotoThumbnailCache
from app.views.widgets.day_cell import DayCell
from core.errors import InvalidDateError
from core.services.grid_service import GRID_COLUMNS, GRID_SIZE
from infrastructure.logging import open_latest_log, open_log_directory


class CalendarWindow(QMainWindow):
    """Main application window showing one month at a time."""

    def __init__(
        self,
        vm: CalendarVM,
        ingestion: ImageIngestion | None = None,
        settings: Any | None = None,
    ) -> None:
        """Initialize the window.

        Args:
            vm: Calendar view-model owning navigation state and the store
            ingestion: Image ingestion service used by day dialogs
            settings: Settings instance for configuration
        """
        super().__init__()
        self._vm = vm
        self._ingestion = ingestion
        self._settings = settings
        self._thumbs = PhotoThumbnailCache(settings)
        self._theme = THEME_LIGHT
        if settings is not None:
            self._theme = str(settings.get("ui.theme", THEME_LIGHT) or THEME_LIGHT)

        self.menu_controller = MenuController(self)
        self._cells: list[DayCell] = []

        self._setup_ui()
        self._connect_signals()
        self._setup_initial_window_size()
        self._theme = theme.apply_theme(self._theme)
        self.refresh()

    def _setup_ui(self) -> None:
        self.setWindowTitle(WINDOW_TITLE)
        central = QWidget(self)
        root = QVBoxLayout(central)

        header = QHBoxLayout()
        self.title_label = QLabel()
        self.title_label.setObjectName("monthTitle")
        self.btn_prev = QPushButton("‹")
        self.btn_today = QPushButton("Today")
        self.btn_next = QPushButton("›")
        header.addWidget(self.title_label)
        header.addStretch(1)
        header.addWidget(self.btn_prev)
        header.addWidget(self.btn_today)
        header.addWidget(self.btn_next)
        root.addLayout(header)

        grid = QGridLayout()
        grid.setSpacing(GRID_SPACING_PX)
        for col, name in enumerate(self._vm.weekday_headers):
            label = QLabel(name)
            label.setObjectName("weekdayHeader")
            label.setAlignment(Qt.AlignCenter)
            grid.addWidget(label, 0, col)
        for index in range(GRID_SIZE):
            cell = DayCell(central)
            cell.clicked.connect(self.open_day)
            self._cells.append(cell)
            grid.addWidget(cell, 1 + index // GRID_COLUMNS, index % GRID_COLUMNS)
        root.addLayout(grid, 1)

        self.setCentralWidget(central)
        self.menu_controller.setup_menus()

    def _connect_signals(self) -> None:
        self.btn_prev.clicked.connect(self.show_previous_month)
        self.btn_next.clicked.connect(self.show_next_month)
        self.btn_today.clicked.connect(self.show_today)
        self.menu_controller.connect_actions(
            {
                "previous_month": self.show_previous_month,
                "next_month": self.show_next_month,
                "today": self.show_today,
                "toggle_theme": self.toggle_theme,
                "open_latest_log": self._open_latest_log,
                "open_log_directory": open_log_directory,
            }
        )

    def _setup_initial_window_size(self) -> None:
        screen = QApplication.primaryScreen()
        if screen is None:
            return
        avail = screen.availableGeometry()
        self.resize(int(avail.width() * WINDOW_SIZE_RATIO), int(avail.height() * WINDOW_SIZE_RATIO))

    # Public API
    def refresh(self) -> None:
        """Re-render title and all 42 cells from the view-model."""
        self.title_label.setText(self._vm.title)
        for widget, cell in zip(self._cells, self._vm.cells()):
            widget.bind(cell)

    def show_previous_month(self) -> None:
        self._navigate(self._vm.previous_month)

    def show_next_month(self) -> None:
        self._navigate(self._vm.next_month)

    def show_today(self) -> None:
        self._vm.go_to_today()
        self.refresh()

    def toggle_theme(self) -> None:
        self._theme = theme.apply_theme(theme.toggled(self._theme))

    def open_day(self, day: date) -> None:
        """Open the day dialog; refresh the grid when its entry changes."""
        editor = DayEditorVM(self._vm.store, day, ingestion=self._ingestion)
        dlg = DayDialog(editor, self._thumbs, parent=self)
        dlg.changed.connect(lambda _day: self.refresh())
        dlg.exec()
        self.refresh()

    def _navigate(self, step) -> None:
        try:
            step()
        except InvalidDateError as ex:
            logger.warning("Navigation stopped: {}", ex)
            self.statusBar().showMessage(str(ex), 3000)
            return
        self.refresh()

    def show_startup_warning(self, message: str) -> None:
        QMessageBox.warning(self, WINDOW_TITLE, message)

    def _open_latest_log(self) -> None:
        if not open_latest_log():
            logger.info("No log file available to open")
            self.statusBar().showMessage("No log file found", 3000)
