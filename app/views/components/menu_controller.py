"""MenuController: Manages menu creation and action connections."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMenuBar


class MenuController:
    """Manages main window menu creation and action connections.

    This class encapsulates all menu-related functionality including:
    - Menu structure creation
    - Action-to-handler connection management
    """

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to create menus for
        """
        self.window = main_window
        self.actions: dict[str, QAction] = {}

    def setup_menus(self) -> dict[str, QAction]:
        """Create all menus and return action references.

        Returns:
            Dictionary mapping action names to QAction instances
        """
        menubar = QMenuBar(self.window)

        # File Menu
        file_menu = menubar.addMenu("File")
        self.actions["exit"] = file_menu.addAction("Exit")
        self.actions["exit"].setShortcut(QKeySequence.Quit)

        # Go Menu
        go_menu = menubar.addMenu("Go")
        self.actions["previous_month"] = go_menu.addAction("Previous Month")
        self.actions["previous_month"].setShortcut(QKeySequence("Ctrl+Left"))
        self.actions["next_month"] = go_menu.addAction("Next Month")
        self.actions["next_month"].setShortcut(QKeySequence("Ctrl+Right"))
        self.actions["today"] = go_menu.addAction("Today")
        self.actions["today"].setShortcut(QKeySequence("Ctrl+T"))

        # View Menu
        view_menu = menubar.addMenu("View")
        self.actions["toggle_theme"] = view_menu.addAction("Toggle Dark Mode")

        # Log Menu
        log_menu = menubar.addMenu("Log")
        self.actions["open_latest_log"] = log_menu.addAction("Open Latest Log")
        log_menu.addSeparator()
        self.actions["open_log_directory"] = log_menu.addAction("Open Log Directory")

        self.window.setMenuBar(menubar)
        return self.actions

    def connect_actions(self, handlers: dict[str, Callable]) -> None:
        """Connect menu actions to their handler methods.

        Args:
            handlers: Dictionary mapping action names to handler callables
        """
        for name, action in self.actions.items():
            if name in handlers:
                action.triggered.connect(handlers[name])

        if "exit" not in handlers:
            self.actions["exit"].triggered.connect(self.window.close)

    def get_action(self, name: str) -> QAction | None:
        """Get a specific action by name."""
        return self.actions.get(name)
