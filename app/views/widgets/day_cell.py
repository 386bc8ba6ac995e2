from __future__ import annotations

from datetime import date

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from app.viewmodels.calendar_vm import DayCellVM
from app.views.constants import (
    CELL_MIN_HEIGHT_PX,
    CELL_MIN_WIDTH_PX,
    CONTENT_DOT_PX,
    TODAY_BADGE_PX,
)


class DayCell(QFrame):
    """One slot of the month grid; blank slots ignore clicks."""

    clicked = Signal(object)  # datetime.date

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._day: date | None = None
        self.setMinimumSize(CELL_MIN_WIDTH_PX, CELL_MIN_HEIGHT_PX)

        root = QVBoxLayout(self)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(2)

        top = QHBoxLayout()
        self.number = QLabel()
        self.number.setAlignment(Qt.AlignCenter)
        self.dot = QLabel()
        self.dot.setObjectName("contentDot")
        self.dot.setFixedSize(CONTENT_DOT_PX, CONTENT_DOT_PX)
        top.addWidget(self.number)
        top.addStretch(1)
        top.addWidget(self.dot)
        root.addLayout(top)

        self.note = QLabel()
        self.note.setObjectName("notePreview")
        self.links = QLabel()
        self.links.setObjectName("linkCount")
        self.photos = QLabel()
        self.photos.setObjectName("photoCount")
        for label in (self.note, self.links, self.photos):
            root.addWidget(label)
        root.addStretch(1)

        self.bind(DayCellVM(day=None))

    def bind(self, cell: DayCellVM) -> None:
        """Render `cell`."""
        self._day = cell.day
        self.setObjectName("blankCell" if cell.is_blank else "dayCell")
        self.setCursor(Qt.ArrowCursor if cell.is_blank else Qt.PointingHandCursor)

        self.number.setText(cell.day_number)
        if cell.is_today:
            self.number.setObjectName("todayBadge")
            self.number.setFixedSize(TODAY_BADGE_PX, TODAY_BADGE_PX)
        else:
            self.number.setObjectName("")
            self.number.setMinimumSize(0, 0)
            self.number.setMaximumSize(16777215, 16777215)

        # The today badge already stands out, so it carries no dot
        self.dot.setVisible(cell.has_content and not cell.is_today)
        self.note.setText(cell.note_preview)
        self.note.setVisible(bool(cell.note_preview))
        self.links.setText(cell.links_label)
        self.links.setVisible(bool(cell.links_label))
        self.photos.setText(cell.photos_label)
        self.photos.setVisible(bool(cell.photos_label))

        # Re-polish so objectName-based style rules apply
        for widget in (self, self.number):
            widget.style().unpolish(widget)
            widget.style().polish(widget)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # noqa: N802
        if self._day is not None and event.button() == Qt.LeftButton:
            self.clicked.emit(self._day)
            return
        super().mousePressEvent(event)
