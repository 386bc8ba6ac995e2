from __future__ import annotations

from html import escape

from PySide6.QtCore import QSize, Qt, Signal
from PySide6.QtGui import QIcon, QPixmap
from PySide6.QtWidgets import (
    QDialog,
    QFileDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.viewmodels.day_editor_vm import DayEditorVM
from app.views.constants import DIALOG_MIN_WIDTH_PX
from app.views.photo_cache import PhotoThumbnailCache
from infrastructure.image_service import is_data_uri

IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.gif *.webp *.bmp *.heic *.heif)"
PHOTO_GRID_COLUMNS = 3


def _photo_caption(reference: str) -> str:
    return "Uploaded image" if is_data_uri(reference) else reference


class DayDialog(QDialog):
    """View and edit the note, links and photos of one day."""

    changed = Signal(object)  # datetime.date whose entry was saved or cleared

    def __init__(
        self, vm: DayEditorVM, thumbnails: PhotoThumbnailCache, parent: QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self._vm = vm
        self._thumbs = thumbnails
        self.setMinimumWidth(DIALOG_MIN_WIDTH_PX)
        self.setWindowTitle(f"{vm.day:%A, %B} {vm.day.day}, {vm.day.year}")

        root = QVBoxLayout(self)

        header = QHBoxLayout()
        self.title = QLabel(self.windowTitle())
        self.title.setObjectName("monthTitle")
        self.btn_edit = QPushButton("Edit")
        self.btn_close = QPushButton("Close")
        header.addWidget(self.title)
        header.addStretch(1)
        header.addWidget(self.btn_edit)
        header.addWidget(self.btn_close)
        root.addLayout(header)

        self.pages = QStackedWidget()
        self._view_page = QWidget()
        self._view_layout = QVBoxLayout(self._view_page)
        self.pages.addWidget(self._view_page)
        self.pages.addWidget(self._build_edit_page())
        root.addWidget(self.pages)

        self.btn_edit.clicked.connect(self._on_edit)
        self.btn_close.clicked.connect(self.reject)
        self._refresh()

    # Construction
    def _build_edit_page(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)

        layout.addWidget(QLabel("Notes"))
        self.note_edit = QPlainTextEdit()
        self.note_edit.setPlaceholderText("Add your notes here...")
        self.note_edit.textChanged.connect(self._on_note_changed)
        layout.addWidget(self.note_edit)

        layout.addWidget(QLabel("Links"))
        self.link_list = QListWidget()
        layout.addWidget(self.link_list)
        link_row = QHBoxLayout()
        self.link_input = QLineEdit()
        self.link_input.setPlaceholderText("Enter URL")
        self.btn_add_link = QPushButton("Add")
        self.btn_remove_link = QPushButton("Remove")
        link_row.addWidget(self.link_input)
        link_row.addWidget(self.btn_add_link)
        link_row.addWidget(self.btn_remove_link)
        layout.addLayout(link_row)

        layout.addWidget(QLabel("Photos"))
        self.photo_list = QListWidget()
        self.photo_list.setIconSize(QSize(self._thumbs.thumb_size, self._thumbs.thumb_size))
        layout.addWidget(self.photo_list)
        photo_row = QHBoxLayout()
        self.photo_input = QLineEdit()
        self.photo_input.setPlaceholderText("Enter image URL")
        self.btn_add_photo = QPushButton("Add")
        self.btn_remove_photo = QPushButton("Remove")
        photo_row.addWidget(self.photo_input)
        photo_row.addWidget(self.btn_add_photo)
        photo_row.addWidget(self.btn_remove_photo)
        layout.addLayout(photo_row)
        upload_row = QHBoxLayout()
        self.btn_upload = QPushButton("Upload Image")
        upload_row.addWidget(self.btn_upload)
        upload_row.addWidget(QLabel(self._vm.upload_hint))
        upload_row.addStretch(1)
        layout.addLayout(upload_row)

        self.error_label = QLabel()
        self.error_label.setObjectName("errorLabel")
        self.error_label.setWordWrap(True)
        layout.addWidget(self.error_label)

        btns = QHBoxLayout()
        self.btn_clear = QPushButton("Clear Day")
        self.btn_clear.setObjectName("dangerButton")
        self.btn_cancel = QPushButton("Cancel")
        self.btn_save = QPushButton("Save")
        self.btn_save.setDefault(True)
        btns.addWidget(self.btn_clear)
        btns.addStretch(1)
        btns.addWidget(self.btn_cancel)
        btns.addWidget(self.btn_save)
        layout.addLayout(btns)

        self.btn_add_link.clicked.connect(self._on_add_link)
        self.link_input.returnPressed.connect(self._on_add_link)
        self.btn_remove_link.clicked.connect(self._on_remove_link)
        self.btn_add_photo.clicked.connect(self._on_add_photo)
        self.photo_input.returnPressed.connect(self._on_add_photo)
        self.btn_remove_photo.clicked.connect(self._on_remove_photo)
        self.btn_upload.clicked.connect(self._on_upload)
        self.btn_clear.clicked.connect(self._on_clear)
        self.btn_cancel.clicked.connect(self._on_cancel)
        self.btn_save.clicked.connect(self._on_save)
        return page

    # Rendering
    def _refresh(self) -> None:
        self.btn_edit.setVisible(not self._vm.is_edit_mode and self._vm.has_entry)
        if self._vm.is_edit_mode:
            self._render_edit_page()
            self.pages.setCurrentIndex(1)
        else:
            self._render_view_page()
            self.pages.setCurrentIndex(0)

    def _render_view_page(self) -> None:
        while self._view_layout.count():
            item = self._view_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        stored = self._vm.stored
        if stored is None or not stored.has_content():
            self._view_layout.addWidget(QLabel("Nothing saved for this day."))
            return

        if stored.note:
            self._view_layout.addWidget(QLabel("Notes"))
            note = QLabel(stored.note)
            note.setWordWrap(True)
            note.setTextInteractionFlags(Qt.TextSelectableByMouse)
            self._view_layout.addWidget(note)

        if stored.links:
            self._view_layout.addWidget(QLabel("Links"))
            for link in stored.links:
                label = QLabel(f'<a href="{escape(link, quote=True)}">{escape(link)}</a>')
                label.setOpenExternalLinks(True)
                self._view_layout.addWidget(label)

        if stored.photos:
            self._view_layout.addWidget(QLabel("Photos"))
            grid_host = QWidget()
            grid = QGridLayout(grid_host)
            for index, reference in enumerate(stored.photos):
                grid.addWidget(
                    self._photo_widget(reference),
                    index // PHOTO_GRID_COLUMNS,
                    index % PHOTO_GRID_COLUMNS,
                )
            self._view_layout.addWidget(grid_host)
        self._view_layout.addStretch(1)

    def _photo_widget(self, reference: str) -> QLabel:
        label = QLabel()
        label.setAlignment(Qt.AlignCenter)
        image = self._thumbs.thumbnail(reference)
        if image is not None:
            label.setPixmap(QPixmap.fromImage(image))
            label.setToolTip(_photo_caption(reference))
        else:
            label.setText(f'<a href="{escape(reference, quote=True)}">{escape(reference)}</a>')
            label.setOpenExternalLinks(True)
            label.setWordWrap(True)
        return label

    def _render_edit_page(self) -> None:
        if self.note_edit.toPlainText() != self._vm.note:
            self.note_edit.setPlainText(self._vm.note)

        self.link_list.clear()
        self.link_list.addItems(self._vm.links)

        self.photo_list.clear()
        for reference in self._vm.photos:
            item = QListWidgetItem(_photo_caption(reference))
            image = self._thumbs.thumbnail(reference)
            if image is not None:
                item.setIcon(QIcon(QPixmap.fromImage(image)))
            self.photo_list.addItem(item)

        self.error_label.setText(self._vm.error)
        self.error_label.setVisible(bool(self._vm.error))

    # Handlers
    def _on_edit(self) -> None:
        self._vm.begin_edit()
        self._refresh()

    def _on_note_changed(self) -> None:
        self._vm.note = self.note_edit.toPlainText()

    def _on_add_link(self) -> None:
        if self._vm.add_link(self.link_input.text()):
            self.link_input.clear()
        self._render_edit_page()

    def _on_remove_link(self) -> None:
        self._vm.remove_link(self.link_list.currentRow())
        self._render_edit_page()

    def _on_add_photo(self) -> None:
        if self._vm.add_photo_url(self.photo_input.text()):
            self.photo_input.clear()
        self._render_edit_page()

    def _on_remove_photo(self) -> None:
        self._vm.remove_photo(self.photo_list.currentRow())
        self._render_edit_page()

    def _on_upload(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Upload Image", "", IMAGE_FILE_FILTER)
        if not path:
            return
        self._vm.add_photo_file(path)
        self._render_edit_page()

    def _on_save(self) -> None:
        self._vm.note = self.note_edit.toPlainText()
        if self._vm.save():
            logger.info("Saved day {}", self._vm.day.isoformat())
            self.changed.emit(self._vm.day)
        self._refresh()

    def _on_cancel(self) -> None:
        if self._vm.cancel():
            self.reject()
            return
        self._refresh()

    def _on_clear(self) -> None:
        if self._vm.clear_day():
            logger.info("Cleared day {}", self._vm.day.isoformat())
            self.changed.emit(self._vm.day)
            self.accept()
            return
        self._render_edit_page()
