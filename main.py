from __future__ import annotations

from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication, QMessageBox
from loguru import logger

from app.viewmodels.calendar_vm import CalendarVM
from app.views.main_window import CalendarWindow
from core.errors import CorruptStateError, PersistenceReadError, PersistenceWriteError
from core.services.annotation_store import AnnotationStore
from infrastructure.blob_storage import JsonFileBlobAdapter
from infrastructure.image_service import ImageIngestionService
from infrastructure.logging import get_log_directory, init_logging
from infrastructure.settings import JsonSettings, expand_path

BASE_DIR = Path(__file__).parent


def _load_store(adapter: JsonFileBlobAdapter) -> tuple[AnnotationStore, str | None]:
    """Load persisted annotations, starting empty if the data file is corrupt.

    Returns the store and an optional warning for the user.

    Raises:
        PersistenceReadError: If the data file exists but cannot be read.
        PersistenceWriteError: If a corrupt data file cannot be moved aside.
    """
    store = AnnotationStore(adapter)
    try:
        store.load()
    except CorruptStateError as ex:
        logger.error("Calendar data at {} is unusable: {}", adapter.path, ex.reason)
        try:
            moved = adapter.quarantine()
        except PersistenceWriteError as move_ex:
            logger.error("Could not set corrupt data aside: {}", move_ex)
            raise
        return store, (
            "Saved calendar data could not be read and was moved to\n"
            f"{moved}\n\nStarting with an empty calendar."
        )
    return store, None


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    init_logging(
        str(expand_path(settings.get("logging.directory"), Path(get_log_directory()))),
        level=str(settings.get("logging.level", "INFO") or "INFO"),
    )

    app = QApplication(sys.argv)

    adapter = JsonFileBlobAdapter(settings.data_file_path())
    logger.info("Using calendar data file {}", adapter.path)
    try:
        store, warning = _load_store(adapter)
    except (PersistenceReadError, PersistenceWriteError) as ex:
        logger.error("Cannot open calendar data at {}: {}", adapter.path, ex)
        QMessageBox.critical(
            None,
            "DayNotes",
            f"Calendar data at\n{adapter.path}\ncould not be opened:\n\n{ex}\n\n"
            "Nothing was changed. Fix the file or its permissions and start again.",
        )
        return 1

    vm = CalendarVM(store)
    win = CalendarWindow(vm=vm, ingestion=ImageIngestionService(settings), settings=settings)
    win.statusBar().showMessage("Ready", 2000)
    win.show()
    if warning:
        win.show_startup_warning(warning)

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
