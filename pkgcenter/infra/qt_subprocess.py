from PySide6.QtCore import QCoreApplication

from pkgcenter.infra.process_runner import DEFAULT_CHUNK_SIZE, ProcessRunner


def process_pending_events() -> None:
    """Dispatches pending Qt events so the window stays responsive.

    Does nothing when no Qt application exists (e.g. in headless tests).
    """
    if QCoreApplication.instance() is None:
        return
    QCoreApplication.processEvents()


def create_qt_process_runner(chunk_size: int = DEFAULT_CHUNK_SIZE) -> ProcessRunner:
    """Builds a runner that services the Qt event loop after every chunk read."""
    return ProcessRunner(yield_fn=process_pending_events, chunk_size=chunk_size)
