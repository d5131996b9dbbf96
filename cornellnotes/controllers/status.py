from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from cornellnotes.utils.config import STATUS_TIMEOUT_MS


class TransientStatus(QObject):
    """A user-visible notice that clears itself after a timeout."""

    changed = pyqtSignal(str)

    def __init__(self, timeout_ms: int = STATUS_TIMEOUT_MS, parent=None):
        super().__init__(parent)
        self.timeout_ms = timeout_ms
        self.message = ""

    def show(self, message: str) -> None:
        self.message = message
        self.changed.emit(message)
        QTimer.singleShot(self.timeout_ms, lambda: self._expire(message))

    def _expire(self, message: str) -> None:
        # A newer notice replaced this one; leave it alone
        if self.message != message:
            return
        self.message = ""
        self.changed.emit("")
