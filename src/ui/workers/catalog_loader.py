# ui/workers/catalog_loader.py
from PySide6.QtCore import QThread, Signal

from library.catalog_client import CatalogClient, CatalogUnavailable


class CatalogLoader(QThread):
    loaded_signal = Signal(str, str)   # catalog_text, count_text
    failed_signal = Signal(str)        # message

    def __init__(self, client: CatalogClient, parent=None):
        super().__init__(parent)
        self.client = client

    def run(self):
        try:
            payload = self.client.fetch()
        except CatalogUnavailable as e:
            self.failed_signal.emit(str(e))
            return
        self.loaded_signal.emit(payload.text, payload.count_text)
