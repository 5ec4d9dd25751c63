import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.config import AppConfig, ConfigError
from core.preferences import PreferenceStore, QSettingsStore
from core.session import PlayerSession
from core.state import AppState, Notify
from library.catalog_client import AssetResolver
from player.qt_device import QtMediaDevice
from ui.main_window import MainWindow

logger = logging.getLogger("shuffle_player")


def init_app_state(config: AppConfig) -> AppState:
    app_state = AppState()
    app_state.config = config

    store = QSettingsStore(config.settings_org, config.settings_app)
    app_state.prefs = PreferenceStore(store, namespace=config.variant)

    device = QtMediaDevice()
    app_state.session = PlayerSession(
        app_state,
        device,
        app_state.prefs,
        resolve_asset=AssetResolver(config.asset_template),
        recovery_delay_ms=config.recovery_delay_ms,
    )
    device.setParent(app_state.session)
    return app_state


def main() -> int:
    try:
        config = AppConfig.from_env()
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error("Invalid configuration: %s", e)
        return 2

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    qt_app = QApplication(sys.argv)

    app_state = init_app_state(config)
    if config.browsable:
        app_state.queued_notifications.append(
            Notify(message="Double-click a track to play it", notify_type="info")
        )

    main_window = MainWindow(app_state)
    main_window.show()

    return qt_app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
