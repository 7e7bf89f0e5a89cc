import sys

from PySide6.QtWidgets import QApplication

from pkgcenter.application.installed_state import InstalledStateResolver
from pkgcenter.application.package_controller import PackageController
from pkgcenter.application.package_operations import PackageOperations
from pkgcenter.application.privilege_session import PrivilegeSession
from pkgcenter.application.search_pipeline import SearchPipeline
from pkgcenter.config import AppConfig
from pkgcenter.infra.qt_subprocess import create_qt_process_runner
from pkgcenter.logging import init_logger
from pkgcenter.presentation.main_window import MainWindow
from pkgcenter.presentation.password_dialog import prompt_for_password


def build_controller(config: AppConfig, session: PrivilegeSession) -> PackageController:
    """Wires the runner, pipeline and operations for one GUI session."""
    runner = create_qt_process_runner(chunk_size=config.chunk_size)
    commands = config.command_set()
    resolver = InstalledStateResolver(runner, commands)
    pipeline = SearchPipeline(runner, resolver, commands)
    operations = PackageOperations(runner, commands)
    return PackageController(pipeline, operations, session)


def main() -> int:
    config = AppConfig.from_env()
    logger = init_logger(level=config.log_level, log_dir=config.log_dir)
    logger.info(
        f"Using search_tool={config.search_tool} package_db_tool={config.package_db_tool}"
    )

    app = QApplication(sys.argv)

    session = prompt_for_password()
    if session is None:
        logger.info("No password entered, exiting")
        return 0
    app.aboutToQuit.connect(session.clear)

    with session:
        window = MainWindow(build_controller(config, session))
        window.show()
        return app.exec()


if __name__ == "__main__":
    sys.exit(main())
