#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Development Wizard - property development listing tool.
Main entry point for the application.

Usage:
    python main.py              # start a new development draft
    python main.py <draft_id>   # resume a saved draft
"""

import sys

from PyQt5.QtWidgets import QApplication
from PyQt5.QtCore import Qt

from app.config import Config
from services.draft_api_service import DraftApiService
from services.wizard.auto_save import wait_for_detached_saves
from ui.wizards.development import DevelopmentWizard
from utils.logger import setup_logger


def main():
    """Main application entry point."""

    # Set Qt attributes BEFORE creating QApplication
    QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)

    # Initialize logging
    logger = setup_logger()

    try:
        app = QApplication(sys.argv)
        app.setApplicationName(Config.APP_NAME)
        app.setApplicationVersion(Config.VERSION)
        app.setOrganizationName(Config.ORGANIZATION)

        logger.info("=" * 80)
        logger.info(f"Starting {Config.APP_NAME} {Config.VERSION}")
        logger.info(f"API: {Config.API_BASE_URL} | auto-save every {Config.AUTO_SAVE_DEBOUNCE_MS} ms")
        logger.info("=" * 80)

        api = DraftApiService()
        wizard = DevelopmentWizard(api)

        draft_id = sys.argv[1] if len(sys.argv) > 1 else None
        if draft_id:
            logger.info(f"Resuming draft {draft_id}...")
            wizard.load_draft(draft_id)

        wizard.wizard_published.connect(
            lambda snapshot: logger.info(f">> Published '{snapshot['identity']['name']}'")
        )
        wizard.show()
        logger.info(">> Wizard created and displayed")

        exit_code = app.exec_()
        wait_for_detached_saves()
        logger.info(f"Application closed with exit code: {exit_code}")
        sys.exit(exit_code)

    except Exception as e:
        error_msg = f"Fatal error during application startup: {e}"
        print(f"\n[ERROR] {error_msg}")
        print(f"\nPlease check {Config.LOG_PATH} for details")
        logger.exception(error_msg)
        sys.exit(1)


if __name__ == "__main__":
    main()
