# path: scripts/run_app.py
import os
import sys

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from beam_analysis.services.logging_setup import install_excepthook, setup_logging

logger = setup_logging()
install_excepthook(logger)

from beam_analysis.ui.main_window import main

if __name__ == "__main__":
    main()
