# path: src/beam_analysis/services/logging_setup.py
from __future__ import annotations

import logging
import os
import sys
import traceback
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "beam_analysis"


def setup_logging(log_dir: str = "logs", log_name: str = "beam_analysis.log", level: int = logging.INFO) -> logging.Logger:
    """
    Logger raíz del paquete: archivo rotativo + consola.
    Los módulos loguean con logging.getLogger(__name__) (hijos de "beam_analysis").
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, log_name)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Evitar duplicar handlers si se llama más de una vez
    if logger.handlers:
        return logger

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    fh = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)

    logger.addHandler(fh)
    logger.addHandler(sh)

    logger.info("Logging inicializado. Archivo: %s", log_path)
    return logger


def install_excepthook(logger: logging.Logger) -> None:
    """Registra en el log las excepciones no capturadas (y mantiene la salida por consola)."""

    def _excepthook(exctype, value, tb):
        logger.error("Excepción no capturada:\n%s", "".join(traceback.format_exception(exctype, value, tb)))
        sys.__excepthook__(exctype, value, tb)

    sys.excepthook = _excepthook
