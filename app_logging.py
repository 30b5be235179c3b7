"""Configuración mínima de logging para la calculadora."""

from __future__ import annotations

import logging

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER = "calculadora"


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Devuelve un logger bajo ``calculadora`` con un único handler de consola."""
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)

    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def set_level(level: int | str) -> None:
    get_logger().setLevel(level)


__all__ = ["get_logger", "set_level"]
