"""Punto de entrada de la calculadora."""

import tkinter as tk

from app_logging import set_level
from calculator_config import CalculatorConfig, build_engine
from calculator_session import CalculatorSession
from calculator_ui import CalculatorApp
from converter_session import ConverterSession


HISTORY_LIMIT = 20
LANGUAGE = "es"
SCIENTIFIC_KEYPAD = True
USE_MPMATH = False
WORKING_DIGITS = 30
THEME = "dark"
LOG_LEVEL = "WARNING"


def build_config() -> CalculatorConfig:
    return CalculatorConfig(
        history_limit=HISTORY_LIMIT,
        language=LANGUAGE,
        scientific=SCIENTIFIC_KEYPAD,
        backend="mpmath" if USE_MPMATH else "float",
        working_digits=WORKING_DIGITS,
        theme=THEME,
    ).validate()


def main():
    set_level(LOG_LEVEL)
    config = build_config()

    root = tk.Tk()
    root.minsize(380, 580)
    session = CalculatorSession(build_engine(config), config)
    CalculatorApp(root, session=session, converter=ConverterSession())
    root.mainloop()


if __name__ == "__main__":
    main()
