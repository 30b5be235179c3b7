"""Configuración explícita de la calculadora.

Sustituye a los interruptores globales (tema, sonido, idioma) por un
objeto que la capa de composición crea y pasa a cada componente.
"""

from __future__ import annotations

from dataclasses import dataclass

from calculator_engine import CalculatorEngine
from formula_evaluator import PythonMathProvider
from localization import DEFAULT_LANGUAGE, LANGUAGES


HISTORY_LIMITS = (20, 50)
BACKENDS = ("float", "mpmath")
THEMES = ("light", "dark")


@dataclass
class CalculatorConfig:
    history_limit: int = 20
    language: str = DEFAULT_LANGUAGE
    scientific: bool = True
    angle_mode: str = "rad"       # "rad" o "deg"
    backend: str = "float"        # "float" o "mpmath"
    working_digits: int = 30      # solo para backend "mpmath"
    theme: str = "dark"
    sound_enabled: bool = False

    def validate(self) -> "CalculatorConfig":
        if self.history_limit not in HISTORY_LIMITS:
            raise ValueError(f"history_limit debe ser uno de {HISTORY_LIMITS}")
        if self.language not in LANGUAGES:
            raise ValueError(f"Idioma no soportado: {self.language}")
        if self.angle_mode not in ("rad", "deg"):
            raise ValueError("angle_mode debe ser 'rad' o 'deg'")
        if self.backend not in BACKENDS:
            raise ValueError(f"backend debe ser uno de {BACKENDS}")
        if not (16 <= int(self.working_digits) <= 200):
            raise ValueError("working_digits debe estar entre 16 y 200")
        if self.theme not in THEMES:
            raise ValueError(f"theme debe ser uno de {THEMES}")
        return self


def build_engine(config: CalculatorConfig | None = None) -> CalculatorEngine:
    """Crea un CalculatorEngine con el proveedor que indica ``config``."""
    config = (config or CalculatorConfig()).validate()
    if config.backend == "mpmath":
        from mpmath_provider import MPMathProvider

        provider = MPMathProvider(working_digits=config.working_digits)
    else:
        provider = PythonMathProvider()

    engine = CalculatorEngine(provider, scientific=config.scientific)
    engine.angle_mode = config.angle_mode
    return engine
