"""
Motor de cálculo para la calculadora.

Este módulo provee la clase CalculatorEngine que procesa y evalúa
expresiones matemáticas. Está diseñado como módulo independiente
del resto de la aplicación: recibe la cadena del teclado y devuelve
un resultado etiquetado, sin tocar el estado de ninguna sesión.

Contrato de interfaz:
    - evaluate(expression: str) -> Value | Failure
    - angle_mode: propiedad 'rad' | 'deg'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app_logging import get_logger
from formula_evaluator import (
    FormulaEvaluator,
    FormulaMathError,
    FormulaSyntaxError,
    PythonMathProvider,
)


logger = get_logger(__name__)

RESULT_DECIMALS = 10


class FailureKind(str, Enum):
    SYNTAX = "SyntaxError"
    MATH = "MathError"


@dataclass(frozen=True)
class Value:
    text: str


@dataclass(frozen=True)
class Failure:
    kind: FailureKind


class CalculatorEngine:
    """Evalúa expresiones del teclado y formatea el resultado."""

    def __init__(self, provider=None, scientific: bool = True):
        self._provider = provider if provider is not None else PythonMathProvider()
        self._evaluator = FormulaEvaluator(self._provider, scientific=scientific)

    @property
    def provider(self):
        return self._provider

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> str:
        return self._provider.angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        self._provider.angle_mode = mode

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> Value | Failure:
        """Evalúa la expresión; nunca lanza por entradas del usuario.

        Devuelve ``Value`` con el número formateado, o ``Failure`` con
        ``FailureKind.SYNTAX`` (expresión mal formada) o
        ``FailureKind.MATH`` (división por cero, NaN, desbordamiento).
        """
        try:
            result = self._evaluator.evaluate(expression)
        except FormulaSyntaxError as exc:
            logger.debug("sintaxis inválida en %r: %s", expression, exc)
            return Failure(FailureKind.SYNTAX)
        except FormulaMathError as exc:
            logger.debug("error matemático en %r: %s", expression, exc)
            return Failure(FailureKind.MATH)
        return Value(self.format_result(result))

    # ── Formato del resultado ────────────────────────────────────

    @staticmethod
    def format_result(value: float) -> str:
        rounded = round(value, RESULT_DECIMALS)
        if rounded == 0:
            return "0"
        if rounded.is_integer():
            return str(int(rounded))

        text = repr(rounded)
        if "e" in text:
            # Sin notación exponencial: el resultado debe poder reutilizarse
            text = f"{rounded:.{RESULT_DECIMALS}f}".rstrip("0").rstrip(".")
        return text
