"""Estado de la calculadora: búfer, resultado, vista previa e historial.

La sesión es la única dueña de su estado mutable. La interfaz le envía
símbolos del teclado y lee ``expression``, ``result``, ``preview`` y
``history`` para pintar.

Estados:
    IDLE            editando; la vista previa se recalcula en cada cambio
    SHOWING_RESULT  el último cálculo tuvo éxito
    SHOWING_ERROR   el último cálculo falló; el búfer queda congelado
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from enum import Enum

from app_logging import get_logger
from calculator_config import CalculatorConfig, build_engine
from calculator_engine import Value
from localization import label


logger = get_logger(__name__)


class SessionState(str, Enum):
    IDLE = "Idle"
    SHOWING_RESULT = "ShowingResult"
    SHOWING_ERROR = "ShowingError"


@dataclass(frozen=True)
class HistoryEntry:
    id: str
    expression: str
    result: str
    timestamp: float


# ── Símbolos especiales del teclado ──────────────────────────────

SQUARE = "x²"          # x²
POWER = "xʸ"           # xʸ
RECIPROCAL = "1/x"
SIGN_TOGGLE = "+/-"
SQUARE_ROOT = "√"      # √
MODULO = "Mod"

MACRO_TOKENS = (SQUARE, POWER, RECIPROCAL, SIGN_TOGGLE, SQUARE_ROOT, MODULO)

BINARY_OPERATORS = ("+", "-", "−", "×", "÷", "*", "/", "^", "%", MODULO)

# Desde un resultado, estas macros operan sobre el valor mostrado
_CONTINUING_MACROS = (SQUARE, POWER, RECIPROCAL, SIGN_TOGGLE, MODULO)


class CalculatorSession:
    """Máquina de estados de la calculadora."""

    def __init__(self, engine=None, config: CalculatorConfig | None = None):
        self.config = (config or CalculatorConfig()).validate()
        self.engine = engine if engine is not None else build_engine(self.config)
        self._expression = ""
        self._result = ""
        self._preview = ""
        self._history: list[HistoryEntry] = []
        self._state = SessionState.IDLE

    # ── Observación (solo lectura) ───────────────────────────────

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def result(self) -> str:
        # La etiqueta de error sigue al idioma vigente, no al del cálculo
        if self._state is SessionState.SHOWING_ERROR:
            return label("error", self.config.language)
        return self._result

    @property
    def preview(self) -> str:
        return self._preview

    @property
    def history(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._history)

    @property
    def state(self) -> SessionState:
        return self._state

    # ── Entrada ──────────────────────────────────────────────────

    def handle_input(self, token: str):
        if not token:
            return

        if self._state is SessionState.SHOWING_ERROR:
            self._expression = token if token not in MACRO_TOKENS else ""
            self._result = ""
            self._state = SessionState.IDLE
            if token in MACRO_TOKENS:
                self._apply_macro(token)
            self._refresh_preview()
            return

        if self._state is SessionState.SHOWING_RESULT:
            previous = self._result
            if previous.startswith("-"):
                # "-3" seguido de "^2" se leería como -(3^2)
                previous = f"({previous})"
            self._result = ""
            self._state = SessionState.IDLE
            if token in BINARY_OPERATORS:
                self._expression = previous + token
                self._refresh_preview()
                return
            if token in _CONTINUING_MACROS:
                self._expression = previous
            else:
                self._expression = ""

        if token in MACRO_TOKENS:
            self._apply_macro(token)
        else:
            self._expression += token
        self._refresh_preview()

    def _apply_macro(self, token: str):
        buf = self._expression
        if token == SQUARE:
            self._expression = f"({buf})^2" if buf else ""
        elif token == POWER:
            self._expression = buf + "^"
        elif token == RECIPROCAL:
            self._expression = f"1/({buf})" if buf else "1/("
        elif token == SIGN_TOGGLE:
            self._expression = f"-({buf})" if buf else "-"
        elif token == SQUARE_ROOT:
            self._expression = buf + "√("
        elif token == MODULO:
            self._expression = buf + MODULO

    def delete_last(self):
        if self._state is SessionState.SHOWING_ERROR:
            self.clear()
            return

        self._expression = self._expression[:-1]
        self._refresh_preview()

    def clear(self):
        self._expression = ""
        self._result = ""
        self._preview = ""
        self._state = SessionState.IDLE

    # ── Cálculo ("=") ────────────────────────────────────────────

    def calculate(self):
        if not self._expression:
            return

        outcome = self.engine.evaluate(self._expression)
        self._preview = ""
        if isinstance(outcome, Value):
            self._result = outcome.text
            self._state = SessionState.SHOWING_RESULT
            self._add_to_history(self._expression, outcome.text)
            logger.debug("%s = %s", self._expression, outcome.text)
        else:
            self._result = ""
            self._state = SessionState.SHOWING_ERROR
            logger.debug("%s -> %s", self._expression, outcome.kind.value)

    def _refresh_preview(self):
        self._preview = ""
        if self._state is not SessionState.IDLE or not self._expression:
            return

        last = self._expression[-1]
        if not (last.isdigit() or last == ")"):
            return

        outcome = self.engine.evaluate(self._expression)
        if isinstance(outcome, Value):
            self._preview = outcome.text

    # ── Historial ────────────────────────────────────────────────

    def _add_to_history(self, expression: str, result: str):
        entry = HistoryEntry(
            id=uuid.uuid4().hex,
            expression=expression,
            result=result,
            timestamp=time.time(),
        )
        self._history.insert(0, entry)
        limit = self.config.history_limit
        if len(self._history) > limit:
            dropped = len(self._history) - limit
            del self._history[limit:]
            logger.debug("historial recortado: %d entradas descartadas", dropped)

    def load_history_item(self, item: HistoryEntry):
        self._expression = item.expression
        self._result = ""
        self._state = SessionState.IDLE
        self._refresh_preview()

    def clear_history(self):
        self._history.clear()
