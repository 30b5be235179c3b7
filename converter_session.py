"""Estado del conversor: categoría, par de unidades y búfer de entrada."""

from __future__ import annotations

import math

from app_logging import get_logger
from unit_converter import (
    ConversionCategory,
    UnitConverter,
    default_units,
    format_quantity,
    units,
)


logger = get_logger(__name__)

DECIMAL_POINT = "."
DELETE = "DEL"
CLEAR = "C"


def parse_number(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


class ConverterSession:
    """Mantiene la selección del conversor; el resultado se deriva al leerlo."""

    def __init__(self, converter: UnitConverter | None = None,
                 category: ConversionCategory | str = ConversionCategory.LENGTH):
        self.converter = converter if converter is not None else UnitConverter()
        self._category = ConversionCategory(category)
        self._unit_from, self._unit_to = default_units(self._category)
        self._input = ""

    @property
    def category(self) -> ConversionCategory:
        return self._category

    @property
    def unit_from(self) -> str:
        return self._unit_from

    @property
    def unit_to(self) -> str:
        return self._unit_to

    @property
    def input(self) -> str:
        return self._input

    @property
    def available_units(self) -> tuple[str, ...]:
        return units(self._category)

    @property
    def value(self) -> float:
        return self.converter.convert(
            parse_number(self._input),
            self._unit_from,
            self._unit_to,
            self._category,
        )

    @property
    def result(self) -> str:
        return format_quantity(self.value)

    # ── Acciones ─────────────────────────────────────────────────

    def set_category(self, category: ConversionCategory | str):
        self._category = ConversionCategory(category)
        self._unit_from, self._unit_to = default_units(self._category)
        self._input = ""
        logger.debug("categoría %s: %s -> %s",
                     self._category.value, self._unit_from, self._unit_to)

    def set_units(self, unit_from: str, unit_to: str):
        allowed = self.available_units
        for unit in (unit_from, unit_to):
            if unit not in allowed:
                raise ValueError(
                    f"La unidad '{unit}' no pertenece a {self._category.value}"
                )
        self._unit_from, self._unit_to = unit_from, unit_to

    def swap_units(self):
        self._unit_from, self._unit_to = self._unit_to, self._unit_from

    def set_input(self, text: str):
        self._input = text

    def handle_input(self, token: str):
        if token == CLEAR:
            self._input = ""
        elif token == DELETE:
            self._input = self._input[:-1]
        elif token == DECIMAL_POINT:
            if DECIMAL_POINT not in self._input:
                self._input += token
        elif token.isascii() and token.isdigit():
            self._input += token
        # Los operadores del teclado no hacen nada en modo conversor
