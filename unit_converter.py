"""Conversión de unidades por categorías con tablas de factores fijas.

Cada categoría lineal expresa sus unidades como múltiplos de una unidad
base (metro, gramo, byte). La temperatura es afín y pasa siempre por
grados Celsius.
"""

from __future__ import annotations

import math
from enum import Enum


class ConversionCategory(str, Enum):
    LENGTH = "length"
    WEIGHT = "weight"
    TEMPERATURE = "temperature"
    DATA = "data"


RATES: dict[ConversionCategory, dict[str, float]] = {
    ConversionCategory.LENGTH: {
        "mm": 0.001,
        "cm": 0.01,
        "m": 1.0,
        "km": 1000.0,
        "in": 0.0254,
        "ft": 0.3048,
        "yd": 0.9144,
        "mi": 1609.344,
    },
    ConversionCategory.WEIGHT: {
        "mg": 0.001,
        "g": 1.0,
        "kg": 1000.0,
        "t": 1_000_000.0,
        "oz": 28.349523125,
        "lb": 453.59237,
    },
    ConversionCategory.DATA: {
        "bit": 0.125,
        "B": 1.0,
        "KB": 1024.0,
        "MB": 1024.0 ** 2,
        "GB": 1024.0 ** 3,
        "TB": 1024.0 ** 4,
    },
}

TEMPERATURE_UNITS = ("C", "F", "K")

DEFAULT_UNITS: dict[ConversionCategory, tuple[str, str]] = {
    ConversionCategory.LENGTH: ("m", "ft"),
    ConversionCategory.WEIGHT: ("kg", "lb"),
    ConversionCategory.TEMPERATURE: ("C", "F"),
    ConversionCategory.DATA: ("MB", "GB"),
}

QUANTITY_DECIMALS = 4


def units(category: ConversionCategory | str) -> tuple[str, ...]:
    """Unidades disponibles en ``category``, en orden de menú."""
    category = ConversionCategory(category)
    if category is ConversionCategory.TEMPERATURE:
        return TEMPERATURE_UNITS
    return tuple(RATES[category])


def default_units(category: ConversionCategory | str) -> tuple[str, str]:
    return DEFAULT_UNITS[ConversionCategory(category)]


def format_quantity(value: float) -> str:
    """Enteros sin decimales; el resto con 4 decimales sin ceros finales."""
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if value.is_integer():
        return str(int(value))

    text = f"{value:.{QUANTITY_DECIMALS}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


class UnitConverter:
    """Convierte valores entre unidades de una misma categoría.

    No valida las unidades: una unidad desconocida o de otra categoría
    produce ``NaN``. Quien llama debe limitar el menú a la categoría activa.
    """

    def convert(
        self,
        value: float,
        from_unit: str,
        to_unit: str,
        category: ConversionCategory | str,
    ) -> float:
        category = ConversionCategory(category)
        value = float(value)
        if category is ConversionCategory.TEMPERATURE:
            return self._from_celsius(self._to_celsius(value, from_unit), to_unit)

        rates = RATES[category]
        return value * rates.get(from_unit, math.nan) / rates.get(to_unit, math.nan)

    @staticmethod
    def _to_celsius(value: float, unit: str) -> float:
        if unit == "C":
            return value
        if unit == "F":
            return (value - 32) * 5 / 9
        if unit == "K":
            return value - 273.15
        return math.nan

    @staticmethod
    def _from_celsius(value: float, unit: str) -> float:
        if unit == "C":
            return value
        if unit == "F":
            return value * 9 / 5 + 32
        if unit == "K":
            return value + 273.15
        return math.nan
