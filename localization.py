"""Etiquetas fijas y sustitución de dígitos por idioma.

La sustitución de dígitos es una transformación de presentación: el
búfer de las sesiones siempre guarda dígitos ASCII.
"""

from __future__ import annotations

ASCII_DIGITS = "0123456789"

DIGITS = {
    "es": ASCII_DIGITS,
    "en": ASCII_DIGITS,
    "or": "୦୧୨୩୪୫୬୭୮୯",
}

LABELS = {
    "es": {
        "title": "Calculadora",
        "calculator": "Calculadora",
        "converter": "Conversor",
        "history": "Historial",
        "no_history": "Sin historial",
        "clear_history": "Borrar historial",
        "error": "Error",
        "length": "Longitud",
        "weight": "Peso",
        "temperature": "Temperatura",
        "data": "Datos",
    },
    "en": {
        "title": "Calculator",
        "calculator": "Calculator",
        "converter": "Converter",
        "history": "History",
        "no_history": "No history yet",
        "clear_history": "Clear history",
        "error": "Error",
        "length": "Length",
        "weight": "Weight",
        "temperature": "Temperature",
        "data": "Data",
    },
    "or": {
        "title": "ଓଡ଼ିଆ କାଲକୁଲେଟର",
        "calculator": "କାଲକୁଲେଟର",
        "converter": "ରୂପାନ୍ତରକ",
        "history": "ଇତିହାସ",
        "no_history": "କୌଣସି ଇତିହାସ ନାହିଁ",
        "clear_history": "ଇତିହାସ ଲିଭାନ୍ତୁ",
        "error": "ତ୍ରୁଟି",
        "length": "ଦୈର୍ଘ୍ୟ",
        "weight": "ଓଜନ",
        "temperature": "ତାପମାତ୍ରା",
        "data": "ତଥ୍ୟ",
    },
}

LANGUAGES = tuple(LABELS)
DEFAULT_LANGUAGE = "es"


def _check_language(language: str) -> str:
    if language not in LABELS:
        raise ValueError(f"Idioma no soportado: {language}")
    return language


def label(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Texto de ``key`` en ``language``; si falta, el del idioma por defecto."""
    table = LABELS[_check_language(language)]
    return table.get(key, LABELS[DEFAULT_LANGUAGE].get(key, key))


def localize_digits(text: str, language: str) -> str:
    digits = DIGITS[_check_language(language)]
    if digits == ASCII_DIGITS:
        return text
    return text.translate(str.maketrans(ASCII_DIGITS, digits))


def delocalize_digits(text: str, language: str) -> str:
    digits = DIGITS[_check_language(language)]
    if digits == ASCII_DIGITS:
        return text
    return text.translate(str.maketrans(digits, ASCII_DIGITS))


def next_language(language: str) -> str:
    index = LANGUAGES.index(_check_language(language))
    return LANGUAGES[(index + 1) % len(LANGUAGES)]
