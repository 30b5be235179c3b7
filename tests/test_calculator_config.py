import pytest

from calculator_config import CalculatorConfig, build_engine
from calculator_engine import Value
from formula_evaluator import PythonMathProvider
from mpmath_provider import MPMathProvider


def test_defaults_are_valid():
    config = CalculatorConfig().validate()
    assert config.history_limit == 20
    assert config.language == "es"
    assert config.backend == "float"


@pytest.mark.parametrize(
    "field, value",
    [
        ("history_limit", 30),
        ("language", "fr"),
        ("angle_mode", "grad"),
        ("backend", "decimal"),
        ("working_digits", 4),
        ("theme", "blue"),
    ],
)
def test_invalid_values_are_rejected(field, value):
    config = CalculatorConfig(**{field: value})
    with pytest.raises(ValueError):
        config.validate()


def test_build_engine_selects_provider():
    float_engine = build_engine(CalculatorConfig())
    mp_engine = build_engine(CalculatorConfig(backend="mpmath", working_digits=40))
    assert isinstance(float_engine.provider, PythonMathProvider)
    assert isinstance(mp_engine.provider, MPMathProvider)
    assert mp_engine.provider.working_digits == 40
    assert mp_engine.evaluate("0.1+0.2") == Value("0.3")


def test_build_engine_applies_angle_mode():
    engine = build_engine(CalculatorConfig(angle_mode="deg"))
    assert engine.angle_mode == "deg"
    assert engine.evaluate("sin(90)") == Value("1")
