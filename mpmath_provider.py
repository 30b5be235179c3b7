"""Proveedor matemático con precisión de trabajo extendida (mpmath).

Los literales se construyen como ``mpf`` y el árbol se evalúa con
``workdps`` dígitos significativos; el resultado vuelve a ``float`` antes
de formatearse, de modo que solo se reduce el ruido intermedio
(p. ej. ``sin(π)``) y no se expone precisión arbitraria.
"""

from __future__ import annotations

from formula_evaluator import FormulaMathError

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc


class MPMathProvider:
    """Proveedor matemático basado en mpmath."""

    def __init__(self, working_digits: int = 30):
        self._angle_mode = "rad"
        self._working_digits = max(16, working_digits)

    @property
    def angle_mode(self) -> str:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        self._angle_mode = mode

    @property
    def working_digits(self) -> int:
        return self._working_digits

    def precision(self):
        return mp.workdps(self._working_digits)

    def number(self, text: str):
        return mp.mpf(text)

    def to_real(self, value) -> float:
        if isinstance(value, (mp.mpc, complex)):
            raise FormulaMathError("Resultado complejo")
        if not mp.isfinite(value):
            raise FormulaMathError("Resultado no finito")
        return float(value)

    def _trig(self, fn):
        mode = self._angle_mode

        def wrapped(x):
            value = mp.radians(x) if mode == "deg" else x
            return fn(value)

        return wrapped

    @staticmethod
    def _truncated_mod(x, y):
        # Resto truncado: conserva el signo del dividendo, como math.fmod
        return mp.sign(x) * mp.fmod(abs(x), abs(y))

    def build_namespace(self) -> dict:
        # Las constantes se evalúan dentro de workdps para tomar la precisión actual.
        with self.precision():
            pi = +mp.pi
            e = +mp.e

        return {
            "sin": self._trig(mp.sin),
            "cos": self._trig(mp.cos),
            "tan": self._trig(mp.tan),
            "log": mp.log10,
            "sqrt": mp.sqrt,
            "fmod": self._truncated_mod,
            "pi": pi,
            "e": e,
        }
