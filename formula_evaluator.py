"""Parseo y evaluación de expresiones para la calculadora.

La cadena que construye el teclado (con glifos ``× ÷ % π e ^ √(``) se
tokeniza y se convierte en un árbol de expresión mediante un parser
descendente recursivo. El árbol se evalúa numéricamente a través de un
proveedor matemático intercambiable; nunca se ejecuta la cadena como
código.

Precedencia (de menor a mayor):
    + -            binarios, asociativos a la izquierda
    * / Mod        binarios, asociativos a la izquierda (incluye producto implícito)
    + -            unarios
    ^              potencia, asociativa a la derecha
    %              postfijo, divide entre 100
"""

from __future__ import annotations

import contextlib
import math
import re
from dataclasses import dataclass


class FormulaError(Exception):
    """Error base del evaluador de fórmulas."""


class FormulaSyntaxError(FormulaError, ValueError):
    """La expresión no se puede interpretar."""


class FormulaMathError(FormulaError, ArithmeticError):
    """La expresión es válida pero su valor no es un real finito."""


class PythonMathProvider:
    """Provee funciones y constantes matemáticas sobre ``float``."""

    def __init__(self):
        self._angle_mode = "rad"

    @property
    def angle_mode(self) -> str:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        self._angle_mode = mode

    def precision(self):
        return contextlib.nullcontext()

    def number(self, text: str):
        return float(text)

    def to_real(self, value) -> float:
        if isinstance(value, complex):
            raise FormulaMathError("Resultado complejo")
        return float(value)

    def build_namespace(self) -> dict:
        mode = self._angle_mode

        def _trig(fn):
            def w(x):
                return fn(math.radians(x) if mode == "deg" else x)

            return w

        return {
            "sin": _trig(math.sin),
            "cos": _trig(math.cos),
            "tan": _trig(math.tan),
            "log": math.log10,
            "sqrt": math.sqrt,
            "fmod": math.fmod,
            "pi": math.pi,
            "e": math.e,
        }


# ── Tokens ───────────────────────────────────────────────────────

NUMBER = "NUMBER"
CONST = "CONST"
FUNC = "FUNC"
OP = "OP"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
END = "END"


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int


# ── Árbol de expresión ───────────────────────────────────────────

@dataclass(frozen=True)
class Num:
    text: str


@dataclass(frozen=True)
class Const:
    name: str


@dataclass(frozen=True)
class Unary:
    op: str
    operand: object


@dataclass(frozen=True)
class Binary:
    op: str
    left: object
    right: object


@dataclass(frozen=True)
class Percent:
    operand: object


@dataclass(frozen=True)
class Call:
    name: str
    argument: object


class FormulaEvaluator:
    """Transforma expresiones de UI y evalúa su valor numérico."""

    _NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")
    _IDENT_RE = re.compile(r"[A-Za-z]+")

    _OPERATOR_GLYPHS = {
        "+": "+",
        "-": "-",
        "−": "-",
        "*": "*",
        "×": "*",
        "/": "/",
        "÷": "/",
        "^": "^",
        "%": "%",
    }
    _CONSTANT_IDENTIFIERS = {"e": "e", "pi": "pi", "π": "pi"}
    _BASIC_FUNCTIONS = {"sqrt"}
    _SCIENTIFIC_FUNCTIONS = {"sin", "cos", "tan", "log"}

    def __init__(self, provider=None, scientific: bool = True):
        self._provider = provider if provider is not None else PythonMathProvider()
        self._functions = set(self._BASIC_FUNCTIONS)
        if scientific:
            self._functions |= self._SCIENTIFIC_FUNCTIONS

    def evaluate(self, expression: str) -> float:
        """Evalúa ``expression`` y devuelve un real finito.

        Raises:
            FormulaSyntaxError: la expresión está mal formada o demasiado anidada.
            FormulaMathError: división por cero, desbordamiento, NaN o
                resultado complejo.
        """
        tree = self.parse(expression)
        namespace = self._provider.build_namespace()

        with self._provider.precision():
            try:
                value = self._provider.to_real(self._eval(tree, namespace))
            except FormulaError:
                raise
            except ZeroDivisionError as exc:
                raise FormulaMathError("División por cero") from exc
            except RecursionError as exc:
                raise FormulaSyntaxError("Expresión demasiado anidada") from exc
            except (OverflowError, ValueError, TypeError) as exc:
                raise FormulaMathError(f"Error matemático: {exc}") from exc

        if not math.isfinite(value):
            raise FormulaMathError("Resultado no finito")
        return value

    # ── Tokenización ─────────────────────────────────────────────

    def tokenize(self, expression: str) -> list[Token]:
        tokens = []
        pos = 0
        length = len(expression)

        while pos < length:
            ch = expression[pos]

            if ch.isspace():
                pos += 1
                continue

            match = self._NUMBER_RE.match(expression, pos)
            if match:
                if tokens and tokens[-1].kind == NUMBER:
                    raise FormulaSyntaxError(f"Número inesperado en {pos}")
                tokens.append(Token(NUMBER, match.group(), pos))
                pos = match.end()
                continue

            if ch in self._OPERATOR_GLYPHS:
                tokens.append(Token(OP, self._OPERATOR_GLYPHS[ch], pos))
            elif ch == "(":
                tokens.append(Token(LPAREN, ch, pos))
            elif ch == ")":
                tokens.append(Token(RPAREN, ch, pos))
            elif ch == "π":
                tokens.append(Token(CONST, "pi", pos))
            elif ch == "√":
                tokens.append(Token(FUNC, "sqrt", pos))
            else:
                name = self._match_identifier(expression, pos)
                tokens.append(self._identifier_token(name, pos))
                pos += len(name)
                continue
            pos += 1

        tokens.append(Token(END, "", length))
        return tokens

    def _match_identifier(self, expression: str, pos: int) -> str:
        # Coincidencia más larga: "esin(" se lee como e·sin(
        known = sorted(
            [*self._CONSTANT_IDENTIFIERS, "Mod", *self._functions],
            key=len,
            reverse=True,
        )
        for name in known:
            if expression.startswith(name, pos):
                return name

        match = self._IDENT_RE.match(expression, pos)
        if match:
            raise FormulaSyntaxError(f"Identificador no permitido: {match.group()}")
        raise FormulaSyntaxError(f"Carácter inválido '{expression[pos]}' en {pos}")

    def _identifier_token(self, name: str, pos: int) -> Token:
        if name in self._CONSTANT_IDENTIFIERS:
            return Token(CONST, self._CONSTANT_IDENTIFIERS[name], pos)
        if name == "Mod":
            return Token(OP, "Mod", pos)
        return Token(FUNC, name, pos)

    # ── Parser descendente recursivo ─────────────────────────────

    def parse(self, expression: str):
        if not expression or not expression.strip():
            raise FormulaSyntaxError("Expresión vacía")

        self._tokens = self.tokenize(expression)
        self._index = 0
        try:
            tree = self._parse_sum()
        except RecursionError as exc:
            raise FormulaSyntaxError("Expresión demasiado anidada") from exc
        tok = self._peek()
        if tok.kind != END:
            raise FormulaSyntaxError(f"Símbolo inesperado '{tok.text}' en {tok.pos}")
        return tree

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        tok = self._tokens[self._index]
        self._index += 1
        return tok

    def _expect(self, kind: str) -> Token:
        tok = self._peek()
        if tok.kind != kind:
            if tok.kind == END:
                raise FormulaSyntaxError("Expresión incompleta")
            raise FormulaSyntaxError(f"Símbolo inesperado '{tok.text}' en {tok.pos}")
        return self._advance()

    def _parse_sum(self):
        node = self._parse_product()
        while self._peek().kind == OP and self._peek().text in ("+", "-"):
            op = self._advance().text
            node = Binary(op, node, self._parse_product())
        return node

    def _parse_product(self):
        node = self._parse_unary()
        while True:
            tok = self._peek()
            if tok.kind == OP and tok.text in ("*", "/", "Mod"):
                self._advance()
                node = Binary(tok.text, node, self._parse_unary())
            elif tok.kind in (NUMBER, CONST, FUNC, LPAREN):
                # Producto implícito: 2π, 2(3), (1)(2), 3√(4)
                node = Binary("*", node, self._parse_unary())
            else:
                return node

    def _parse_unary(self):
        tok = self._peek()
        if tok.kind == OP and tok.text in ("+", "-"):
            self._advance()
            return Unary(tok.text, self._parse_unary())
        return self._parse_power()

    def _parse_power(self):
        base = self._parse_postfix()
        if self._peek().kind == OP and self._peek().text == "^":
            self._advance()
            return Binary("^", base, self._parse_unary())
        return base

    def _parse_postfix(self):
        node = self._parse_primary()
        while self._peek().kind == OP and self._peek().text == "%":
            self._advance()
            node = Percent(node)
        return node

    def _parse_primary(self):
        tok = self._peek()

        if tok.kind == NUMBER:
            self._advance()
            return Num(tok.text)

        if tok.kind == CONST:
            self._advance()
            return Const(tok.text)

        if tok.kind == FUNC:
            self._advance()
            if self._peek().kind != LPAREN:
                raise FormulaSyntaxError(f"Falta '(' después de {tok.text}")
            return Call(tok.text, self._parse_group())

        if tok.kind == LPAREN:
            return self._parse_group()

        if tok.kind == END:
            raise FormulaSyntaxError("Expresión incompleta")
        raise FormulaSyntaxError(f"Símbolo inesperado '{tok.text}' en {tok.pos}")

    def _parse_group(self):
        self._expect(LPAREN)
        if self._peek().kind == RPAREN:
            raise FormulaSyntaxError("Paréntesis vacíos")
        node = self._parse_sum()
        self._expect(RPAREN)
        return node

    # ── Evaluación del árbol ─────────────────────────────────────

    def _eval(self, node, namespace: dict):
        if isinstance(node, Num):
            return self._provider.number(node.text)

        if isinstance(node, Const):
            return namespace[node.name]

        if isinstance(node, Unary):
            value = self._eval(node.operand, namespace)
            return -value if node.op == "-" else value

        if isinstance(node, Percent):
            return self._eval(node.operand, namespace) / 100

        if isinstance(node, Call):
            return namespace[node.name](self._eval(node.argument, namespace))

        # Las cadenas "1+1+1+..." forman un espinazo izquierdo profundo;
        # se recorre en bucle para no depender del límite de recursión.
        chain = []
        while isinstance(node, Binary):
            chain.append(node)
            node = node.left
        value = self._eval(node, namespace)
        for binary in reversed(chain):
            value = self._apply(binary.op, value, self._eval(binary.right, namespace), namespace)
        return value

    @staticmethod
    def _apply(op: str, left, right, namespace: dict):
        if op == "+":
            return left + right
        if op == "-":
            return left - right
        if op == "*":
            return left * right
        if op == "/":
            return left / right
        if op == "Mod":
            if right == 0:
                raise ZeroDivisionError("Módulo por cero")
            return namespace["fmod"](left, right)
        return left ** right
