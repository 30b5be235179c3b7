"""
Interfaz gráfica de la calculadora y del conversor de unidades.

Usa tkinter. Es solo presentación: cada pulsación se traduce a una
llamada sobre CalculatorSession o ConverterSession y después se vuelve
a pintar su estado. Los dígitos locales se aplican únicamente al pintar.
"""

import tkinter as tk
from tkinter import font as tkfont
from tkinter import ttk

from calculator_config import CalculatorConfig
from calculator_session import CalculatorSession
from converter_session import ConverterSession
from localization import delocalize_digits, label, localize_digits, next_language
from unit_converter import ConversionCategory


class CalculatorApp:
    """Ventana principal: calculadora, conversor e historial."""

    # ── Paletas de colores ───────────────────────────────────────
    PALETTES = {
        "dark": {
            "bg":         "#1E1E2E",
            "display_bg": "#181825",
            "number":     "#313244",
            "number_fg":  "#CDD6F4",
            "operator":   "#F38BA8",
            "operator_fg": "#1E1E2E",
            "scientific": "#45475A",
            "scientific_fg": "#CDD6F4",
            "action":     "#585B70",
            "action_fg":  "#CDD6F4",
            "equals":     "#89B4FA",
            "equals_fg":  "#1E1E2E",
            "expr_fg":    "#BAC2DE",
            "preview_fg": "#7F849C",
            "result_fg":  "#A6E3A1",
        },
        "light": {
            "bg":         "#EFF1F5",
            "display_bg": "#FFFFFF",
            "number":     "#DCE0E8",
            "number_fg":  "#4C4F69",
            "operator":   "#D20F39",
            "operator_fg": "#FFFFFF",
            "scientific": "#CCD0DA",
            "scientific_fg": "#4C4F69",
            "action":     "#BCC0CC",
            "action_fg":  "#4C4F69",
            "equals":     "#1E66F5",
            "equals_fg":  "#FFFFFF",
            "expr_fg":    "#5C5F77",
            "preview_fg": "#8C8FA1",
            "result_fg":  "#40A02B",
        },
    }

    # ── Teclado científico ───────────────────────────────────────
    #  (texto, símbolo enviado a la sesión)

    ADVANCED_BUTTONS = [
        ("√", "√"), ("x²", "x²"), ("xʸ", "xʸ"),
        ("1/x", "1/x"), ("(", "("), (")", ")"), ("Mod", "Mod"), ("+/-", "+/-"),
    ]

    SCIENCE_BUTTONS = [
        ("sin", "sin("), ("cos", "cos("), ("tan", "tan("), ("log", "log("),
        ("π", "π"), ("e", "e"), ("^", "^"), ("%", "%"),
    ]

    # ── Teclado principal ────────────────────────────────────────
    #  Cada fila es una lista de (texto, acción, tipo_color)

    KEYPAD = [
        [("C", "clear", "action"), ("÷", "insert:÷", "operator"),
         ("×", "insert:×", "operator"), ("⌫", "backspace", "action")],

        [("7", "insert:7", "number"), ("8", "insert:8", "number"),
         ("9", "insert:9", "number"), ("-", "insert:-", "operator")],

        [("4", "insert:4", "number"), ("5", "insert:5", "number"),
         ("6", "insert:6", "number"), ("+", "insert:+", "operator")],

        [("1", "insert:1", "number"), ("2", "insert:2", "number"),
         ("3", "insert:3", "number"), ("%", "insert:%", "operator")],

        [(".", "insert:.", "number"), ("0", "insert:0", "number"),
         ("=", "equals", "equals")],
    ]

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, session: CalculatorSession = None,
                 converter: ConverterSession = None):
        self.root = root
        self.session = session if session is not None else CalculatorSession()
        self.converter = converter if converter is not None else ConverterSession()
        self.config: CalculatorConfig = self.session.config
        self._mode = "calculator"

        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self._init_fonts()
        self._create_toggle_bar()
        self._create_display()
        self._create_converter_bar()
        self._create_science_panel()
        self._create_keypad()
        self._create_history_panel()
        self._bind_keyboard()
        self._render()

    @property
    def C(self) -> dict:
        return self.PALETTES[self.config.theme]

    @property
    def _lang(self) -> str:
        return self.config.language

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr    = tkfont.Font(family="Consolas", size=16)
        self._f_preview = tkfont.Font(family="Consolas", size=12)
        self._f_result  = tkfont.Font(family="Consolas", size=22, weight="bold")
        self._f_btn     = tkfont.Font(family="Segoe UI", size=15)
        self._f_func    = tkfont.Font(family="Segoe UI", size=12)
        self._f_small   = tkfont.Font(family="Segoe UI", size=11)

    # ── Barra superior: modo, idioma, tema, sonido, historial ────

    def _create_toggle_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(6, 2))
        self._toggle_frame = frame

        self.mode_btn = self._small_button(frame, self._toggle_mode)
        self.mode_btn.pack(side="left", padx=(0, 4))
        self.lang_btn = self._small_button(frame, self._toggle_language)
        self.lang_btn.pack(side="left", padx=(0, 4))
        self.theme_btn = self._small_button(frame, self._toggle_theme)
        self.theme_btn.pack(side="left", padx=(0, 4))
        self.sound_btn = self._small_button(frame, self._toggle_sound)
        self.sound_btn.pack(side="left")
        self.history_btn = self._small_button(frame, self._toggle_history)
        self.history_btn.pack(side="right")

    def _small_button(self, parent, command) -> tk.Button:
        return tk.Button(
            parent, font=self._f_small, width=7,
            bg=self.C["action"], fg=self.C["action_fg"],
            activebackground=self.C["action"], relief="flat",
            command=command,
        )

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=2)
        self._display_frame = frame

        self.expr_var = tk.StringVar()
        self.preview_var = tk.StringVar()
        self.result_var = tk.StringVar()

        self.expr_label = tk.Label(
            frame, textvariable=self.expr_var, font=self._f_expr,
            bg=self.C["display_bg"], fg=self.C["expr_fg"], anchor="e",
        )
        self.expr_label.pack(fill="x", pady=(4, 0))

        self.preview_label = tk.Label(
            frame, textvariable=self.preview_var, font=self._f_preview,
            bg=self.C["display_bg"], fg=self.C["preview_fg"], anchor="e",
        )
        self.preview_label.pack(fill="x")

        self.result_label = tk.Label(
            frame, textvariable=self.result_var, font=self._f_result,
            bg=self.C["display_bg"], fg=self.C["result_fg"], anchor="e",
        )
        self.result_label.pack(fill="x", pady=(2, 4))

    # ── Selector del conversor ───────────────────────────────────

    def _create_converter_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        self._converter_frame = frame

        self.category_var = tk.StringVar()
        self.category_box = ttk.Combobox(frame, textvariable=self.category_var,
                                         state="readonly", width=12)
        self.category_box.bind("<<ComboboxSelected>>", self._on_category)
        self.category_box.pack(side="left", padx=(0, 6))

        self.from_var = tk.StringVar()
        self.from_box = ttk.Combobox(frame, textvariable=self.from_var,
                                     state="readonly", width=5)
        self.from_box.bind("<<ComboboxSelected>>", self._on_units)
        self.from_box.pack(side="left")

        tk.Button(
            frame, text="⇄", font=self._f_small,
            bg=self.C["action"], fg=self.C["action_fg"], relief="flat",
            command=self._swap_units,
        ).pack(side="left", padx=4)

        self.to_var = tk.StringVar()
        self.to_box = ttk.Combobox(frame, textvariable=self.to_var,
                                   state="readonly", width=5)
        self.to_box.bind("<<ComboboxSelected>>", self._on_units)
        self.to_box.pack(side="left")

    # ── Panel de funciones científicas ───────────────────────────

    def _create_science_panel(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=2)
        self._science_frame = frame
        for col in range(4):
            frame.columnconfigure(col, weight=1, uniform="sci")

        buttons = list(self.ADVANCED_BUTTONS)
        if self.config.scientific:
            buttons += self.SCIENCE_BUTTONS

        for idx, (text, token) in enumerate(buttons):
            row, col = divmod(idx, 4)
            tk.Button(
                frame, text=text, font=self._f_func,
                bg=self.C["scientific"], fg=self.C["scientific_fg"],
                activebackground=self.C["action"], relief="flat",
                command=lambda t=token: self._on_token(t),
            ).grid(row=row, column=col, sticky="nsew", padx=2, pady=2, ipady=4)

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))
        self._keypad_frame = frame
        self._digit_buttons: list[tuple[tk.Button, str]] = []

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, action, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["action"], relief="flat",
                    command=lambda a=action: self._on_key(a),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                if text.isdigit():
                    self._digit_buttons.append((btn, text))
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón (generalmente '=')
        spans[-1] += extra
        return spans

    # ── Historial ────────────────────────────────────────────────

    def _create_history_panel(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        self._history_frame = frame
        self._history_visible = False

        self.history_list = tk.Listbox(
            frame, font=self._f_small, height=8,
            bg=self.C["display_bg"], fg=self.C["expr_fg"],
            relief="flat", activestyle="none",
        )
        self.history_list.pack(fill="both", expand=True)
        self.history_list.bind("<<ListboxSelect>>", self._on_history_select)

        self.clear_history_btn = tk.Button(
            frame, font=self._f_small,
            bg=self.C["action"], fg=self.C["action_fg"], relief="flat",
            command=self._clear_history,
        )
        self.clear_history_btn.pack(fill="x", pady=(4, 0))

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Return>", lambda _e: self._on_key("equals"))
        self.root.bind("<KP_Enter>", lambda _e: self._on_key("equals"))
        self.root.bind("<BackSpace>", lambda _e: self._on_key("backspace"))
        self.root.bind("<Escape>", lambda _e: self._on_key("clear"))
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        char = delocalize_digits(event.char, self._lang)
        aliases = {"*": "×", "/": "÷"}
        if len(char) != 1:
            return
        if char.isdigit() or char in ".+-()%^":
            self._on_token(char)
        elif char in aliases:
            self._on_token(aliases[char])

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str):
        if action.startswith("insert:"):
            self._on_token(action[7:])
            return

        self._click()
        if self._mode == "converter":
            self.converter.handle_input({"clear": "C", "backspace": "DEL"}.get(action, ""))
        elif action == "clear":
            self.session.clear()
        elif action == "backspace":
            self.session.delete_last()
        elif action == "equals":
            self.session.calculate()
        self._render()

    def _on_token(self, token: str):
        self._click()
        if self._mode == "converter":
            self.converter.handle_input(token)
        else:
            self.session.handle_input(token)
        self._render()

    def _on_history_select(self, _event):
        selection = self.history_list.curselection()
        history = self.session.history
        if not selection or selection[0] >= len(history):
            return
        entry = history[selection[0]]
        self.session.load_history_item(entry)
        self._toggle_history()

    def _clear_history(self):
        self.session.clear_history()
        self._render()

    def _on_category(self, _event):
        categories = list(ConversionCategory)
        self.converter.set_category(categories[self.category_box.current()])
        self._render()

    def _on_units(self, _event):
        self.converter.set_units(self.from_var.get(), self.to_var.get())
        self._render()

    def _swap_units(self):
        self.converter.swap_units()
        self._render()

    # ── Toggles ──────────────────────────────────────────────────

    def _toggle_mode(self):
        if self._mode == "calculator":
            self._mode = "converter"
            self._science_frame.pack_forget()
            self._converter_frame.pack(fill="x", padx=6, pady=2,
                                       before=self._keypad_frame)
        else:
            self._mode = "calculator"
            self._converter_frame.pack_forget()
            self._science_frame.pack(fill="x", padx=6, pady=2,
                                     before=self._keypad_frame)
        self._render()

    def _toggle_language(self):
        self.config.language = next_language(self._lang)
        self._render()

    def _toggle_theme(self):
        self.config.theme = "light" if self.config.theme == "dark" else "dark"
        self._apply_palette(self.root)
        self._render()

    def _toggle_sound(self):
        self.config.sound_enabled = not self.config.sound_enabled
        self._render()

    def _toggle_history(self):
        self._history_visible = not self._history_visible
        if self._history_visible:
            self._history_frame.pack(fill="both", expand=True, padx=6, pady=(0, 6))
        else:
            self._history_frame.pack_forget()
        self._render()

    def _click(self):
        if self.config.sound_enabled:
            self.root.bell()

    def _apply_palette(self, widget):
        # Repinta fondos de marcos y pantalla; los botones conservan su tipo
        for child in widget.winfo_children():
            if isinstance(child, tk.Frame):
                bg = self.C["display_bg"] if child is self._display_frame else self.C["bg"]
                child.configure(bg=bg)
            elif isinstance(child, tk.Label):
                child.configure(bg=self.C["display_bg"])
            self._apply_palette(child)
        if widget is self.root:
            self.root.configure(bg=self.C["bg"])
            self.expr_label.configure(fg=self.C["expr_fg"])
            self.preview_label.configure(fg=self.C["preview_fg"])
            self.result_label.configure(fg=self.C["result_fg"])

    # ── Pintado ──────────────────────────────────────────────────

    def _render(self):
        lang = self._lang
        self.root.title(label("title", lang))
        self.mode_btn.config(text=label(
            "converter" if self._mode == "calculator" else "calculator", lang))
        self.lang_btn.config(text=lang.upper())
        self.theme_btn.config(text="☾" if self.config.theme == "dark" else "☀")
        self.sound_btn.config(text="♪" if self.config.sound_enabled else "✕♪")
        self.history_btn.config(text=label("history", lang))
        self.clear_history_btn.config(text=label("clear_history", lang))

        for btn, digit in self._digit_buttons:
            btn.config(text=localize_digits(digit, lang))

        if self._mode == "converter":
            self._render_converter()
        else:
            self._render_calculator()
        self._render_history()

    def _render_calculator(self):
        lang = self._lang
        session = self.session
        self.expr_var.set(localize_digits(session.expression or "0", lang))
        self.preview_var.set(localize_digits(session.preview, lang))
        result = f"= {session.result}" if session.result else ""
        self.result_var.set(localize_digits(result, lang))

    def _render_converter(self):
        lang = self._lang
        conv = self.converter
        self.category_box.config(values=[label(c.value, lang) for c in ConversionCategory])
        self.category_box.current(list(ConversionCategory).index(conv.category))
        self.from_box.config(values=conv.available_units)
        self.to_box.config(values=conv.available_units)
        self.from_var.set(conv.unit_from)
        self.to_var.set(conv.unit_to)

        self.expr_var.set(localize_digits(f"{conv.input or '0'} {conv.unit_from}", lang))
        self.preview_var.set("")
        self.result_var.set(localize_digits(f"= {conv.result} {conv.unit_to}", lang))

    def _render_history(self):
        lang = self._lang
        self.history_list.delete(0, tk.END)
        if not self.session.history:
            self.history_list.insert(tk.END, label("no_history", lang))
            return
        for entry in self.session.history:
            line = f"{entry.expression} = {entry.result}"
            self.history_list.insert(tk.END, localize_digits(line, lang))
