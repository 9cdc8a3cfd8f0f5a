import tkinter as tk
from tkinter import ttk

from logic.backend import AnalysisError, begin_analysis, complete_analysis, latest_result
from logic.backend_mock import FIXTURES, delay_ms
from logic.schemas import RESULT_TABLES, get_schema
from logic.validation import ValidationError
from ui.modals import DataModal, DocsModal, ERDModal
from ui.widgets import NavBar, ScrollFrame, text_box

UTILITY_BUTTONS = [
    ("📖 Feature docs", "docs"),
    ("{ } Mock data", "mock"),
    ("🗄 DB table", "db"),
    ("</> Sample records", "sample"),
    ("⎇ ERD", "erd"),
]


class AnalysisFrame(tk.Frame):
    """
    Shared page for the five mock analyses.

    Left: input card (text, counter, sample/analyze buttons, utilities).
    Right: scrollable result panel that subclasses fill in `render_result`.
    """
    analysis_type = ""
    feature = ""
    heading = ""
    subheading = ""
    sample_text = ""
    # classify and risk refill an empty table from the fixture on show
    restore_on_show = False

    def __init__(self, parent, controller):
        super().__init__(parent)
        self.controller = controller
        self.result = None
        self._loading = False

        root = ttk.Frame(self, style="App.TFrame")
        root.pack(fill="both", expand=True)

        self.nav = NavBar(root, controller)
        self.nav.pack(fill="x")

        header = ttk.Frame(root, style="App.TFrame", padding=(16, 12, 16, 4))
        header.pack(fill="x")
        ttk.Label(header, text=self.heading, style="H1.TLabel").pack(anchor="w")
        ttk.Label(header, text=self.subheading, style="Sub.TLabel").pack(anchor="w")

        body = ttk.Frame(root, style="App.TFrame", padding=(16, 8, 16, 16))
        body.pack(fill="both", expand=True)
        body.grid_columnconfigure(0, weight=2, uniform="cols")
        body.grid_columnconfigure(1, weight=3, uniform="cols")
        body.grid_rowconfigure(0, weight=1)

        # ---------- input ----------
        left = ttk.Frame(body, style="Card.TFrame", padding=16)
        left.grid(row=0, column=0, sticky="nsew", padx=(0, 12))

        ttk.Label(left, text="Input text", style="CardTitle.TLabel").pack(anchor="w")
        self.text = text_box(left, height=14)
        self.text.pack(fill="both", expand=True, pady=(8, 4))
        self.text.bind("<<Modified>>", self._on_text_modified)
        self.build_input_extras(left)

        self.counter = ttk.Label(left, text="", style="CardMuted.TLabel")
        self.counter.pack(anchor="e")

        actions = ttk.Frame(left, style="Card.TFrame")
        actions.pack(fill="x", pady=(8, 0))
        ttk.Button(actions, text="Use sample text", style="Ghost.TButton",
                   command=self.fill_sample).pack(side="left")
        self.analyze_btn = ttk.Button(actions, text="Analyze", style="Accent.TButton", command=self.analyze)
        self.analyze_btn.pack(side="right")

        utils = ttk.Frame(left, style="Card.TFrame")
        utils.pack(fill="x", pady=(12, 0))
        for i, (label, key) in enumerate(UTILITY_BUTTONS):
            ttk.Button(utils, text=label, style="Ghost.TButton",
                       command=lambda k=key: self.open_modal(k)).grid(row=i // 3, column=i % 3,
                                                                     sticky="ew", padx=2, pady=2)
        for c in range(3):
            utils.grid_columnconfigure(c, weight=1)

        # ---------- result ----------
        right = ttk.Frame(body, style="Card.TFrame", padding=(16, 16, 4, 16))
        right.grid(row=0, column=1, sticky="nsew")
        self.results = ScrollFrame(right)
        self.results.pack(fill="both", expand=True)
        self._show_placeholder()
        self._update_counter()

    # hooks -------------------------------------------------------------------

    def build_input_extras(self, parent):
        pass

    def render_result(self, panel, result):
        raise NotImplementedError

    # lifecycle ---------------------------------------------------------------

    def on_show(self):
        self.nav.refresh()
        if self.result is not None:
            return
        result = latest_result(self.controller.db, self.analysis_type,
                               restore=self.restore_on_show, settings=self.controller.settings)
        if result is not None:
            self.show_result(result)

    # input -------------------------------------------------------------------

    def input_text(self) -> str:
        return self.text.get("1.0", "end-1c")

    def set_input_text(self, text: str):
        self.text.delete("1.0", "end")
        self.text.insert("1.0", text)
        self._update_counter()

    def fill_sample(self):
        self.set_input_text(self.sample_text)

    def _on_text_modified(self, event=None):
        if self.text.edit_modified():
            self._update_counter()
            self.text.edit_modified(False)

    def _update_counter(self):
        n = len(self.input_text().strip())
        need = self.controller.settings.min_chars
        self.counter.config(text=f"{n} characters (minimum {need})")
        if not self._loading:
            self.analyze_btn.config(state="normal" if n >= need else "disabled")

    # analysis ----------------------------------------------------------------

    def analyze(self):
        if self._loading:
            return
        settings = self.controller.settings
        try:
            pending = begin_analysis(self.controller.db, self.analysis_type, self.input_text(), settings)
        except ValidationError as e:
            self.controller.toast(str(e), "info")
            return
        self._set_loading(True)
        self.after(delay_ms(self.analysis_type, settings.delay_scale), lambda: self._finish(pending))

    def _finish(self, pending):
        try:
            result = complete_analysis(self.controller.db, pending, self.controller.settings)
        except AnalysisError as e:
            self.controller.toast(str(e), "error")
        else:
            self.result = result
            self.controller.toast("Analysis complete.", "success")
        finally:
            self._set_loading(False)

    def _set_loading(self, loading: bool):
        self._loading = loading
        if loading:
            self.analyze_btn.config(state="disabled", text="Analyzing…")
            self.results.clear()
            ttk.Label(self.results.inner, text="⏳ The AI model is analyzing your text…",
                      style="CardMuted.TLabel").pack(pady=60)
        else:
            self.analyze_btn.config(text="Analyze")
            self._update_counter()
            if self.result is None:
                self._show_placeholder()
            else:
                self.show_result(self.result)

    # result ------------------------------------------------------------------

    def show_result(self, result):
        self.result = result
        self.results.clear()
        self.render_result(self.results.inner, result)

    def _show_placeholder(self):
        self.results.clear()
        ttk.Label(self.results.inner, text="Enter text and press Analyze to see the result here.",
                  style="CardMuted.TLabel").pack(pady=60)

    # modals ------------------------------------------------------------------

    def open_modal(self, key):
        db = self.controller.db
        table = RESULT_TABLES[self.analysis_type]
        schema = get_schema(table)
        if key == "mock":
            DataModal(self, f"Mock data ({FIXTURES[self.analysis_type]})",
                      json_data=self.result, table_data=[self.result] if self.result else [], schema=schema)
        elif key == "db":
            DataModal(self, f"DB table: {table}", json_data=schema,
                      table_data=db.get_sample_records(table), schema=schema)
        elif key == "sample":
            records = db.get_sample_records(table)
            DataModal(self, "Sample records", json_data=records, table_data=records, schema=schema)
        elif key == "erd":
            ERDModal(self)
        else:
            DocsModal(self, self.feature)
        db.log_action("OPEN_MODAL", self.analysis_type, {"modal": key})
