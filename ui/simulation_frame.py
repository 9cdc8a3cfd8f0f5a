import tkinter as tk
from tkinter import ttk

from logic import charts
from logic.simulation import (
    DISPUTE_TYPES,
    SAMPLE_TEXT,
    default_weights,
    rank_cases,
    run_simulation,
    weighted_similarity,
)
from logic.validation import ValidationError
from ui.widgets import Badge, ImageLabel, NavBar, ScrollFrame, paragraph, section, text_box

SIMULATION_DELAY_MS = 2000
WEIGHT_LABELS = [("fact", "Fact similarity"), ("legal", "Legal issue"), ("conclusion", "Conclusion")]


class SimulationFrame(tk.Frame):
    """Litigation outcome simulation with adjustable similarity weights."""
    def __init__(self, parent, controller):
        super().__init__(parent)
        self.controller = controller
        self.result = None
        self._expanded = set()

        root = ttk.Frame(self, style="App.TFrame")
        root.pack(fill="both", expand=True)
        self.nav = NavBar(root, controller)
        self.nav.pack(fill="x")

        header = ttk.Frame(root, style="App.TFrame", padding=(16, 12, 16, 4))
        header.pack(fill="x")
        ttk.Label(header, text="Litigation Simulation", style="H1.TLabel").pack(anchor="w")
        ttk.Label(header, text="Predict the outcome from precedents that resemble your dispute.",
                  style="Sub.TLabel").pack(anchor="w")

        body = ttk.Frame(root, style="App.TFrame", padding=(16, 8, 16, 16))
        body.pack(fill="both", expand=True)
        body.grid_columnconfigure(0, weight=2, uniform="cols")
        body.grid_columnconfigure(1, weight=3, uniform="cols")
        body.grid_rowconfigure(0, weight=1)

        left = ttk.Frame(body, style="Card.TFrame", padding=16)
        left.grid(row=0, column=0, sticky="nsew", padx=(0, 12))

        ttk.Label(left, text="Dispute type", style="CardTitle.TLabel").pack(anchor="w")
        self.type_var = tk.StringVar(value=DISPUTE_TYPES[0])
        types = ttk.Frame(left, style="Card.TFrame")
        types.pack(anchor="w", pady=(4, 8))
        for t in DISPUTE_TYPES:
            ttk.Radiobutton(types, text=t.capitalize(), value=t, variable=self.type_var,
                            style="Card.TRadiobutton").pack(side="left", padx=(0, 10))

        ttk.Label(left, text="Describe the dispute", style="Field.TLabel").pack(anchor="w")
        self.text = text_box(left, height=10)
        self.text.pack(fill="both", expand=True, pady=(4, 8))

        ttk.Label(left, text="Similarity weights", style="Field.TLabel").pack(anchor="w")
        self.weight_vars = {}
        self.weight_labels = {}
        for key, label in WEIGHT_LABELS:
            row = ttk.Frame(left, style="Card.TFrame")
            row.pack(fill="x", pady=2)
            ttk.Label(row, text=label, style="Card.TLabel", width=16).pack(side="left")
            var = tk.IntVar(value=default_weights()[key])
            ttk.Scale(row, from_=0, to=100, variable=var, orient="horizontal",
                      command=lambda _v, k=key: self._on_weight(k)).pack(side="left", fill="x", expand=True)
            value_lbl = ttk.Label(row, text=str(var.get()), style="CardMuted.TLabel", width=4)
            value_lbl.pack(side="left", padx=(6, 0))
            self.weight_vars[key] = var
            self.weight_labels[key] = value_lbl

        actions = ttk.Frame(left, style="Card.TFrame")
        actions.pack(fill="x", pady=(10, 0))
        ttk.Button(actions, text="Use sample text", style="Ghost.TButton",
                   command=self.fill_sample).pack(side="left")
        self.run_btn = ttk.Button(actions, text="Run simulation", style="Accent.TButton", command=self.simulate)
        self.run_btn.pack(side="right")

        right = ttk.Frame(body, style="Card.TFrame", padding=(16, 16, 4, 16))
        right.grid(row=0, column=1, sticky="nsew")
        self.results = ScrollFrame(right)
        self.results.pack(fill="both", expand=True)
        self._placeholder("Describe your dispute and run the simulation.")

    def on_show(self):
        self.nav.refresh()

    def fill_sample(self):
        self.text.delete("1.0", "end")
        self.text.insert("1.0", SAMPLE_TEXT)

    def weights(self):
        return {k: int(v.get()) for k, v in self.weight_vars.items()}

    def _on_weight(self, key):
        self.weight_labels[key].config(text=str(int(self.weight_vars[key].get())))
        if self.result is not None:
            self._render()

    def _placeholder(self, text):
        self.results.clear()
        ttk.Label(self.results.inner, text=text, style="CardMuted.TLabel").pack(pady=60)

    def simulate(self):
        text = self.text.get("1.0", "end-1c")
        try:
            run_simulation(text)
        except ValidationError as e:
            self.controller.toast(str(e), "info")
            return
        self.run_btn.config(state="disabled", text="Simulating…")
        self._placeholder("⏳ Searching precedents and predicting the outcome…")
        delay = int(SIMULATION_DELAY_MS * self.controller.settings.delay_scale)
        self.after(delay, lambda: self._finish(text))

    def _finish(self, text):
        self.run_btn.config(state="normal", text="Run simulation")
        self.result = run_simulation(text)
        self._expanded = set()
        self._render()

    def _toggle(self, key):
        self._expanded.symmetric_difference_update({key})
        self._render()

    def _render(self):
        r = self.result
        panel = self.results.inner
        for w in panel.winfo_children():
            w.destroy()

        stats = ttk.Frame(panel, style="Card.TFrame")
        stats.pack(fill="x", pady=(0, 8))
        for i, (label, value) in enumerate([
            ("Win probability", f"{r.win_probability:.1f}%"),
            ("Matched precedents", str(r.matched_cases)),
            ("Model accuracy", f"{r.overall_accuracy:.1f}%"),
        ]):
            cell = ttk.Frame(stats, style="Card.TFrame")
            cell.grid(row=0, column=i, sticky="w", padx=(0, 24))
            ttk.Label(cell, text=value, style="Big.TLabel").pack(anchor="w")
            ttk.Label(cell, text=label, style="CardMuted.TLabel").pack(anchor="w")
        ImageLabel(panel, charts.progress_bar(r.win_probability, size=(360, 14), variant="success")).pack(anchor="w")

        section(panel, "AI analysis")
        paragraph(panel, r.ai_analysis)

        weights = self.weights()
        section(panel, "Similar precedents (ranked by your weights)")
        for case in rank_cases(r, weights):
            key = case.case_id
            card = ttk.Frame(panel, style="Card.TFrame", padding=(0, 4))
            card.pack(fill="x")
            head = ttk.Frame(card, style="Card.TFrame")
            head.pack(fill="x")
            ttk.Button(head, text=("▾ " if key in self._expanded else "▸ ") + f"{case.case_number} {case.summary}",
                       style="Ghost.TButton", command=lambda k=key: self._toggle(k)).pack(side="left")
            Badge(head, f"{weighted_similarity(case, weights):.0f}%", "primary").pack(side="right")
            if key in self._expanded:
                paragraph(card, f"Fact similarity {case.fact_similarity}% · legal issue "
                                f"{case.legal_issue_similarity}% · overall {case.overall_similarity}%",
                          style="CardMuted.TLabel")
                paragraph(card, f"Result: {case.result}")
                paragraph(card, case.reasoning, style="CardMuted.TLabel")
                paragraph(card, f"Strategic implication: {case.strategic_implication}")

        section(panel, "Key issues")
        for issue in r.issues:
            card = ttk.Frame(panel, style="Card.TFrame", padding=(0, 4))
            card.pack(fill="x")
            head = ttk.Frame(card, style="Card.TFrame")
            head.pack(fill="x")
            ttk.Button(head, text=("▾ " if issue.id in self._expanded else "▸ ") + issue.title,
                       style="Ghost.TButton", command=lambda k=issue.id: self._toggle(k)).pack(side="left")
            ttk.Label(head, text=f"weight {issue.weight}", style="CardMuted.TLabel").pack(side="right")
            ImageLabel(card, charts.progress_bar(issue.weight, size=(360, 8), variant="warning")).pack(anchor="w")
            if issue.id in self._expanded:
                paragraph(card, issue.related_law, style="CardMuted.TLabel")
                paragraph(card, issue.description)

        if r.contrary_case is not None:
            section(panel, "Contrary precedent")
            c = r.contrary_case
            paragraph(panel, f"{c.case_number}: {c.key_difference}")
            Badge(panel, c.result, "warning").pack(anchor="w", pady=(4, 0))

        ttk.Button(panel, text="Download PDF report", style="Accent.TButton",
                   command=lambda: self.controller.toast("The PDF report is being prepared.", "info")
                   ).pack(anchor="e", pady=(16, 0))
