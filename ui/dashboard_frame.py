import tkinter as tk
from tkinter import ttk, messagebox

from model.models import ANALYSIS_TYPES
from logic import charts
from logic.backend import create_summary_report, dashboard_stats
from logic.formatting import ANALYSIS_TYPE_LABELS, format_datetime
from logic.schemas import SCHEMAS, get_feature_docs
from ui.modals import DataModal, ERDModal
from ui.theme import row_tag, zebra
from ui.widgets import ImageLabel, NavBar

FEATURE_FRAMES = {
    "CLASSIFY": "ClassifyFrame",
    "RISK": "RiskFrame",
    "EMOTION": "EmotionFrame",
    "SIMILAR": "SimilarFrame",
    "STRATEGY": "StrategyFrame",
}
STATUS_ICONS = {"success": "✓", "fail": "✕", "running": "…"}


class DashboardFrame(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent)
        self.controller = controller

        root = ttk.Frame(self, style="App.TFrame")
        root.pack(fill="both", expand=True)
        self.nav = NavBar(root, controller)
        self.nav.pack(fill="x")

        header = ttk.Frame(root, style="App.TFrame", padding=(16, 12, 16, 4))
        header.pack(fill="x")
        self.greeting = ttk.Label(header, text="", style="H1.TLabel")
        self.greeting.pack(side="left")
        ttk.Button(header, text="Create integrated report", style="Accent.TButton",
                   command=self.create_report).pack(side="right")
        ttk.Button(header, text="ERD", style="Ghost.TButton",
                   command=lambda: ERDModal(self)).pack(side="right", padx=6)
        ttk.Button(header, text="DB schemas", style="Ghost.TButton",
                   command=self.open_schemas).pack(side="right")

        # feature launcher
        features = ttk.Frame(root, style="App.TFrame", padding=(16, 8))
        features.pack(fill="x")
        for i, analysis_type in enumerate(ANALYSIS_TYPES):
            docs = get_feature_docs(analysis_type.lower())
            card = ttk.Frame(features, style="Card.TFrame", padding=12)
            card.grid(row=0, column=i, sticky="nsew", padx=(0 if i == 0 else 8, 0))
            features.grid_columnconfigure(i, weight=1, uniform="features")
            ttk.Label(card, text=docs["title"], style="CardTitle.TLabel", wraplength=200).pack(anchor="w")
            ttk.Label(card, text=docs["overview"], style="CardMuted.TLabel", wraplength=200,
                      justify="left").pack(anchor="w", pady=(4, 8))
            ttk.Button(card, text="Open →", style="Ghost.TButton",
                       command=lambda f=FEATURE_FRAMES[analysis_type]: controller.show_frame(f)).pack(anchor="e")

        body = ttk.Frame(root, style="App.TFrame", padding=(16, 8, 16, 16))
        body.pack(fill="both", expand=True)
        body.grid_columnconfigure(0, weight=3)
        body.grid_columnconfigure(1, weight=2)
        body.grid_rowconfigure(0, weight=1)

        # recent runs
        runs_card = ttk.Frame(body, style="Card.TFrame", padding=12)
        runs_card.grid(row=0, column=0, sticky="nsew", padx=(0, 12))
        ttk.Label(runs_card, text="Recent analyses", style="CardTitle.TLabel").pack(anchor="w", pady=(0, 6))
        columns = ("type", "model", "status", "latency", "started")
        self.tree = ttk.Treeview(runs_card, columns=columns, show="headings", selectmode="browse")
        for col, text, width in (("type", "Analysis", 170), ("model", "Model", 200), ("status", "Status", 80),
                                 ("latency", "Latency", 90), ("started", "Started", 130)):
            self.tree.heading(col, text=text)
            self.tree.column(col, width=width, stretch=True)
        zebra(self.tree)
        self.tree.pack(fill="both", expand=True)
        self.tree.bind("<Double-1>", self._open_run)

        # stats
        stats_card = ttk.Frame(body, style="Card.TFrame", padding=12)
        stats_card.grid(row=0, column=1, sticky="nsew")
        ttk.Label(stats_card, text="Overview", style="CardTitle.TLabel").pack(anchor="w")
        self.stats_label = ttk.Label(stats_card, text="", style="Card.TLabel", justify="left")
        self.stats_label.pack(anchor="w", pady=(6, 8))
        ttk.Label(stats_card, text="Runs by analysis", style="CardMuted.TLabel").pack(anchor="w")
        self.by_type_chart = ImageLabel(stats_card)
        self.by_type_chart.pack(anchor="w", pady=(4, 0))

    def on_show(self):
        self.nav.refresh()
        user = self.controller.session.user
        self.greeting.config(text=f"Welcome, {user.name}" if user else "Dashboard")
        self.refresh()

    def refresh(self):
        db = self.controller.db
        for row in self.tree.get_children():
            self.tree.delete(row)
        for i, run in enumerate(db.get_recent_analysis_runs(10)):
            latency = f"{run.latency_ms} ms" if run.latency_ms is not None else "-"
            self.tree.insert("", "end", iid=run.run_id, tags=(row_tag(i),), values=(
                ANALYSIS_TYPE_LABELS.get(run.analysis_type, run.analysis_type), run.model_name,
                f"{STATUS_ICONS.get(run.status, '')} {run.status}", latency, format_datetime(run.started_at),
            ))

        stats = dashboard_stats(db)
        self.stats_label.config(text=(
            f"Cases: {stats['cases']}\n"
            f"Analysis runs: {stats['total_runs']} ({stats['running']} running)\n"
            f"Success rate: {stats['success_rate'] * 100:.0f}%\n"
            f"Mean latency: {stats['mean_latency_ms']:.0f} ms\n"
            f"Reports: {stats['reports']}"
        ))
        self.by_type_chart.set_image(charts.bar_chart(
            [(ANALYSIS_TYPE_LABELS[t], n) for t, n in stats["by_type"].items()],
            size=(380, 160), percentage=False,
        ))

    def _open_run(self, event=None):
        sel = self.tree.selection()
        if not sel:
            return
        run = self.controller.db.get_analysis_run(sel[0])
        if run is not None:
            self.controller.show_frame(FEATURE_FRAMES[run.analysis_type])

    def create_report(self):
        if not messagebox.askyesno("Create report",
                                   "Bundle the most recent analyses into an integrated report?"):
            return
        report = create_summary_report(self.controller.db)
        if report is None:
            self.controller.toast("Run an analysis first.", "info")
            return
        self.refresh()
        self.controller.toast("Integrated report created. See the Reports page.", "success")

    def open_schemas(self):
        schemas = list(SCHEMAS.values())
        table = [{"table": s.table_name, "columns": len(s.columns),
                  "primary_key": ", ".join(c.name for c in s.columns if c.is_primary_key),
                  "references": ", ".join(c.references for c in s.columns if c.references) or "-"}
                 for s in schemas]
        DataModal(self, "DB schemas", json_data=schemas, table_data=table)
        self.controller.db.log_action("OPEN_MODAL", "dashboard", {"modal": "schemas"})
