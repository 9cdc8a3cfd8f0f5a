import tkinter as tk
from tkinter import ttk, messagebox

from logic.backend import export_records_csv, export_report_pdf, finalize_report, included_analysis_types
from logic.formatting import ANALYSIS_TYPE_LABELS, format_datetime
from logic.schemas import get_schema
from ui.modals import DataModal, Dialog, ERDModal
from ui.theme import row_tag, zebra
from ui.widgets import Badge, NavBar

STATUS_VARIANTS = {"draft": "warning", "final": "success"}


class ReportsFrame(tk.Frame):
    """Report list with preview, finalize and PDF/CSV export."""
    def __init__(self, parent, controller):
        super().__init__(parent)
        self.controller = controller

        root = ttk.Frame(self, style="App.TFrame")
        root.pack(fill="both", expand=True)
        self.nav = NavBar(root, controller)
        self.nav.pack(fill="x")

        topbar = ttk.Frame(root, style="Toolbar.TFrame", padding=(16, 12))
        topbar.pack(fill="x")
        ttk.Label(topbar, text="Reports", style="H1.TLabel").pack(side="left")
        right = ttk.Frame(topbar, style="Toolbar.TFrame")
        right.pack(side="right")
        for text, cmd in (("DB table", self.open_table), ("ERD", lambda: ERDModal(self)),
                          ("Export CSV", self.export_csv)):
            ttk.Button(right, text=text, style="Ghost.TButton", command=cmd).pack(side="left", padx=4)

        card = ttk.Frame(root, style="Card.TFrame", padding=12)
        card.pack(fill="both", expand=True, padx=16, pady=(0, 8))
        columns = ("id", "case", "analyses", "status", "pdf", "created")
        self.tree = ttk.Treeview(card, columns=columns, show="headings", selectmode="browse")
        for col, text, width in (("id", "Report", 150), ("case", "Case", 220), ("analyses", "Analyses", 260),
                                 ("status", "Status", 80), ("pdf", "PDF", 160), ("created", "Created", 140)):
            self.tree.heading(col, text=text)
            self.tree.column(col, width=width, stretch=True)
        zebra(self.tree)
        yscroll = ttk.Scrollbar(card, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=yscroll.set)
        self.tree.pack(side="left", fill="both", expand=True)
        yscroll.pack(side="right", fill="y")
        self.tree.bind("<Double-1>", lambda e: self.preview())
        self.tree.bind("<Return>", lambda e: self.preview())

        actions = ttk.Frame(root, style="App.TFrame", padding=(16, 0, 16, 16))
        actions.pack(fill="x")
        ttk.Button(actions, text="Preview", style="Accent.TButton", command=self.preview).pack(side="right")
        ttk.Button(actions, text="Export PDF", style="Ghost.TButton",
                   command=self.export_pdf).pack(side="right", padx=6)
        ttk.Button(actions, text="Finalize", style="Ghost.TButton", command=self.finalize).pack(side="right")

    def on_show(self):
        self.nav.refresh()
        self.refresh_table()

    def refresh_table(self):
        db = self.controller.db
        for row in self.tree.get_children():
            self.tree.delete(row)
        for i, report in enumerate(db.get_all_reports()):
            case = db.get_case(report.case_id)
            types = ", ".join(ANALYSIS_TYPE_LABELS.get(t, t) for t in included_analysis_types(db, report))
            self.tree.insert("", "end", iid=report.report_id, tags=(row_tag(i),), values=(
                report.report_id, case.title if case else report.case_id, types or "-",
                report.report_status, report.pdf_url or "-", format_datetime(report.created_at, with_year=True),
            ))

    def _selected(self):
        sel = self.tree.selection()
        if not sel:
            messagebox.showwarning("Warning", "Select a report first")
            return None
        return self.controller.db.get_report(sel[0])

    def preview(self):
        report = self._selected()
        if not report:
            return
        db = self.controller.db
        case = db.get_case(report.case_id)
        dlg = Dialog(self, "Report preview", minsize=(600, 460))
        head = ttk.Frame(dlg.body, style="Dialog.TFrame")
        head.pack(fill="x")
        ttk.Label(head, text=case.title if case else report.case_id, style="Field.TLabel").pack(side="left")
        Badge(head, report.report_status, STATUS_VARIANTS.get(report.report_status, "default")).pack(side="right")
        ttk.Label(dlg.body, text=f"Created {format_datetime(report.created_at, with_year=True)}",
                  style="CardMuted.TLabel").pack(anchor="w", pady=(2, 10))

        for run_id in report.included_run_ids:
            run = db.get_analysis_run(run_id)
            if run is None:
                continue
            row = ttk.Frame(dlg.body, style="Dialog.TFrame")
            row.pack(fill="x", pady=2)
            ttk.Label(row, text=ANALYSIS_TYPE_LABELS.get(run.analysis_type, run.analysis_type),
                      style="Card.TLabel").pack(side="left")
            latency = f"{run.latency_ms} ms" if run.latency_ms is not None else "-"
            ttk.Label(row, text=f"{run.model_name} · {latency}", style="CardMuted.TLabel").pack(side="right")

        def export_and_close():
            dlg.destroy()
            self._export_pdf(report.report_id)

        actions = dlg.add_close()
        ttk.Button(actions, text="Export PDF", style="Ghost.TButton",
                   command=export_and_close).pack(side="right", padx=6)

    def finalize(self):
        report = self._selected()
        if not report:
            return
        finalize_report(self.controller.db, report.report_id)
        self.refresh_table()
        self.controller.toast("Report finalized.", "success")

    def export_pdf(self):
        report = self._selected()
        if report:
            self._export_pdf(report.report_id)

    def _export_pdf(self, report_id):
        try:
            path = export_report_pdf(self.controller.db, report_id, settings=self.controller.settings)
        except OSError as e:
            self.controller.toast(f"PDF export failed: {e}", "error")
            return
        self.refresh_table()
        self.controller.toast(f"PDF saved to {path}", "success")

    def export_csv(self):
        try:
            path = export_records_csv(self.controller.db, "reports", settings=self.controller.settings)
        except OSError as e:
            self.controller.toast(f"CSV export failed: {e}", "error")
            return
        self.controller.toast(f"CSV saved to {path}", "success")

    def open_table(self):
        reports = self.controller.db.get_all_reports()
        DataModal(self, "DB table: reports", json_data=reports, table_data=reports, schema=get_schema("reports"))
