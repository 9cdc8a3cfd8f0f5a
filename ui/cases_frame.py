import tkinter as tk
from tkinter import ttk, messagebox

from logic.backend import search_cases
from logic.formatting import ANALYSIS_TYPE_LABELS, format_datetime
from ui.modals import DataModal
from ui.theme import row_tag, zebra
from ui.widgets import NavBar


class CasesFrame(tk.Frame):
    """My page: profile, the user's cases with search, and their activity log."""
    def __init__(self, parent, controller):
        super().__init__(parent)
        self.controller = controller

        root = ttk.Frame(self, style="App.TFrame")
        root.pack(fill="both", expand=True)
        self.nav = NavBar(root, controller)
        self.nav.pack(fill="x")

        # Top bar: title + profile
        topbar = ttk.Frame(root, style="Toolbar.TFrame", padding=(16, 12))
        topbar.pack(fill="x")
        ttk.Label(topbar, text="My page", style="H1.TLabel").pack(side="left")
        self.profile_label = ttk.Label(topbar, text="", style="Role.TLabel")
        self.profile_label.pack(side="right")

        # Controls: search + buttons
        controls = ttk.Frame(root, style="Toolbar.TFrame", padding=(16, 0))
        controls.pack(fill="x")

        left = ttk.Frame(controls, style="Toolbar.TFrame")
        left.pack(side="left", fill="x", expand=True)
        ttk.Label(left, text="🔎 Search", style="Sub.TLabel").pack(side="left", padx=(0, 8))
        self.search_var = tk.StringVar()
        self.search_entry = ttk.Entry(left, textvariable=self.search_var, width=28)
        self.search_entry.pack(side="left", fill="x", expand=True)
        ttk.Button(left, text="Clear", style="Ghost.TButton",
                   command=lambda: (self.search_var.set(""), self.refresh_table())).pack(side="left", padx=(8, 0))

        right = ttk.Frame(controls, style="Toolbar.TFrame")
        right.pack(side="right")
        ttk.Button(right, text="Delete", style="Danger.TButton", command=self.delete_case).pack(side="left", padx=6)
        ttk.Button(right, text="Open", style="Accent.TButton", command=self.open_case).pack(side="left", padx=6)

        # Cases card
        card = ttk.Frame(root, style="Card.TFrame", padding=12)
        card.pack(fill="both", expand=True, padx=16, pady=(12, 6))

        columns = ("id", "title", "domain", "runs", "created")
        self.tree = ttk.Treeview(card, columns=columns, show="headings", selectmode="browse")
        headers = {"id": "ID", "title": "Title", "domain": "Domain", "runs": "#Runs", "created": "Created"}
        widths = {"id": 150, "title": 320, "domain": 110, "runs": 70, "created": 150}
        for col in columns:
            self.tree.heading(col, text=headers[col])
            self.tree.column(col, stretch=True, width=widths[col])
        zebra(self.tree)

        yscroll = ttk.Scrollbar(card, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=yscroll.set)
        self.tree.pack(side="left", fill="both", expand=True)
        yscroll.pack(side="right", fill="y")

        # Activity card
        logs_card = ttk.Frame(root, style="Card.TFrame", padding=12)
        logs_card.pack(fill="both", expand=True, padx=16, pady=(6, 16))
        ttk.Label(logs_card, text="Recent activity", style="CardTitle.TLabel").pack(anchor="w", pady=(0, 6))
        self.logs = ttk.Treeview(logs_card, columns=("action", "target", "meta", "at"),
                                 show="headings", height=6)
        for col, text, width in (("action", "Action", 130), ("target", "Target", 200),
                                 ("meta", "Details", 280), ("at", "When", 150)):
            self.logs.heading(col, text=text)
            self.logs.column(col, width=width, stretch=True)
        zebra(self.logs)
        self.logs.pack(fill="both", expand=True)

        # bindings
        self.search_var.trace_add("write", lambda *_: self.refresh_table())
        self.tree.bind("<Double-1>", lambda e: self.open_case())
        self.tree.bind("<Return>",   lambda e: self.open_case())
        self.tree.bind("<Delete>",   lambda e: self.delete_case())

    # ---------- lifecycle ----------
    def on_show(self):
        self.nav.refresh()
        user = self.controller.session.user
        self.profile_label.config(text=f"{user.name} · {user.email}" if user else "")
        self.refresh_table()
        self.refresh_logs()
        self.search_entry.focus_set()

    # ---------- helpers ----------
    def refresh_table(self):
        db = self.controller.db
        runs = db.get_all_analysis_runs()
        for row in self.tree.get_children():
            self.tree.delete(row)
        for i, case in enumerate(search_cases(db, self.search_var.get())):
            n_runs = sum(1 for r in runs if r.case_id == case.case_id)
            self.tree.insert(
                "", "end", iid=case.case_id,
                values=(case.case_id, case.title, case.domain_hint or "-", n_runs,
                        format_datetime(case.created_at, with_year=True)),
                tags=(row_tag(i),)
            )

    def refresh_logs(self):
        for row in self.logs.get_children():
            self.logs.delete(row)
        for i, log in enumerate(self.controller.db.get_all_audit_logs()[:20]):
            meta = ", ".join(f"{k}={v}" for k, v in (log.meta_json or {}).items())
            self.logs.insert("", "end", values=(log.action, log.target_id, meta or "-",
                                                format_datetime(log.created_at)),
                             tags=(row_tag(i),))

    def _get_selected_case(self):
        sel = self.tree.selection()
        if not sel:
            messagebox.showwarning("Warning", "Select a case first")
            return None
        return self.controller.db.get_case(sel[0])

    # ---------- actions ----------
    def open_case(self):
        case = self._get_selected_case()
        if not case:
            return
        db = self.controller.db
        runs = [r for r in db.get_all_analysis_runs() if r.case_id == case.case_id]
        table = [{"run_id": r.run_id, "analysis": ANALYSIS_TYPE_LABELS.get(r.analysis_type, r.analysis_type),
                  "status": r.status, "latency_ms": r.latency_ms} for r in runs]
        DataModal(self, case.title, json_data={"case": case, "runs": runs}, table_data=table)

    def delete_case(self):
        case = self._get_selected_case()
        if not case:
            return
        if messagebox.askyesno("Confirm delete", f"Delete case {case.case_id} - {case.title}?"):
            self.controller.db.delete_case(case.case_id)
            self.refresh_table()
