import tkinter as tk
from tkinter import ttk, messagebox

from logic import charts
from logic.admin import (
    ERROR_COUNTS,
    ITEMS_PER_PAGE,
    SUMMARY_CARDS,
    WEEKLY_ACTIVITY,
    delete_user,
    filter_users,
    initial_users,
    paginate,
    update_user,
)
from ui.theme import row_tag, zebra
from ui.user_dialog import UserDialog
from ui.widgets import Badge, ImageLabel, NavBar

STATUS_VARIANTS = {"active": "success", "inactive": "default", "banned": "danger"}


class AdminFrame(tk.Frame):
    """Admin console: analytics overview and user management."""
    def __init__(self, parent, controller):
        super().__init__(parent)
        self.controller = controller
        self.users = initial_users()
        self.page = 1

        root = ttk.Frame(self, style="App.TFrame")
        root.pack(fill="both", expand=True)
        self.nav = NavBar(root, controller)
        self.nav.pack(fill="x")

        header = ttk.Frame(root, style="App.TFrame", padding=(16, 12, 16, 4))
        header.pack(fill="x")
        ttk.Label(header, text="Admin", style="H1.TLabel").pack(anchor="w")

        nb = ttk.Notebook(root)
        nb.pack(fill="both", expand=True, padx=16, pady=(4, 16))
        nb.add(self._build_analytics(nb), text="Analytics")
        nb.add(self._build_users(nb), text="Users")

    # ---------- analytics ----------
    def _build_analytics(self, nb):
        tab = ttk.Frame(nb, style="Card.TFrame", padding=16)
        cards = ttk.Frame(tab, style="Card.TFrame")
        cards.pack(fill="x")
        for i, (label, value, change) in enumerate(SUMMARY_CARDS):
            cell = ttk.Frame(cards, style="Card.TFrame", padding=(0, 0, 24, 0))
            cell.grid(row=0, column=i, sticky="w")
            ttk.Label(cell, text=label, style="CardMuted.TLabel").pack(anchor="w")
            ttk.Label(cell, text=value, style="Big.TLabel").pack(anchor="w")
            ttk.Label(cell, text=change, style="CardMuted.TLabel").pack(anchor="w")

        ttk.Label(tab, text="Weekly activity", style="CardTitle.TLabel").pack(anchor="w", pady=(18, 6))
        ImageLabel(tab, charts.bar_chart(WEEKLY_ACTIVITY, size=(520, 190), percentage=False)).pack(anchor="w")
        ttk.Label(tab, text="Errors by status code", style="CardTitle.TLabel").pack(anchor="w", pady=(18, 6))
        ImageLabel(tab, charts.bar_chart(ERROR_COUNTS, size=(520, 120), percentage=False)).pack(anchor="w")
        return tab

    # ---------- users ----------
    def _build_users(self, nb):
        tab = ttk.Frame(nb, style="Card.TFrame", padding=16)

        controls = ttk.Frame(tab, style="Card.TFrame")
        controls.pack(fill="x")
        ttk.Label(controls, text="🔎 Search", style="CardMuted.TLabel").pack(side="left", padx=(0, 8))
        self.search_var = tk.StringVar()
        ttk.Entry(controls, textvariable=self.search_var, width=32).pack(side="left")
        self.search_var.trace_add("write", lambda *_: self._search())
        ttk.Button(controls, text="Delete", style="Danger.TButton",
                   command=self.delete_selected).pack(side="right", padx=(6, 0))
        ttk.Button(controls, text="Edit", style="Accent.TButton",
                   command=self.edit_selected).pack(side="right")

        columns = ("name", "email", "role", "status", "last_login")
        self.tree = ttk.Treeview(tab, columns=columns, show="headings", selectmode="browse",
                                 height=ITEMS_PER_PAGE)
        for col, text, width in (("name", "Name", 160), ("email", "Email", 220), ("role", "Role", 80),
                                 ("status", "Status", 90), ("last_login", "Last login", 150)):
            self.tree.heading(col, text=text)
            self.tree.column(col, width=width, stretch=True)
        zebra(self.tree)
        self.tree.pack(fill="both", expand=True, pady=(12, 8))
        self.tree.bind("<Double-1>", lambda e: self.edit_selected())
        self.tree.bind("<Delete>", lambda e: self.delete_selected())

        pager = ttk.Frame(tab, style="Card.TFrame")
        pager.pack(fill="x")
        ttk.Button(pager, text="‹ Prev", style="Ghost.TButton",
                   command=lambda: self._go(self.page - 1)).pack(side="left")
        self.page_label = ttk.Label(pager, text="", style="CardMuted.TLabel")
        self.page_label.pack(side="left", padx=12)
        ttk.Button(pager, text="Next ›", style="Ghost.TButton",
                   command=lambda: self._go(self.page + 1)).pack(side="left")
        self.legend = ttk.Frame(pager, style="Card.TFrame")
        self.legend.pack(side="right")
        for status, variant in STATUS_VARIANTS.items():
            Badge(self.legend, status, variant).pack(side="left", padx=2)
        return tab

    def on_show(self):
        self.nav.refresh()
        self.refresh_table()

    def _search(self):
        self.page = 1
        self.refresh_table()

    def _go(self, page):
        self.page = page
        self.refresh_table()

    def refresh_table(self):
        filtered = filter_users(self.users, self.search_var.get())
        rows, self.page, total_pages = paginate(filtered, self.page)
        for row in self.tree.get_children():
            self.tree.delete(row)
        for i, u in enumerate(rows):
            self.tree.insert("", "end", iid=str(u.id),
                             values=(u.name, u.email, u.role, u.status, u.last_login),
                             tags=(row_tag(i),))
        self.page_label.config(text=f"Page {self.page} / {total_pages}  ·  {len(filtered)} users")

    def _selected(self):
        sel = self.tree.selection()
        if not sel:
            messagebox.showwarning("Warning", "Select a user first")
            return None
        uid = int(sel[0])
        return next((u for u in self.users if u.id == uid), None)

    def edit_selected(self):
        user = self._selected()
        if not user:
            return
        dlg = UserDialog(self, user)
        self.wait_window(dlg)
        if dlg.result:
            self.users = update_user(self.users, dlg.result)
            self.refresh_table()
            self.controller.toast("User updated.", "success")

    def delete_selected(self):
        user = self._selected()
        if not user:
            return
        if messagebox.askyesno("Confirm delete", f"Delete user {user.name} ({user.email})?"):
            self.users = delete_user(self.users, user.id)
            self.refresh_table()
            self.controller.toast("User deleted.", "success")
