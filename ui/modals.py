import json
import tkinter as tk
from tkinter import ttk
from typing import Any, List, Optional

from model.models import TableSchema
from logic.schemas import SCHEMAS, erd_relations, get_feature_docs
from ui.theme import BG, BORDER, CARD_BG, FG, MUTED, PRIMARY, apply_theme, row_tag, zebra
from ui.widgets import text_box

TOAST_COLORS = {
    "success": ("#14532d", "#dcfce7"),
    "error": ("#7f1d1d", "#fee2e2"),
    "info": ("#1e3a8a", "#dbeafe"),
}


def to_jsonable(data: Any) -> Any:
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if isinstance(data, (list, tuple)):
        return [to_jsonable(d) for d in data]
    if isinstance(data, dict):
        return {k: to_jsonable(v) for k, v in data.items()}
    return data


def _cell(v: Any) -> str:
    if v is None:
        return "-"
    if isinstance(v, (list, dict)):
        return json.dumps(v, ensure_ascii=False)
    return str(v)


class Dialog(tk.Toplevel):
    """Dark modal window centered on its parent; Escape closes it."""
    def __init__(self, parent, title, minsize=(640, 460)):
        super().__init__(parent)
        self.title(title)
        self.transient(parent.winfo_toplevel())
        self.configure(bg=BG)
        apply_theme(self)

        self.body = ttk.Frame(self, style="Dialog.TFrame", padding=16)
        self.body.pack(fill="both", expand=True)
        ttk.Label(self.body, text=title, style="CardTitle.TLabel").pack(anchor="w", pady=(0, 8))

        self.bind("<Escape>", lambda e: self.destroy())
        self.minsize(*minsize)
        self.after(20, lambda: self._center_on_parent(parent))
        self.after(30, self._grab)

    def _grab(self):
        try:
            self.grab_set()
        except tk.TclError:
            pass    # window not viewable yet

    def _center_on_parent(self, parent):
        try:
            self.update_idletasks()
            top = parent.winfo_toplevel()
            px, py = top.winfo_rootx(), top.winfo_rooty()
            pw, ph = top.winfo_width(), top.winfo_height()
            w, h = self.winfo_width(), self.winfo_height()
            self.geometry(f"+{px + (pw - w) // 2}+{py + (ph - h) // 2}")
        except tk.TclError:
            pass

    def add_close(self):
        actions = ttk.Frame(self.body, style="Dialog.TFrame")
        actions.pack(fill="x", pady=(12, 0))
        ttk.Button(actions, text="Close", style="Accent.TButton", command=self.destroy).pack(side="right")
        return actions


def fill_tree(tree: ttk.Treeview, rows: List[dict], columns: Optional[List[str]] = None):
    for item in tree.get_children():
        tree.delete(item)
    if columns is None:
        columns = list(rows[0].keys()) if rows else []
    tree.configure(columns=columns, show="headings")
    for col in columns:
        tree.heading(col, text=col)
        tree.column(col, width=140, stretch=True)
    for i, row in enumerate(rows):
        tree.insert("", "end", values=[_cell(row.get(c)) for c in columns], tags=(row_tag(i),))


def _tree_with_scroll(parent):
    holder = ttk.Frame(parent, style="Card.TFrame")
    tree = ttk.Treeview(holder, show="headings")
    zebra(tree)
    ys = ttk.Scrollbar(holder, orient="vertical", command=tree.yview)
    xs = ttk.Scrollbar(holder, orient="horizontal", command=tree.xview)
    tree.configure(yscrollcommand=ys.set, xscrollcommand=xs.set)
    tree.grid(row=0, column=0, sticky="nsew")
    ys.grid(row=0, column=1, sticky="ns")
    xs.grid(row=1, column=0, sticky="ew")
    holder.grid_rowconfigure(0, weight=1)
    holder.grid_columnconfigure(0, weight=1)
    return holder, tree


class DataModal(Dialog):
    """JSON / TABLE / SCHEMA tabs over one dataset."""
    def __init__(self, parent, title, json_data=None, table_data=None, schema: Optional[TableSchema] = None):
        super().__init__(parent, title, minsize=(760, 520))
        self._json = json.dumps(to_jsonable(json_data if json_data is not None else {}),
                                ensure_ascii=False, indent=2)

        nb = ttk.Notebook(self.body)
        nb.pack(fill="both", expand=True)

        # JSON
        json_tab = ttk.Frame(nb, style="Card.TFrame", padding=8)
        box = text_box(json_tab, height=20, width=90, text=self._json, readonly=True)
        box.pack(fill="both", expand=True)
        self.copy_btn = ttk.Button(json_tab, text="Copy JSON", style="Ghost.TButton", command=self._copy)
        self.copy_btn.pack(anchor="e", pady=(6, 0))
        nb.add(json_tab, text="JSON")

        # TABLE
        table_tab = ttk.Frame(nb, style="Card.TFrame", padding=8)
        rows = [to_jsonable(r) for r in (table_data or [])]
        if rows:
            holder, tree = _tree_with_scroll(table_tab)
            holder.pack(fill="both", expand=True)
            fill_tree(tree, rows)
        else:
            ttk.Label(table_tab, text="No data.", style="CardMuted.TLabel").pack(pady=24)
        nb.add(table_tab, text="TABLE")

        # SCHEMA
        schema_tab = ttk.Frame(nb, style="Card.TFrame", padding=8)
        if schema is not None:
            ttk.Label(schema_tab, text=f"Table: {schema.table_name}", style="Card.TLabel").pack(anchor="w")
            holder, tree = _tree_with_scroll(schema_tab)
            holder.pack(fill="both", expand=True, pady=(6, 0))
            fill_tree(tree, [
                {"Column": c.name, "Type": c.type, "PK": "✓" if c.is_primary_key else "",
                 "FK": "✓" if c.is_foreign_key else "", "References": c.references or "-",
                 "Description": c.description}
                for c in schema.columns
            ])
        else:
            ttk.Label(schema_tab, text="No schema information.", style="CardMuted.TLabel").pack(pady=24)
        nb.add(schema_tab, text="SCHEMA")

        self.add_close()

    def _copy(self):
        self.clipboard_clear()
        self.clipboard_append(self._json)
        self.copy_btn.config(text="Copied!")
        self.after(2000, lambda: self.copy_btn.winfo_exists() and self.copy_btn.config(text="Copy JSON"))


class ERDModal(Dialog):
    """Table boxes with their columns, plus the foreign-key relations."""
    BOX_W = 210
    COLS = 4

    def __init__(self, parent):
        super().__init__(parent, "Entity Relationship Diagram (ERD)", minsize=(920, 620))
        canvas = tk.Canvas(self.body, bg=CARD_BG, highlightthickness=0, height=440)
        ys = ttk.Scrollbar(self.body, orient="vertical", command=canvas.yview)
        canvas.configure(yscrollcommand=ys.set)
        ys.pack(side="right", fill="y")
        canvas.pack(fill="both", expand=True)

        x0, y0, gap = 10, 10, 16
        row_h = 0
        for i, schema in enumerate(SCHEMAS.values()):
            if i and i % self.COLS == 0:
                y0 += row_h + gap
                row_h = 0
            x = x0 + (i % self.COLS) * (self.BOX_W + gap)
            h = 26 + 18 * len(schema.columns)
            canvas.create_rectangle(x, y0, x + self.BOX_W, y0 + h, outline=BORDER, fill=BG)
            canvas.create_rectangle(x, y0, x + self.BOX_W, y0 + 24, outline=BORDER, fill=PRIMARY)
            canvas.create_text(x + 8, y0 + 12, text=schema.table_name, anchor="w", fill=BG,
                               font=("Segoe UI", 10, "bold"))
            for j, col in enumerate(schema.columns):
                mark = "PK " if col.is_primary_key else ("FK " if col.is_foreign_key else "   ")
                canvas.create_text(x + 8, y0 + 36 + 18 * j, anchor="w",
                                   text=f"{mark}{col.name}", fill=FG if mark.strip() else MUTED,
                                   font=("Consolas", 9))
            row_h = max(row_h, h)
        canvas.configure(scrollregion=canvas.bbox("all"))

        ttk.Label(self.body, text="Relations", style="CardTitle.TLabel").pack(anchor="w", pady=(10, 4))
        for table, column, ref in erd_relations():
            ttk.Label(self.body, text=f"{table}.{column}  →  {ref}", style="CardMuted.TLabel").pack(anchor="w")
        self.add_close()


class DocsModal(Dialog):
    def __init__(self, parent, feature_name):
        docs = get_feature_docs(feature_name)
        super().__init__(parent, docs["title"], minsize=(680, 560))
        ttk.Label(self.body, text=docs["subtitle"], style="CardMuted.TLabel").pack(anchor="w")

        def block(title, text):
            ttk.Label(self.body, text=title, style="Field.TLabel").pack(anchor="w", pady=(12, 2))
            ttk.Label(self.body, text=text, style="Card.TLabel", wraplength=620,
                      justify="left").pack(anchor="w")

        block("Overview", docs["overview"])
        block("Input", docs["input"])
        block("Output", docs["output"])
        block("AI model", docs["model"])
        block("Implementation steps", "   ".join(f"{i}. {s}" for i, s in enumerate(docs["steps"], 1)))
        block("Related DB tables", "\n".join(f"{name}: {purpose}" for name, purpose in docs["tables"]))
        block("Data flow", "  →  ".join(docs["data_flow"]))
        block("ERD", docs["erd"])
        self.add_close()


class Toast(tk.Toplevel):
    """Borderless message in the bottom-right corner that closes itself."""
    def __init__(self, parent, message, kind="info", duration=3000):
        super().__init__(parent)
        self.overrideredirect(True)
        try:
            self.attributes("-topmost", True)
        except tk.TclError:
            pass
        bg, fg = TOAST_COLORS.get(kind, TOAST_COLORS["info"])
        self.configure(bg=bg)
        tk.Label(self, text=message, bg=bg, fg=fg, padx=16, pady=10,
                 font=("Segoe UI", 10), wraplength=360, justify="left").pack(side="left")
        tk.Button(self, text="✕", bg=bg, fg=fg, relief="flat", bd=0, activebackground=bg,
                  command=self.destroy).pack(side="right", padx=(0, 8))

        self.update_idletasks()
        top = parent.winfo_toplevel()
        x = top.winfo_rootx() + top.winfo_width() - self.winfo_width() - 24
        y = top.winfo_rooty() + top.winfo_height() - self.winfo_height() - 24
        self.geometry(f"+{max(x, 0)}+{max(y, 0)}")
        self.after(duration, self._close)

    def _close(self):
        if self.winfo_exists():
            self.destroy()
