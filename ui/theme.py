import tkinter as tk
from tkinter import ttk

# Palette
PRIMARY  = "#0ea5e9"  # cyan-500
BG       = "#0b1220"  # slate-950
CARD_BG  = "#0f172a"  # slate-900
FG       = "#e5e7eb"  # gray-200
MUTED    = "#94a3b8"  # gray-400
FIELD_BG = "#111827"  # gray-900
BORDER   = "#1f2937"  # slate-800
DANGER   = "#ef4444"  # red-500
ROW_EVEN = "#0b1220"
ROW_ODD  = "#0e1627"
HIGHLIGHT = "#7f1d1d"  # red-900

BADGE_COLORS = {
    "default": ("#374151", FG),
    "primary": ("#0369a1", "#e0f2fe"),
    "success": ("#166534", "#dcfce7"),
    "warning": ("#854d0e", "#fef9c3"),
    "danger":  ("#991b1b", "#fee2e2"),
    "info":    ("#1e40af", "#dbeafe"),
}

FONT = "Segoe UI"


def apply_theme(widget: tk.Misc):
    """Configure every ttk style the frames and dialogs use."""
    style = ttk.Style(widget)
    try:
        style.theme_use("clam")
    except tk.TclError:
        pass

    style.configure("App.TFrame", background=BG)
    style.configure("Toolbar.TFrame", background=BG)
    style.configure("Card.TFrame", background=CARD_BG)
    style.configure("Dialog.TFrame", background=CARD_BG)

    style.configure("H1.TLabel", background=BG, foreground=FG, font=(FONT, 18, "bold"))
    style.configure("Sub.TLabel", background=BG, foreground=MUTED, font=(FONT, 10))
    style.configure("Role.TLabel", background=BG, foreground=FG, font=(FONT, 10, "bold"))
    style.configure("Title.TLabel", background=CARD_BG, foreground=FG, font=(FONT, 22, "bold"))
    style.configure("CardTitle.TLabel", background=CARD_BG, foreground=FG, font=(FONT, 12, "bold"))
    style.configure("Card.TLabel", background=CARD_BG, foreground=FG)
    style.configure("CardMuted.TLabel", background=CARD_BG, foreground=MUTED)
    style.configure("Big.TLabel", background=CARD_BG, foreground=FG, font=(FONT, 20, "bold"))
    style.configure("Field.TLabel", background=CARD_BG, foreground=FG, font=(FONT, 10, "bold"))
    style.configure("Error.TLabel", background=CARD_BG, foreground=DANGER)
    style.configure("Check.TLabel", background=CARD_BG, foreground="#22c55e")

    style.configure("TEntry",
                    fieldbackground=FIELD_BG, foreground=FG,
                    insertcolor=FG, bordercolor=BORDER, padding=8)
    style.map("TEntry",
              fieldbackground=[("disabled", "#1f2937"), ("!disabled", FIELD_BG)],
              bordercolor=[("focus", PRIMARY), ("!focus", BORDER)])

    style.configure("Accent.TButton", background=PRIMARY, foreground="#0b1220",
                    padding=(14, 8), borderwidth=0)
    style.map("Accent.TButton",
              background=[("disabled", "#334155"), ("active", "#22d3ee"), ("!active", PRIMARY)],
              foreground=[("disabled", "#cbd5e1"), ("!disabled", "#0b1220")])

    style.configure("Ghost.TButton", background=BG, foreground=MUTED,
                    padding=(12, 8), borderwidth=0)
    style.map("Ghost.TButton",
              background=[("active", "#111827")],
              foreground=[("active", FG), ("!active", MUTED)])

    style.configure("Nav.TButton", background=BG, foreground=MUTED,
                    padding=(10, 6), borderwidth=0)
    style.map("Nav.TButton",
              background=[("active", "#111827")],
              foreground=[("active", PRIMARY), ("!active", MUTED)])

    style.configure("Danger.TButton", background=DANGER, foreground="#0b1220",
                    padding=(12, 8), borderwidth=0)
    style.map("Danger.TButton",
              background=[("active", "#f87171"), ("!active", DANGER)])

    style.configure("Card.TCheckbutton", background=CARD_BG, foreground=FG)
    style.map("Card.TCheckbutton", background=[("active", CARD_BG)])
    style.configure("Card.TRadiobutton", background=CARD_BG, foreground=FG)
    style.map("Card.TRadiobutton", background=[("active", CARD_BG)])

    style.configure("Treeview",
                    background=CARD_BG, fieldbackground=CARD_BG, foreground=FG,
                    bordercolor=BORDER, rowheight=28)
    style.configure("Treeview.Heading",
                    background=BG, foreground=FG, bordercolor=BORDER,
                    font=(FONT, 10, "bold"))

    style.configure("TNotebook", background=CARD_BG, borderwidth=0)
    style.configure("TNotebook.Tab", background=BG, foreground=MUTED, padding=(14, 6))
    style.map("TNotebook.Tab",
              background=[("selected", CARD_BG)],
              foreground=[("selected", FG)])

    style.configure("Blue.Horizontal.TProgressbar", troughcolor=FIELD_BG,
                    background=PRIMARY, bordercolor=BORDER, lightcolor=PRIMARY, darkcolor=PRIMARY)
    return style


def zebra(tree: ttk.Treeview):
    tree.tag_configure("evenrow", background=ROW_EVEN)
    tree.tag_configure("oddrow", background=ROW_ODD)


def row_tag(i: int) -> str:
    return "evenrow" if i % 2 == 0 else "oddrow"
