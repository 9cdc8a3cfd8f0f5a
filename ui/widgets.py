import tkinter as tk
from tkinter import ttk
from typing import Iterable

from PIL import Image, ImageTk

from ui.theme import BADGE_COLORS, BG, CARD_BG, FG, FIELD_BG, FONT

NAV_ITEMS = [
    ("Dashboard", "DashboardFrame"),
    ("Classify", "ClassifyFrame"),
    ("Risk", "RiskFrame"),
    ("Emotion", "EmotionFrame"),
    ("Similar", "SimilarFrame"),
    ("Strategy", "StrategyFrame"),
    ("Simulation", "SimulationFrame"),
    ("Reports", "ReportsFrame"),
    ("My page", "CasesFrame"),
    ("Admin", "AdminFrame"),
]


class NavBar(ttk.Frame):
    """Top bar shared by the signed-in pages: links on the left, user + logout on the right."""
    def __init__(self, parent, controller):
        super().__init__(parent, style="Toolbar.TFrame", padding=(12, 8))
        self.controller = controller
        ttk.Label(self, text="⚖ LegalRisk AI", style="Role.TLabel").pack(side="left", padx=(0, 12))
        self.admin_btn = None
        for label, frame in NAV_ITEMS:
            btn = ttk.Button(self, text=label, style="Nav.TButton",
                             command=lambda f=frame: controller.show_frame(f))
            btn.pack(side="left")
            if frame == "AdminFrame":
                self.admin_btn = btn
        ttk.Button(self, text="Log out", style="Ghost.TButton",
                   command=controller.logout).pack(side="right")
        self.user_label = ttk.Label(self, text="", style="Role.TLabel")
        self.user_label.pack(side="right", padx=8)

    def refresh(self):
        user = self.controller.session.user
        self.user_label.config(text=f"{user.name} ({user.role})" if user else "")
        if self.admin_btn is not None:
            self.admin_btn.config(state="normal" if self.controller.session.is_admin else "disabled")


class Badge(tk.Label):
    def __init__(self, parent, text, variant="default", **kw):
        bg, fg = BADGE_COLORS.get(variant, BADGE_COLORS["default"])
        super().__init__(parent, text=text, bg=bg, fg=fg, padx=8, pady=2,
                         font=(FONT, 9, "bold"), **kw)


class ChipGroup(tk.Frame):
    """Wrapped row of keyword chips."""
    def __init__(self, parent, chips: Iterable[str], variant="primary", per_row=4):
        super().__init__(parent, bg=CARD_BG)
        for i, chip in enumerate(chips):
            Badge(self, f"#{chip}", variant).grid(row=i // per_row, column=i % per_row,
                                                    sticky="w", padx=3, pady=3)


class ImageLabel(tk.Label):
    """Label showing a PIL image; keeps the PhotoImage reference alive."""
    def __init__(self, parent, image: Image.Image = None, **kw):
        super().__init__(parent, bg=kw.pop("bg", CARD_BG), **kw)
        self._photo = None
        if image is not None:
            self.set_image(image)

    def set_image(self, image: Image.Image):
        self._photo = ImageTk.PhotoImage(image)
        self.configure(image=self._photo)


class ScrollFrame(ttk.Frame):
    """Vertically scrollable container; put children in `.inner`."""
    def __init__(self, parent, style="Card.TFrame"):
        super().__init__(parent, style=style)
        bg = CARD_BG if style == "Card.TFrame" else BG
        self.canvas = tk.Canvas(self, bg=bg, highlightthickness=0)
        yscroll = ttk.Scrollbar(self, orient="vertical", command=self.canvas.yview)
        self.canvas.configure(yscrollcommand=yscroll.set)
        self.inner = ttk.Frame(self.canvas, style=style)
        self._win = self.canvas.create_window((0, 0), window=self.inner, anchor="nw")
        self.inner.bind("<Configure>",
                        lambda e: self.canvas.configure(scrollregion=self.canvas.bbox("all")))
        self.canvas.bind("<Configure>", lambda e: self.canvas.itemconfigure(self._win, width=e.width))
        self.canvas.pack(side="left", fill="both", expand=True)
        yscroll.pack(side="right", fill="y")
        self.canvas.bind("<Enter>", lambda e: self._bind_wheel(True))
        self.canvas.bind("<Leave>", lambda e: self._bind_wheel(False))

    def _bind_wheel(self, on: bool):
        if on:
            self.canvas.bind_all("<MouseWheel>", self._on_wheel)               # Windows/macOS
            self.canvas.bind_all("<Button-4>", lambda e: self.canvas.yview_scroll(-1, "units"))  # X11 up
            self.canvas.bind_all("<Button-5>", lambda e: self.canvas.yview_scroll(1, "units"))   # X11 down
        else:
            self.canvas.unbind_all("<MouseWheel>")
            self.canvas.unbind_all("<Button-4>")
            self.canvas.unbind_all("<Button-5>")

    def _on_wheel(self, event):
        self.canvas.yview_scroll(-1 if event.delta > 0 else 1, "units")

    def clear(self):
        for w in self.inner.winfo_children():
            w.destroy()
        self.canvas.yview_moveto(0)


def text_box(parent, height=12, width=48, readonly=False, text=""):
    box = tk.Text(parent, width=width, height=height, wrap="word",
                  bg=FIELD_BG, fg=FG, insertbackground=FG, relief="flat",
                  padx=8, pady=8)
    if text:
        box.insert("1.0", text)
    if readonly:
        box.configure(state="disabled")
    return box


def section(parent, title):
    ttk.Label(parent, text=title, style="CardMuted.TLabel").pack(anchor="w", pady=(12, 4))


def paragraph(parent, text, wrap=420, style="Card.TLabel"):
    lbl = ttk.Label(parent, text=text, style=style, wraplength=wrap, justify="left")
    lbl.pack(anchor="w", fill="x")
    return lbl


def toggle_pack(widget, **pack_opts) -> bool:
    """Pack `widget` if it is not packed, otherwise forget it. Returns True when now shown."""
    # winfo_ismapped() is False for packed widgets scrolled out of view
    if widget.winfo_manager() == "pack":
        widget.pack_forget()
        return False
    widget.pack(**pack_opts)
    return True
