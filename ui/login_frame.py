import tkinter as tk
from tkinter import ttk

from logic.validation import ValidationError


class LoginFrame(tk.Frame):
    """
    Centered sign-in card.
    The card stays centered and its width adapts to the window size.
    """
    def __init__(self, parent, controller):
        super().__init__(parent)
        self.controller = controller

        root = ttk.Frame(self, style="App.TFrame")
        root.pack(fill="both", expand=True)

        self.card = ttk.Frame(root, style="Card.TFrame", padding=24)
        self.card.place(relx=0.5, rely=0.5, anchor="c", width=520)
        root.bind("<Configure>", self._on_resize)
        self.after(10, self._on_resize)

        ttk.Label(self.card, text="LegalRisk AI", style="Title.TLabel").pack(anchor="w")
        ttk.Label(self.card, text="Sign in to continue", style="CardMuted.TLabel").pack(anchor="w", pady=(0, 12))

        form = ttk.Frame(self.card, style="Card.TFrame")
        form.pack(fill="x")
        form.grid_columnconfigure(0, weight=1)

        ttk.Label(form, text="Email", style="Field.TLabel").grid(row=0, column=0, sticky="w", pady=(2, 2))
        self.email_var = tk.StringVar()
        self.email_entry = ttk.Entry(form, textvariable=self.email_var)
        self.email_entry.grid(row=1, column=0, sticky="ew")

        ttk.Label(form, text="Password", style="Field.TLabel").grid(row=2, column=0, sticky="w", pady=(12, 2))
        pw_row = ttk.Frame(form, style="Card.TFrame")
        pw_row.grid(row=3, column=0, sticky="ew")
        pw_row.grid_columnconfigure(0, weight=1)

        self.password_var = tk.StringVar()
        self.password_entry = ttk.Entry(pw_row, textvariable=self.password_var, show="•")
        self.password_entry.grid(row=0, column=0, sticky="ew")

        self._pw_hidden = True
        self.eye_btn = ttk.Button(pw_row, text="👁  Show", width=10,
                                  style="Ghost.TButton", command=self._toggle_pw)
        self.eye_btn.grid(row=0, column=1, padx=(8, 0), sticky="e")

        self.error_label = ttk.Label(self.card, text="", style="Error.TLabel")
        self.error_label.pack(anchor="w", pady=(8, 0))

        self.login_btn = ttk.Button(self.card, text="Log in", style="Accent.TButton", command=self.login)
        self.login_btn.pack(fill="x", pady=(8, 8))
        ttk.Button(self.card, text="No account? Sign up", style="Ghost.TButton",
                   command=lambda: controller.show_frame("SignupFrame")).pack(fill="x")

        ttk.Label(
            self.card,
            text="Demo accounts: admin@legalrisk.ai / admin123 · user@legalrisk.ai / user123",
            style="CardMuted.TLabel",
        ).pack(anchor="w", pady=(8, 0))

        self.email_entry.bind("<Return>", lambda e: self.login())
        self.password_entry.bind("<Return>", lambda e: self.login())

    def on_show(self):
        self.password_var.set("")
        self.error_label.config(text="")
        self.after(100, lambda: self.email_entry.focus_set())

    def _on_resize(self, event=None):
        w = max(self.winfo_width(), 380)
        target_w = max(380, min(int(w * 0.40), 760))
        self.card.place_configure(relx=0.5, rely=0.5, anchor="c", width=target_w)

    def _toggle_pw(self):
        self._pw_hidden = not self._pw_hidden
        self.password_entry.configure(show="•" if self._pw_hidden else "")
        self.eye_btn.configure(text=("👁  Show" if self._pw_hidden else "🙈  Hide"))

    def login(self):
        self.error_label.config(text="")
        self.login_btn.config(state="disabled", text="Signing in…")
        # simulated round trip
        self.after(800, self._finish_login)

    def _finish_login(self):
        self.login_btn.config(state="normal", text="Log in")
        try:
            self.controller.session.login(self.email_var.get(), self.password_var.get())
        except ValidationError as e:
            self.error_label.config(text=str(e))
            self.password_entry.focus_set()
            return
        self.controller.show_frame("DashboardFrame")
