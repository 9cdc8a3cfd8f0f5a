import tkinter as tk
from tkinter import ttk

from logic.validation import ValidationError, password_checks


class SignupFrame(tk.Frame):
    def __init__(self, parent, controller):
        super().__init__(parent)
        self.controller = controller

        root = ttk.Frame(self, style="App.TFrame")
        root.pack(fill="both", expand=True)
        card = ttk.Frame(root, style="Card.TFrame", padding=24)
        card.place(relx=0.5, rely=0.5, anchor="c", width=520)

        ttk.Label(card, text="Create account", style="Title.TLabel").pack(anchor="w")
        ttk.Label(card, text="Start analysing your dispute", style="CardMuted.TLabel").pack(anchor="w", pady=(0, 12))

        form = ttk.Frame(card, style="Card.TFrame")
        form.pack(fill="x")
        form.grid_columnconfigure(0, weight=1)

        self.vars = {}
        fields = [("name", "Name", ""), ("email", "Email", ""),
                  ("password", "Password", "•"), ("confirm", "Confirm password", "•")]
        for i, (key, label, show) in enumerate(fields):
            ttk.Label(form, text=label, style="Field.TLabel").grid(row=i * 2, column=0, sticky="w", pady=(10, 2))
            var = tk.StringVar()
            ttk.Entry(form, textvariable=var, show=show).grid(row=i * 2 + 1, column=0, sticky="ew")
            self.vars[key] = var

        self.check_labels = []
        checks = ttk.Frame(card, style="Card.TFrame")
        checks.pack(fill="x", pady=(8, 0))
        for _ in password_checks("", ""):
            lbl = ttk.Label(checks, text="", style="CardMuted.TLabel")
            lbl.pack(anchor="w")
            self.check_labels.append(lbl)
        self.vars["password"].trace_add("write", lambda *_: self._update_checks())
        self.vars["confirm"].trace_add("write", lambda *_: self._update_checks())
        self._update_checks()

        self.error_label = ttk.Label(card, text="", style="Error.TLabel")
        self.error_label.pack(anchor="w", pady=(8, 0))

        self.submit_btn = ttk.Button(card, text="Sign up", style="Accent.TButton", command=self.signup)
        self.submit_btn.pack(fill="x", pady=(8, 8))
        ttk.Button(card, text="Already have an account? Log in", style="Ghost.TButton",
                   command=lambda: controller.show_frame("LoginFrame")).pack(fill="x")

    def on_show(self):
        for var in self.vars.values():
            var.set("")
        self.error_label.config(text="")

    def _update_checks(self):
        for lbl, (text, ok) in zip(self.check_labels,
                                   password_checks(self.vars["password"].get(), self.vars["confirm"].get())):
            lbl.config(text=("✓ " if ok else "○ ") + text, style="Check.TLabel" if ok else "CardMuted.TLabel")

    def signup(self):
        self.error_label.config(text="")
        try:
            self.controller.session.signup(self.vars["name"].get(), self.vars["email"].get(),
                                           self.vars["password"].get(), self.vars["confirm"].get())
        except ValidationError as e:
            self.error_label.config(text=str(e))
            return
        self.controller.toast("Welcome! Your account has been created.", "success")
        self.controller.show_frame("DashboardFrame")
