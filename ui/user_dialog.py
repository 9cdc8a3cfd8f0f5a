import tkinter as tk
from dataclasses import replace
from tkinter import ttk, messagebox

from logic.admin import ROLES, STATUSES
from logic.validation import ValidationError, validate_email
from ui.modals import Dialog


class UserDialog(Dialog):
    """Edit dialog for one managed user; `result` holds the edited copy after Save."""
    def __init__(self, parent, user):
        super().__init__(parent, "Edit user", minsize=(460, 360))
        self.user = user
        self.result = None

        form = ttk.Frame(self.body, style="Dialog.TFrame")
        form.pack(fill="x")
        form.grid_columnconfigure(0, weight=1)

        # Name
        ttk.Label(form, text="Name", style="Field.TLabel").grid(row=0, column=0, sticky="w", pady=(2, 2))
        self.name_var = tk.StringVar(value=user.name)
        name_entry = ttk.Entry(form, textvariable=self.name_var)
        name_entry.grid(row=1, column=0, sticky="ew")

        # Email
        ttk.Label(form, text="Email", style="Field.TLabel").grid(row=2, column=0, sticky="w", pady=(12, 2))
        self.email_var = tk.StringVar(value=user.email)
        ttk.Entry(form, textvariable=self.email_var).grid(row=3, column=0, sticky="ew")

        # Role / status
        ttk.Label(form, text="Role", style="Field.TLabel").grid(row=4, column=0, sticky="w", pady=(12, 2))
        self.role_var = tk.StringVar(value=user.role)
        ttk.Combobox(form, textvariable=self.role_var, values=ROLES,
                     state="readonly").grid(row=5, column=0, sticky="ew")
        ttk.Label(form, text="Status", style="Field.TLabel").grid(row=6, column=0, sticky="w", pady=(12, 2))
        self.status_var = tk.StringVar(value=user.status)
        ttk.Combobox(form, textvariable=self.status_var, values=STATUSES,
                     state="readonly").grid(row=7, column=0, sticky="ew")

        # Actions
        actions = ttk.Frame(self.body, style="Dialog.TFrame")
        actions.pack(fill="x", pady=(12, 0))
        ttk.Button(actions, text="Cancel", style="Ghost.TButton", command=self._cancel).pack(side="right", padx=6)
        ttk.Button(actions, text="Save", style="Accent.TButton", command=self._save).pack(side="right")

        self.bind("<Control-s>", lambda e: self._save())
        self.after(50, lambda: name_entry.focus_set())

    def _cancel(self):
        self.result = None
        self.destroy()

    def _save(self):
        name = (self.name_var.get() or "").strip()
        if not name:
            messagebox.showerror("Validation", "Name required.", parent=self)
            return
        try:
            email = validate_email(self.email_var.get())
        except ValidationError as e:
            messagebox.showerror("Validation", str(e), parent=self)
            return
        self.result = replace(self.user, name=name, email=email,
                              role=self.role_var.get(), status=self.status_var.get())
        self.destroy()
