import tkinter as tk

from logic.auth import Session
from logic.config import Settings
from logic.store import DBStore
from ui.admin_frame import AdminFrame
from ui.cases_frame import CasesFrame
from ui.dashboard_frame import DashboardFrame
from ui.login_frame import LoginFrame
from ui.modals import Toast
from ui.reports_frame import ReportsFrame
from ui.result_frames import ClassifyFrame, EmotionFrame, RiskFrame, SimilarFrame, StrategyFrame
from ui.signup_frame import SignupFrame
from ui.simulation_frame import SimulationFrame
from ui.theme import apply_theme

PUBLIC_FRAMES = {"LoginFrame", "SignupFrame"}
ADMIN_FRAMES = {"AdminFrame"}


class App(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("LegalRisk AI - Dispute Analysis Demo")
        self.geometry("1280x800")
        apply_theme(self)

        # App state
        self.settings = Settings.from_env()
        self.db = DBStore()
        self.session = Session()

        # Main container that hosts all pages
        container = tk.Frame(self)
        container.pack(fill="both", expand=True)

        # Make the single grid cell stretch to full window
        container.grid_rowconfigure(0, weight=1)
        container.grid_columnconfigure(0, weight=1)

        # Pages
        self.frames = {}
        for F in (LoginFrame, SignupFrame, DashboardFrame, ClassifyFrame, RiskFrame, EmotionFrame,
                  SimilarFrame, StrategyFrame, SimulationFrame, ReportsFrame, CasesFrame, AdminFrame):
            frame = F(parent=container, controller=self)
            self.frames[F.__name__] = frame
            frame.grid(row=0, column=0, sticky="nsew")

        self.show_frame("LoginFrame")

        # Start maximized so login fills the screen
        self.after(50, self._maximize)

    def _maximize(self):
        try:
            self.state("zoomed")                 # Windows
        except tk.TclError:
            try:
                self.attributes("-zoomed", True)  # some Linux WMs
            except tk.TclError:
                pass

    def show_frame(self, name: str):
        if name not in PUBLIC_FRAMES and not self.session.is_authenticated:
            name = "LoginFrame"
        elif name in ADMIN_FRAMES and not self.session.is_admin:
            self.toast("Administrator access is required.", "error")
            return
        frame = self.frames[name]
        frame.tkraise()
        if hasattr(frame, "on_show"):
            frame.on_show()

    def toast(self, message: str, kind: str = "info"):
        Toast(self, message, kind, duration=self.settings.toast_ms)

    def logout(self):
        self.session.logout()
        print("[Auth] Signed out")
        self.show_frame("LoginFrame")


def main():
    app = App()
    app.mainloop()


if __name__ == "__main__":
    main()
