import customtkinter as ctk
from zoomfixer.config.manager import config_manager
from zoomfixer.services.repair_service import RepairService
from zoomfixer.services.sandbox_service import SandboxService
from zoomfixer.services.state_store import StateStore
from zoomfixer.ui.components.log_view import LogView
from zoomfixer.ui.components.status_indicator import StatusIndicator
from zoomfixer.ui.presenter import present
from zoomfixer.ui.views.sandbox import SandboxFrame

class App(ctk.CTk):
    """
    Main window for ZoomFixer.
    Only reads state snapshots from the StateStore and calls service entry
    points; all work happens on the services' worker threads.
    """
    def __init__(self, store=None):
        super().__init__()

        ctk.set_appearance_mode(config_manager.get("theme", "System"))
        ctk.set_default_color_theme("blue")

        self.title("ZoomFixer")
        self.geometry("760x640")
        self.minsize(640, 520)

        self.store = store or StateStore()
        self.repair_service = RepairService(store=self.store)
        self.sandbox_service = SandboxService(store=self.store)

        container = ctk.CTkFrame(self, fg_color="transparent")
        container.pack(fill="both", expand=True, padx=24, pady=24)

        # Header
        ctk.CTkLabel(container, text="ZoomFixer", font=ctk.CTkFont(size=28, weight="bold")).pack(anchor="w")
        ctk.CTkLabel(container, text="One-click repair for Zoom error 1132.", text_color="gray").pack(anchor="w", pady=(0, 12))

        # Actions
        actions = ctk.CTkFrame(container, fg_color="transparent")
        actions.pack(fill="x", pady=(0, 12))
        self.fix_btn = ctk.CTkButton(actions, text="Fix Zoom 1132", height=40, command=self.repair_service.start_fix)
        self.fix_btn.pack(side="left", fill="x", expand=True, padx=(0, 12))
        ctk.CTkButton(actions, text="Quit", width=80, fg_color="transparent", border_width=1, command=self.quit).pack(side="left")

        self.log_view = LogView(container)
        self.log_view.pack(fill="both", expand=True, pady=(0, 12))

        self.sandbox_frame = SandboxFrame(container, self)
        self.sandbox_frame.pack(fill="x", pady=(0, 12))

        self.status_indicator = StatusIndicator(container)
        self.status_indicator.pack(fill="x")

        self._unsubscribe = self.store.subscribe(self._on_state)
        self.render(*self.store.snapshot())

    def _on_state(self, run, sandbox):
        """Called from worker threads; hop onto the Tk main loop."""
        self.after(0, lambda: self.render(*self.store.snapshot()))

    def render(self, run, sandbox):
        view = present(run, sandbox)

        self.fix_btn.configure(text=view.fix_label, state="normal" if view.fix_enabled else "disabled")
        self.log_view.update_progress(view.show_progress, view.progress, view.progress_label)
        self.log_view.sync(run.logs)
        self.sandbox_frame.render(view, sandbox)
        self.status_indicator.update_status(run.status_kind, run.status_message)

    def destroy(self):
        self._unsubscribe()
        super().destroy()
