import customtkinter as ctk
from zoomfixer.config import constants

class SandboxFrame(ctk.CTkFrame):
    def __init__(self, master, app):
        super().__init__(master)
        self.app = app
        sandbox = app.sandbox_service

        ctk.CTkLabel(self, text="Sandbox Zoom (Docker)", font=("Arial", 14, "bold")).pack(anchor="w", padx=10, pady=(10, 0))
        ctk.CTkLabel(
            self,
            text=(
                "Run Zoom inside an isolated Linux container to appear as a fresh device. "
                "Requires Docker Desktop. Connect via browser (noVNC) at "
                f"{constants.SANDBOX_VIEWER_URL} or VNC on localhost:{constants.VNC_PORT}."
            ),
            text_color="gray",
            wraplength=640,
            justify="left",
        ).pack(anchor="w", padx=10, pady=5)

        row = ctk.CTkFrame(self, fg_color="transparent")
        row.pack(fill="x", padx=10, pady=5)

        self.auto_btn = ctk.CTkButton(row, text="One-click Sandbox", command=sandbox.auto_prepare_and_launch)
        self.auto_btn.pack(side="left", padx=(0, 8))

        self.launch_btn = ctk.CTkButton(
            row, text="Launch Docker Sandbox", fg_color="transparent", border_width=1,
            command=sandbox.launch_docker_sandbox
        )
        self.launch_btn.pack(side="left", padx=8)

        self.tool_btns = []
        for text, command in (
            ("Re-check Docker", sandbox.check_docker_availability),
            ("Install via Homebrew", sandbox.install_docker_via_homebrew),
            ("Install Docker", sandbox.open_docker_download_page),
        ):
            btn = ctk.CTkButton(row, text=text, fg_color="transparent", border_width=1, command=command)
            btn.pack(side="left", padx=8)
            self.tool_btns.append(btn)

        self.spinner = ctk.CTkProgressBar(row, mode="indeterminate", width=60)

        self.status_lbl = ctk.CTkLabel(self, text="", text_color="gray", wraplength=640, justify="left")
        self.status_lbl.pack(anchor="w", padx=10, pady=(0, 10))

    def render(self, view, sandbox_state):
        self.auto_btn.configure(text=view.auto_label, state="normal" if view.auto_enabled else "disabled")
        self.launch_btn.configure(text=view.launch_label, state="normal" if view.launch_enabled else "disabled")
        for btn in self.tool_btns:
            btn.configure(state="normal" if view.sandbox_tools_enabled else "disabled")

        if view.show_spinner and not self.spinner.winfo_manager():
            self.spinner.pack(side="left", padx=8)
            self.spinner.start()
        elif not view.show_spinner and self.spinner.winfo_manager():
            self.spinner.stop()
            self.spinner.pack_forget()

        self.status_lbl.configure(text=sandbox_state.status)
