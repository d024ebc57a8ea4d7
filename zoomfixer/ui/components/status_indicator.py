import customtkinter as ctk
from zoomfixer.ui.presenter import status_color

class StatusIndicator(ctk.CTkFrame):
    """Coloured dot plus the current status message."""

    def __init__(self, master):
        super().__init__(master, fg_color="transparent")

        self.dot = ctk.CTkLabel(self, text="●", font=("Arial", 16), text_color="gray", width=16)
        self.dot.pack(side="left", padx=(0, 8))

        self.message = ctk.CTkLabel(self, text="Idle", text_color="gray")
        self.message.pack(side="left")

    def update_status(self, kind, message):
        self.dot.configure(text_color=status_color(kind))
        self.message.configure(text=message)
