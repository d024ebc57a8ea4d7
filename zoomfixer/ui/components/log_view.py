import customtkinter as ctk

class LogView(ctk.CTkFrame):
    """Activity log with a progress bar above it."""

    def __init__(self, master):
        super().__init__(master)

        self.label = ctk.CTkLabel(self, text="Ready", font=("Arial", 12))
        self.label.pack(anchor="w", padx=10, pady=(10, 5))

        self.progress_bar = ctk.CTkProgressBar(self)
        self.progress_bar.set(0)
        self._progress_mode = None

        ctk.CTkLabel(self, text="Activity log", font=("Arial", 14, "bold")).pack(anchor="w", padx=10)
        self.log_box = ctk.CTkTextbox(self, height=260, font=("Menlo", 12))
        self.log_box.pack(fill="both", expand=True, padx=10, pady=10)
        self.log_box.configure(state="disabled")
        self._shown = ()

    def update_progress(self, visible, value, label):
        self.label.configure(text=label)

        if not visible:
            self._stop_indeterminate()
            self.progress_bar.pack_forget()
            return

        if not self.progress_bar.winfo_manager():
            self.progress_bar.pack(fill="x", padx=10, pady=(0, 10), after=self.label)

        if value is None:
            if self._progress_mode != "indeterminate":
                self.progress_bar.configure(mode="indeterminate")
                self.progress_bar.start()
                self._progress_mode = "indeterminate"
        else:
            self._stop_indeterminate()
            self.progress_bar.set(value)

    def _stop_indeterminate(self):
        if self._progress_mode == "indeterminate":
            self.progress_bar.stop()
            self.progress_bar.configure(mode="determinate")
        self._progress_mode = "determinate"

    def sync(self, lines):
        """Render ``lines``; appends when the log grew, redraws when a new run reset it."""
        if lines == self._shown:
            return

        self.log_box.configure(state="normal")
        if lines[:len(self._shown)] != self._shown:
            self.log_box.delete("1.0", "end")
            self._shown = ()
        for line in lines[len(self._shown):]:
            self.log_box.insert("end", line + "\n")
        self._shown = tuple(lines)
        self.log_box.see("end")
        self.log_box.configure(state="disabled")
