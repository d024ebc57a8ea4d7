import traceback
from tkinter import messagebox

from zoomfixer.utils.logger import log
from zoomfixer.services.system_service import SystemService

def main():
    try:
        log.info("Starting ZoomFixer...")

        if not SystemService.is_macos():
            log.warning("ZoomFixer repairs the macOS Zoom client; repair steps will fail on this platform.")

        # Import UI lazily so logging is up before customtkinter loads
        from zoomfixer.ui.app import App

        app = App()
        app.mainloop()

        log.info("Application exited normally.")

    except Exception as e:
        log.critical(f"Unhandled exception: {e}")
        traceback.print_exc()
        try:
            messagebox.showerror("Critical Error", f"An error occurred:\n{e}\n\nCheck logs for details.")
        except Exception:
            print("Could not show error message box.")

if __name__ == "__main__":
    main()
