"""
Tkinter helpers for the path tracer: hidden root, clipboard, paste dialog,
output window and error boxes.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox

tk_root = None
tk_output_win = None
tk_output_text = None


def ensure_tk_root():
    """Initialize Tkinter root window with styling."""
    global tk_root
    if tk_root is None or not (hasattr(tk_root, "winfo_exists") and tk_root.winfo_exists()):
        tk_root = tk.Tk()
        try:
            style = ttk.Style(tk_root)
            if "clam" in style.theme_names():
                style.theme_use("clam")
            style.configure("TFrame", padding=6)
            style.configure("TButton", padding=4)
            style.configure("Help.TLabel", foreground="#777777")
        except tk.TclError:
            pass
        tk_root.withdraw()
    return tk_root


def pump_tk():
    """Update Tkinter event loop."""
    global tk_root, tk_output_win, tk_output_text
    if tk_root is None:
        return
    try:
        tk_root.update()
        if tk_output_win is not None and not tk_output_win.winfo_exists():
            tk_output_win = None
            tk_output_text = None
    except tk.TclError:
        tk_root = None
        tk_output_win = None
        tk_output_text = None


def copy_to_clipboard(text: str) -> bool:
    """Place text on the system clipboard via Tk."""
    root = ensure_tk_root()
    try:
        root.clipboard_clear()
        root.clipboard_append(text)
        root.update()
        return True
    except tk.TclError as e:
        print(f"Clipboard unavailable: {e}")
        return False


def read_clipboard() -> str:
    root = ensure_tk_root()
    try:
        return root.clipboard_get()
    except tk.TclError:
        return ""


def ask_import_text(initial: str = ""):
    """Modal paste box; returns the entered text or None when cancelled."""
    root = ensure_tk_root()
    result = {"text": None}
    top = tk.Toplevel(root)
    top.title("Import path")
    top.geometry("640x320")
    frame = ttk.Frame(top)
    frame.pack(fill="both", expand=True)
    ttk.Label(frame, text="Paste a ros2 publish command (or any text with position: {x: .., y: ..})",
              style="Help.TLabel").pack(anchor="w")
    txt = tk.Text(frame, wrap="word", height=12)
    txt.pack(fill="both", expand=True)
    if initial:
        txt.insert("end", initial)

    def _ok():
        result["text"] = txt.get("1.0", "end")
        top.destroy()

    buttons = ttk.Frame(frame)
    buttons.pack(fill="x")
    ttk.Button(buttons, text="Import", command=_ok).pack(side="right")
    ttk.Button(buttons, text="Cancel", command=top.destroy).pack(side="right")
    top.protocol("WM_DELETE_WINDOW", top.destroy)
    txt.focus_set()
    top.grab_set()
    root.wait_window(top)
    return result["text"]


def show_error(title: str, message: str) -> None:
    ensure_tk_root()
    messagebox.showerror(title, message)


def output_refresh(text: str):
    """Refresh output window content."""
    if tk_output_win and tk_output_text:
        try:
            tk_output_text.config(state="normal")
            tk_output_text.delete("1.0", "end")
            tk_output_text.insert("end", text or "No points placed yet")
            tk_output_text.config(state="disabled")
        except tk.TclError:
            pass


def toggle_output_window(text: str):
    """Toggle output window visibility."""
    global tk_output_win, tk_output_text
    ensure_tk_root()
    if tk_output_win and tk_output_win.winfo_exists():
        try:
            tk_output_win.destroy()
        except tk.TclError:
            pass
        tk_output_win = None
        tk_output_text = None
        return
    top = tk.Toplevel(tk_root)
    tk_output_win = top
    top.title("ROS2 publish command")
    top.geometry("700x500")
    top.resizable(True, True)
    txt = tk.Text(top, wrap="word")
    txt.pack(fill="both", expand=True)
    txt.insert("end", text or "No points placed yet")
    txt.config(state="disabled")
    tk_output_text = txt
    top.protocol("WM_DELETE_WINDOW", lambda: top.destroy())
