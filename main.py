# main.py
import os

# Ensure SDL picks a usable video driver (helps when run from terminals that default to headless)
if os.name == "nt" and not os.environ.get("SDL_VIDEODRIVER"):
    os.environ["SDL_VIDEODRIVER"] = "windows"

import pygame

from tracer.config import load_config, save_config, window_flat
from tracer.codec import DecodeError, pretty_command
from tracer.draw import draw_scene, draw_hud
from tracer.session import EditorSession
from tracer.ui import (
    pump_tk, copy_to_clipboard, read_clipboard, ask_import_text,
    show_error, toggle_output_window, output_refresh
)

APP_TITLE = "PATH TRACER"

CONTROLS = [
    ("LeftClick", "Place a waypoint (snaps to grid if enabled)."),
    ("Alt+Drag / MiddleDrag", "Pan the view."),
    ("Wheel", "Zoom about the cursor."),
    ("Hold Backspace/Delete + Click", "Delete the clicked waypoint."),
    ("CTRL+Z", "Undo last waypoint."),
    ("CTRL+SHIFT+Backspace/Delete", "Clear all waypoints."),
    ("Q / K", "Toggle Snap-to-Grid / Close path."),
    ("C", "Copy ros2 publish command."),
    ("V / CTRL+V", "Import from paste box / straight from clipboard."),
    ("O", "Toggle output window."),
    ("CTRL+S", "Save zoom and snap/close toggles to config.json."),
    ("ESC", "Quit."),
]

CFG = load_config()


def print_controls():
    print(APP_TITLE)
    for key, desc in CONTROLS:
        print(f"  {key:<30} {desc}")


def import_text(session, text):
    """Import and report; a failed decode leaves the path as it was."""
    if text is None:
        return False
    try:
        session.request_import(text)
    except DecodeError as e:
        print(f"Import failed: {e}")
        show_error("Import failed", str(e))
        return False
    return True


def main():
    """Main application loop."""
    win = window_flat(CFG)
    fps = int(win["fps"])

    pygame.init()
    screen = pygame.display.set_mode((int(win["width"]), int(win["height"])), pygame.RESIZABLE)
    pygame.display.set_caption(APP_TITLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont(None, 18)

    session = EditorSession(CFG)
    session.resize(screen.get_width(), screen.get_height())
    print_controls()

    last_cmd = None

    def render():
        nonlocal last_cmd
        draw_scene(screen, session.viewport, session.points, session.close_path, session.hover_px)
        draw_hud(screen, session, font, pygame.time.get_ticks())
        pygame.display.flip()
        cmd = session.command
        if cmd != last_cmd:
            last_cmd = cmd
            output_refresh(pretty_command(cmd))

    running = True
    while running:
        clock.tick(fps)
        pump_tk()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                session.resize(event.w, event.h)

            elif event.type == pygame.WINDOWLEAVE:
                session.pointer_leave()

            elif event.type == pygame.WINDOWEXPOSED:
                session.frame.request()

            elif event.type == pygame.KEYDOWN:
                mods = pygame.key.get_mods()
                ctrl = mods & pygame.KMOD_CTRL
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_z and ctrl:
                    session.undo()
                elif event.key in (pygame.K_BACKSPACE, pygame.K_DELETE) and ctrl and (mods & pygame.KMOD_SHIFT):
                    session.clear()
                elif event.key == pygame.K_q:
                    session.toggle_snap()
                elif event.key == pygame.K_k:
                    session.toggle_close()
                elif event.key == pygame.K_c and not ctrl:
                    cmd = session.request_copy(pygame.time.get_ticks())
                    if cmd:
                        copy_to_clipboard(cmd)
                elif event.key == pygame.K_v:
                    if ctrl:
                        import_text(session, read_clipboard())
                    else:
                        import_text(session, ask_import_text(read_clipboard()))
                elif event.key == pygame.K_o:
                    toggle_output_window(pretty_command(session.command))
                elif event.key == pygame.K_s and ctrl:
                    save_config(session.to_config(CFG))

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 2):
                keys = pygame.key.get_pressed()
                if event.button == 1 and (keys[pygame.K_DELETE] or keys[pygame.K_BACKSPACE]):
                    session.remove_near(*event.pos)
                    continue
                alt = bool(pygame.key.get_mods() & pygame.KMOD_ALT)
                session.pointer_down(event.pos[0], event.pos[1], event.button, alt)

            elif event.type == pygame.MOUSEBUTTONUP and event.button in (1, 2):
                session.pointer_up(event.pos[0], event.pos[1], event.button)

            elif event.type == pygame.MOUSEMOTION:
                session.pointer_move(*event.pos)

            elif event.type == pygame.MOUSEWHEEL:
                mx, my = pygame.mouse.get_pos()
                session.wheel(mx, my, event.y)

        session.tick(pygame.time.get_ticks())
        session.frame.run(render)

    pygame.quit()


if __name__ == "__main__":
    main()
