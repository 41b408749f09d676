"""Run local environment checks for Path Tracer."""

import platform
import sys
from pathlib import Path


def _ok(flag: bool) -> str:
    return "PASS" if flag else "FAIL"


def _can_write(path: Path) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        probe = path.parent / ".tracer_write_test"
        probe.write_text("ok", encoding="utf-8")
        probe.unlink()
        return True
    except OSError:
        return False


def _surface_bytes_ok() -> bool:
    """Off-screen rendering plus pygame.image.tobytes, which the draw checks rely on."""
    try:
        import pygame
    except ImportError:
        return False
    try:
        surf = pygame.Surface((4, 4))
        surf.fill((1, 2, 3))
        return pygame.image.tobytes(surf, "RGB")[:3] == b"\x01\x02\x03"
    except (AttributeError, pygame.error):
        return False


def _codec_round_trip_ok() -> bool:
    """Encode a small path and read it back."""
    try:
        from tracer.codec import encode_path, decode_path
    except ImportError:
        return False
    pts = [(0.0, 0.0), (2.0, 3.5), (-1.25, 0.001)]
    return decode_path(encode_path(pts)) == pts


def main() -> int:
    root = Path(__file__).resolve().parent
    print("Path Tracer Doctor")
    print(f"- OS: {platform.system()} {platform.release()}")
    print(f"- Python: {platform.python_version()} ({sys.executable})")

    py_ok = sys.version_info >= (3, 8)
    print(f"[{_ok(py_ok)}] Python >= 3.8")
    if not py_ok:
        return 1

    try:
        import tkinter  # noqa: F401
        tk_ok = True
    except ImportError:
        tk_ok = False
    print(f"[{_ok(tk_ok)}] tkinter available")

    try:
        import pygame  # noqa: F401
        pg_ok = True
    except ImportError:
        pg_ok = False
    print(f"[{_ok(pg_ok)}] pygame available")

    surf_ok = pg_ok and _surface_bytes_ok()
    print(f"[{_ok(surf_ok)}] off-screen surfaces and pygame.image.tobytes")

    required = [
        root / "main.py",
        root / "tracer" / "config.py",
        root / "tracer" / "codec.py",
        root / "tracer" / "session.py",
    ]
    files_ok = all(p.exists() for p in required)
    print(f"[{_ok(files_ok)}] core files present")
    if not files_ok:
        for p in required:
            if not p.exists():
                print(f"       Missing: {p}")

    codec_ok = files_ok and _codec_round_trip_ok()
    print(f"[{_ok(codec_ok)}] publish command round trip")

    try:
        from tracer.config import default_config_path
        cfg_path = Path(default_config_path())
    except ImportError:
        cfg_path = root / "config.json"
    writable = _can_write(cfg_path)
    print(f"[{_ok(writable)}] writable config path available ({cfg_path})")

    all_ok = py_ok and tk_ok and pg_ok and surf_ok and files_ok and codec_ok and writable
    if all_ok:
        print("All checks passed.")
        return 0
    print("One or more checks failed.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
