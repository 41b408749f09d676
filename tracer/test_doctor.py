# Environment check helpers must pass on any install that can run the editor.
import doctor


def test_surface_bytes_check():
    assert doctor._surface_bytes_ok() is True


def test_codec_round_trip_check():
    assert doctor._codec_round_trip_ok() is True


def test_main_reports_each_check(capsys):
    doctor.main()
    out = capsys.readouterr().out
    assert "pygame.image.tobytes" in out
    assert "publish command round trip" in out


def run():
    test_surface_bytes_check()
    test_codec_round_trip_check()


if __name__ == "__main__":
    run()
