import pytest
from PIL import Image

from asciicam import cli
from tests.conftest import FakeCamera, gray_image


@pytest.fixture
def gray_png(tmp_path):
    path = tmp_path / "gray.png"
    gray_image().save(path)
    return path


def test_image_ascii(gray_png, capsys):
    cli.main(["image", str(gray_png)])
    out = capsys.readouterr().out
    assert out == ("+" * 100 + "\n") * 27


def test_image_writes_text_file(gray_png, tmp_path, capsys):
    target = tmp_path / "out.txt"
    cli.main(["image", str(gray_png), "-w", "50", "-o", str(target)])
    assert target.read_text(encoding="utf-8") == capsys.readouterr().out
    assert target.read_text(encoding="utf-8").splitlines()[0] == "+" * 50


def test_image_pixel_png(gray_png, tmp_path, capsys):
    target = tmp_path / "out.png"
    cli.main(["image", str(gray_png), "-m", "pixel", "-p", "mono", "--png", str(target), "--scale", "4"])
    with Image.open(target) as saved:
        assert saved.size == (400, 200)
        assert saved.convert("RGB").getpixel((0, 0)) == (255, 255, 255)
    assert "\033[48;2;255;255;255m" in capsys.readouterr().out


def test_image_both_modes(gray_png, capsys):
    cli.main(["image", str(gray_png), "-m", "both"])
    out = capsys.readouterr().out
    assert "+" * 100 in out
    assert "\033[48;2;" in out


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["image", str(tmp_path / "nope.png")])
    assert exc.value.code == 1
    assert "File not found" in capsys.readouterr().err


def test_unreadable_file(tmp_path, capsys):
    junk = tmp_path / "junk.png"
    junk.write_bytes(b"garbage")
    with pytest.raises(SystemExit) as exc:
        cli.main(["image", str(junk)])
    assert exc.value.code == 1
    assert "Cannot read image" in capsys.readouterr().err


@pytest.mark.parametrize("width", ["49", "201", "abc"])
def test_width_out_of_range_rejected(gray_png, width):
    with pytest.raises(SystemExit) as exc:
        cli.main(["image", str(gray_png), "-w", width])
    assert exc.value.code == 2


def test_live_capture_failure(monkeypatch, capsys):
    monkeypatch.setattr(cli, "OpenCVCamera", lambda device: FakeCamera(fail=True))
    with pytest.raises(SystemExit) as exc:
        cli.main(["live"])
    assert exc.value.code == 1
    assert "Permission denied" in capsys.readouterr().err


def test_live_renders_requested_frames(monkeypatch, capsys):
    cameras = []

    def make_camera(device):
        cameras.append(FakeCamera())
        return cameras[-1]

    monkeypatch.setattr(cli, "OpenCVCamera", make_camera)
    cli.main(["live", "--frames", "2", "--fps", "500", "-w", "60"])
    out = capsys.readouterr().out
    assert out.count("\033[H") >= 2
    assert "+" * 60 in out
    assert cameras[0].released == 1


def test_device_argument():
    assert cli._device("0") == 0
    assert cli._device("clip.mp4") == "clip.mp4"


def test_live_video_file_exits_at_end(video_clip, capsys):
    cli.main(["live", "--device", str(video_clip), "--frames", "10", "--fps", "500", "-w", "60"])
    out = capsys.readouterr().out
    assert out.count("\033[H") == 3


def test_live_render_failure_exits(monkeypatch, capsys):
    def broken_pipe(self, frame):
        raise BrokenPipeError("stdout closed")

    monkeypatch.setattr(cli, "OpenCVCamera", lambda device: FakeCamera())
    monkeypatch.setattr(cli.TerminalDisplay, "show_text", broken_pipe)
    with pytest.raises(SystemExit) as exc:
        cli.main(["live", "--frames", "5", "--fps", "500"])
    assert exc.value.code == 1
    assert "Live rendering failed" in capsys.readouterr().err
