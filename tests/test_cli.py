import json

import pytest

from glyph_atlas import cli
from glyph_atlas.writer import ATLAS_PNG, MAP_JSON


def test_inverted_range_fails_before_opening_font(tmp_path, capsys, monkeypatch):
    def no_font(*args, **kwargs):
        raise AssertionError("font opened")

    monkeypatch.setattr(cli, "Font", no_font)
    out = tmp_path / "out"

    status = cli.main(["--font", "missing.ttf", "--out", str(out), "--range", "65", "64"])

    assert status == 1
    assert "Right value must be larger than left value" in capsys.readouterr().err
    assert not out.exists()


def test_missing_required_flags():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--out", "build"])
    assert excinfo.value.code != 0


def test_malformed_range_value():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--font", "f.ttf", "--out", "build", "--range", "A", "90"])
    assert excinfo.value.code != 0


def test_codepoint_accepts_hex():
    assert cli.codepoint("0x41") == 65
    assert cli.codepoint("97") == 97


def test_bad_axis_value(tmp_path, capsys):
    status = cli.main(["--font", "f.ttf", "--out", str(tmp_path), "--axis", "wght", "bold"])
    assert status == 1
    assert "Axis wght expects a number" in capsys.readouterr().err


def test_full_run(tmp_path, capsys, monkeypatch, abc_font):
    opened = {}

    def fake_font(path, size, axes, mono):
        opened.update(path=path, size=size, axes=axes, mono=mono)
        return abc_font

    monkeypatch.setattr(cli, "Font", fake_font)

    status = cli.main([
        "--font", "Fake.ttf", "--out", str(tmp_path), "--size", "24",
        "--range", "0x41", "0x43", "--axis", "Weight", "650", "--mono",
    ])

    assert status == 0
    assert opened == {"path": "Fake.ttf", "size": 24, "axes": {"Weight": 650.0}, "mono": True}
    assert abc_font.closed
    assert (tmp_path / ATLAS_PNG).exists()
    doc = json.loads((tmp_path / MAP_JSON).read_text(encoding="utf-8"))
    assert doc["codepoints"] == [65, 0, 1, 1, 1, 0]

    output = capsys.readouterr().out
    assert "=== Glyph Atlas Generator ===" in output
    assert "Completed in" in output


def test_font_closed_on_failure(tmp_path, monkeypatch, make_font):
    font = make_font({}, {})
    monkeypatch.setattr(cli, "Font", lambda *args, **kwargs: font)

    status = cli.main(["--font", "Fake.ttf", "--out", str(tmp_path / "out")])

    assert status == 1
    assert font.closed
    assert not (tmp_path / "out").exists()
