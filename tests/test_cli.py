"""Tests for the command-line renderer.

Tests cover:
- Rendering a scene to a P3 or P6 file
- Writing to standard output
- Seeded runs are reproducible
- Errors are reported with a non-zero exit status
"""

import pytest
from PIL import Image

from lensray.cli import main, parse_args

TINY = ["--scene", "quads", "--width", "4", "--samples", "1", "--max-depth", "2", "--quiet"]


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test default option values."""
        args = parse_args([])
        assert args.scene == "three_spheres"
        assert args.width is None
        assert args.output == "image.ppm"
        assert not args.binary
        assert args.seed is None

    def test_unknown_scene(self):
        """Test argparse rejects an unknown scene name."""
        with pytest.raises(SystemExit):
            parse_args(["--scene", "teapot"])


class TestMain:
    """Tests for the main entry point."""

    def test_render_p3(self, tmp_path):
        """Test a plain-text image is written to the output path."""
        output = tmp_path / "out.ppm"
        assert main(TINY + ["--output", str(output), "--seed", "1"]) == 0
        lines = output.read_text().splitlines()
        assert lines[:3] == ["P3", "4 4", "255"]
        assert len(lines) == 3 + 16

    def test_render_p6(self, tmp_path):
        """Test a binary image is readable by Pillow."""
        output = tmp_path / "out.ppm"
        assert main(TINY + ["--output", str(output), "--binary", "--seed", "1"]) == 0
        with Image.open(output) as img:
            assert img.size == (4, 4)

    def test_render_to_stdout(self, capsys):
        """Test '-' writes the image to standard output."""
        assert main(TINY + ["--output", "-", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("P3\n4 4\n255\n")

    def test_seeded_runs_match(self, tmp_path):
        """Test the same seed reproduces the same file."""
        a = tmp_path / "a.ppm"
        b = tmp_path / "b.ppm"
        main(TINY + ["--output", str(a), "--seed", "5"])
        main(TINY + ["--output", str(b), "--seed", "5"])
        assert a.read_bytes() == b.read_bytes()

    def test_progress_reported(self, tmp_path, capsys):
        """Test progress goes to stderr when not quiet."""
        output = tmp_path / "out.ppm"
        args = [a for a in TINY if a != "--quiet"]
        assert main(args + ["--output", str(output), "--seed", "1"]) == 0
        err = capsys.readouterr().err
        assert "Scanlines remaining: 0" in err
        assert "Saved to:" in err

    def test_invalid_width(self, tmp_path, capsys):
        """Test an invalid camera setting exits with status 1 and no file."""
        output = tmp_path / "out.ppm"
        assert main(TINY[:2] + ["--width", "0", "--quiet", "--output", str(output)]) == 1
        assert not output.exists()
        assert "Error:" in capsys.readouterr().err
