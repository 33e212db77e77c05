"""
Tests for the python -m tmx_reader summary tool.
"""

from tmx_reader.__main__ import describe, main
from tmx_reader.structure import Map


class TestMain:
    """Test the command line entry point."""

    def test_summary(self, sample_file, capsys):
        assert main([str(sample_file)]) == 0

        out = capsys.readouterr().out
        assert "Map: 2x2 tiles of 32x32 px" in out
        assert "orientation=orthogonal" in out
        assert "renderorder=right-down" in out
        assert "background rgba=(17, 34, 51, 0)" in out
        assert "[1] ground: 4 tiles, image=ground.png, terrains=4" in out
        assert "[5] external: trees.tsx" in out
        assert "Ground: 2x2 (csv)" in out

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.tmx")]) == 1

        assert "not found" in capsys.readouterr().out

    def test_decode_error(self, tmp_path, capsys):
        path = tmp_path / "broken.tmx"
        path.write_text('<map><layer></map>')

        assert main([str(path)]) == 1

        assert capsys.readouterr().out.startswith("Error:")

    def test_usage(self, capsys):
        assert main([]) == 1

        assert "Usage" in capsys.readouterr().out


class TestDescribe:
    """Test the summary lines."""

    def test_empty_map(self):
        lines = describe(Map())

        assert lines[0] == "Map: 0x0 tiles of 0x0 px"
        assert "Tilesets: 0" in lines
        assert "Layers: 0" in lines
        assert not any("background" in line for line in lines)
