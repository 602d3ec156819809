"""Tests for the show-in-map command line tool."""

import pytest

from geodesy import __version__, cli


@pytest.fixture
def opened(monkeypatch):
    """Record map launches instead of starting a browser."""
    calls = []

    def fake_open_map(coordinate, code):
        calls.append((coordinate, code))
        return True

    monkeypatch.setattr(cli, "open_map", fake_open_map)
    return calls


class TestConversion:

    def test_jtsk5514_with_decimal_commas(self, capsys, opened):
        assert cli.main(["JTSK5514", "-820800,60", "-1068738,00"]) == 0
        out = capsys.readouterr().out
        assert out.startswith(f"show-in-map ver. {__version__}")
        assert " IN (JTSK5514): x=-820800.6; y=-1068738.0" in out
        assert " OUT: Lat: " in out
        assert opened == []

    def test_output_has_six_decimals(self, capsys, opened):
        cli.main(["jtsk2065", "1068738.00", "820800.60"])
        out_line = [line for line in capsys.readouterr().out.splitlines() if line.startswith(" OUT")][0]
        lat_text = out_line.split("Lat: ")[1].split(";")[0]
        lng_text = out_line.split("Lng: ")[1]
        assert len(lat_text.split(".")[1]) == 6
        assert len(lng_text.split(".")[1]) == 6
        assert 48.5 < float(lat_text) < 51.1
        assert 12.0 < float(lng_text) < 19.0

    def test_both_s_jtsk_conventions_agree(self, capsys, opened):
        cli.main(["JTSK5514", "-820800.60", "-1068738.00"])
        negative = capsys.readouterr().out.splitlines()[-1]
        cli.main(["JTSK2065", "1068738.00", "820800.60"])
        positive = capsys.readouterr().out.splitlines()[-1]
        assert negative == positive

    def test_s42(self, capsys, opened):
        assert cli.main(["S42", "3459900", "5549400"]) == 0
        assert " IN (S42): x=3459900.0; y=5549400.0" in capsys.readouterr().out


class TestErrors:

    def test_invalid_x(self, capsys, opened):
        assert cli.main(["S42", "abc", "5549400"]) == 1
        out = capsys.readouterr().out
        assert "Invalid parsing X value." in out
        assert "usage: show-in-map" in out

    def test_invalid_y(self, capsys, opened):
        assert cli.main(["S42", "3459900", "north"]) == 1
        assert "Invalid parsing Y value." in capsys.readouterr().out

    def test_unknown_source_type(self, capsys, opened):
        assert cli.main(["UTM", "1", "2"]) == 1
        assert "Invalid parsing source type." in capsys.readouterr().out

    def test_missing_arguments(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["JTSK2065"])
        assert excinfo.value.code == 2


class TestMapProvider:

    def test_opens_requested_map(self, capsys, opened):
        assert cli.main(["JTSK5514", "-820800.60", "-1068738.00", "g"]) == 0
        assert " Opening Google map in default internet browser..." in capsys.readouterr().out
        assert len(opened) == 1
        assert opened[0][1] == "G"

    @pytest.mark.parametrize("code, label", [("B", "Bing"), ("O", "OSM"), ("S", "Seznam")])
    def test_provider_labels(self, capsys, opened, code, label):
        cli.main(["JTSK5514", "-820800.60", "-1068738.00", code])
        assert f" Opening {label} map in default internet browser..." in capsys.readouterr().out

    def test_unknown_map_server(self, capsys, opened):
        assert cli.main(["JTSK5514", "-820800.60", "-1068738.00", "X"]) == 0
        assert " Unknown map server." in capsys.readouterr().out
        assert opened == []


def test_decimal_comma_normalisation():
    assert cli.normalize_decimal_separators(["S42", "3459900,5", "5549400,25"]) == [
        "S42", "3459900.5", "5549400.25"
    ]


def test_help_lists_source_types(capsys):
    cli.build_parser().print_help()
    out = capsys.readouterr().out
    for name in ("JTSK2065", "JTSK5514", "S42"):
        assert name in out
    assert "-820800,60 -1068738,00 -> -820800.60 -1068738.00" in out
