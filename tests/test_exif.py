from fractions import Fraction

from PIL import Image

from georef.services.exif.reader import _to_deg, parse_exif


def test_to_deg_handles_rationals_and_refs():
    dms = (Fraction(43, 1), Fraction(46, 1), Fraction(2331, 100))
    assert abs(_to_deg(dms, "N") - 43.77314) < 1e-5
    assert abs(_to_deg((11.0, 15.0, 21.6), "W") + 11.256) < 1e-6
    assert _to_deg(None, "N") is None
    assert _to_deg((1.0,), "N") is None


def test_parse_exif_reads_capture_time(tmp_path):
    path = tmp_path / "shot.jpg"
    exif = Image.Exif()
    exif[0x0132] = "2024:05:01 10:20:30"  # DateTime
    Image.new("RGB", (4, 4), (0, 0, 255)).save(path, "JPEG", exif=exif)

    info = parse_exif(path)
    assert info["taken_at"] == "2024-05-01T10:20:30"
    assert info["gps_point"] is None


def test_parse_exif_without_metadata(tmp_path):
    path = tmp_path / "plain.png"
    Image.new("RGB", (4, 4)).save(path, "PNG")
    assert parse_exif(path) == {"taken_at": None, "gps_point": None}
