import os

import pytest

from pkiprobe.errors import ScanError
from pkiprobe.scanner import scan_certificates


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x")
    return path


def test_recurses_and_filters(tmp_path):
    a = _touch(tmp_path / "issued" / "a.crt")
    b = _touch(tmp_path / "renewed" / "issued" / "b.crt")
    _touch(tmp_path / "private" / "a.key")
    _touch(tmp_path / "reqs" / "a.req")
    _touch(tmp_path / "issued" / "UPPER.CRT")

    found = list(scan_certificates(tmp_path))
    assert sorted(found) == sorted([a, b])


def test_pattern_is_case_sensitive(tmp_path):
    _touch(tmp_path / "x.CRT")
    assert list(scan_certificates(tmp_path)) == []


def test_custom_pattern(tmp_path):
    p = _touch(tmp_path / "certs_by_serial" / "01.pem")
    assert list(scan_certificates(tmp_path, pattern="*.pem")) == [p]


def test_order_is_stable(tmp_path):
    for name in ("c.crt", "a.crt", "b.crt"):
        _touch(tmp_path / "issued" / name)
    _touch(tmp_path / "aaa" / "z.crt")
    names = [p.relative_to(tmp_path).as_posix() for p in scan_certificates(tmp_path)]
    assert names == ["aaa/z.crt", "issued/a.crt", "issued/b.crt", "issued/c.crt"]


def test_is_lazy(tmp_path):
    _touch(tmp_path / "a.crt")
    it = scan_certificates(tmp_path)
    assert iter(it) is it


def test_missing_base_raises_immediately(tmp_path):
    with pytest.raises(ScanError) as ei:
        scan_certificates(tmp_path / "missing")
    assert "no such directory" in str(ei.value)


def test_base_is_a_file(tmp_path):
    f = _touch(tmp_path / "file.crt")
    with pytest.raises(ScanError):
        scan_certificates(f)


@pytest.mark.skipif(os.name != "posix" or os.geteuid() == 0, reason="root ignores permissions")
def test_unreadable_subdirectory_is_skipped(tmp_path, caplog):
    ok = _touch(tmp_path / "issued" / "ok.crt")
    locked = tmp_path / "locked"
    _touch(locked / "hidden.crt")
    locked.chmod(0)
    try:
        with caplog.at_level("WARNING", logger="pkiprobe.scanner"):
            found = list(scan_certificates(tmp_path))
    finally:
        locked.chmod(0o755)
    assert found == [ok]
    assert any("skipping unreadable directory" in r.getMessage() for r in caplog.records)
