import pytest
from pydantic import ValidationError

from pkiprobe.contracts import CheckConfig
from pkiprobe.settings import Settings


def test_settings_defaults(monkeypatch):
    for var in ("PKIPROBE_LOG_LEVEL", "PKIPROBE_PROGRAM_NAME", "PKIPROBE_CERT_PATTERN", "PKIPROBE_PERFDATA"):
        monkeypatch.delenv(var, raising=False)

    s = Settings.from_env()
    assert s.LOG_LEVEL == "WARNING"
    assert s.PROGRAM_NAME == "PKIPROBE"
    assert s.CERT_PATTERN == "*.crt"
    assert s.PERFDATA is False


def test_settings_parsing(monkeypatch):
    monkeypatch.setenv("PKIPROBE_LOG_LEVEL", "debug")
    monkeypatch.setenv("PKIPROBE_PROGRAM_NAME", "EASYRSA")
    monkeypatch.setenv("PKIPROBE_CERT_PATTERN", "*.pem")
    monkeypatch.setenv("PKIPROBE_PERFDATA", "yes")

    s = Settings.from_env()
    assert s.LOG_LEVEL == "DEBUG"
    assert s.PROGRAM_NAME == "EASYRSA"
    assert s.CERT_PATTERN == "*.pem"
    assert s.PERFDATA is True


def test_blank_values_fall_back(monkeypatch):
    monkeypatch.setenv("PKIPROBE_PROGRAM_NAME", "  ")
    monkeypatch.setenv("PKIPROBE_CERT_PATTERN", "")
    s = Settings.from_env()
    assert s.PROGRAM_NAME == "PKIPROBE"
    assert s.CERT_PATTERN == "*.crt"


def test_check_config_defaults():
    cfg = CheckConfig(base_dir="/etc/easy-rsa")
    assert (cfg.critical_days, cfg.warning_days, cfg.verbose) == (7, 30, False)


@pytest.mark.parametrize("field", ["critical_days", "warning_days"])
def test_check_config_rejects_negative(field):
    with pytest.raises(ValidationError):
        CheckConfig(base_dir="/x", **{field: -1})


def test_check_config_does_not_enforce_order():
    cfg = CheckConfig(base_dir="/x", critical_days=40, warning_days=10)
    assert cfg.critical_days == 40
