import pytest

from pkiprobe.models import AggregateResult, Status
from pkiprobe.report import exit_code, perfdata, render
from pkiprobe.evaluator import aggregate, evaluate_record
from _util import NOW, record


@pytest.mark.parametrize(
    "status,code",
    [(Status.OK, 0), (Status.WARNING, 1), (Status.CRITICAL, 2), (Status.UNKNOWN, 3)],
)
def test_exit_codes(status, code):
    assert exit_code(status) == code


def test_render_ok():
    res = AggregateResult(status=Status.OK, message="3 certificates verified.", evaluated_count=3)
    assert render("PKIPROBE", res) == "PKIPROBE: OK - 3 certificates verified."


def test_render_critical():
    res = AggregateResult(status=Status.CRITICAL, message="CN=x expires in 2 days.")
    assert render("check_easyrsa", res) == "check_easyrsa: CRITICAL - CN=x expires in 2 days."


def test_render_with_perfdata():
    items = [evaluate_record(record("a", 20), NOW, 7, 30), evaluate_record(record("b", 400), NOW, 7, 30)]
    res = aggregate(items)
    line = render("PKIPROBE", res, perfdata(res, 7, 30))
    assert line == (
        "PKIPROBE: WARNING - CN=a expires in 20 days. | "
        "total=2;;;; ok=1;;;; warning=1;;;; critical=0;;;; expired=0;;;; unreadable=0;;;; "
        "min_days_left=20;31:;8:;;"
    )
    assert "\n" not in line


def test_perfdata_without_certificates():
    res = aggregate([])
    assert "min_days_left" not in perfdata(res, 7, 30)


def test_perfdata_ranges_alert_below_inclusive_thresholds():
    # plage Nagios "N:" : OK tant que la valeur >= N
    res = aggregate([evaluate_record(record("edge", 30), NOW, 7, 30)])
    assert res.status.name == "WARNING"
    assert perfdata(res, 7, 30).endswith("min_days_left=30;31:;8:;;")
