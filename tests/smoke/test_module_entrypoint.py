import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]


def _fincalc(*args):
    return [sys.executable, "-m", "fincalc", *args]


def test_module_entrypoint_prints_result():
    out = subprocess.check_output(
        _fincalc("bond-price", "--face", "1000", "--coupon", "0.05", "--yield", "0.06", "--n", "10", "--freq", "2", "--round", "2"),
        cwd=ROOT,
        text=True,
    )
    assert 900 < float(out.strip()) < 1000


def test_module_entrypoint_negative_cashflows_without_equals():
    out = subprocess.check_output(
        _fincalc("irr", "--cashflows", "-100,60,60"),
        cwd=ROOT,
        text=True,
    )
    assert 0.1 < float(out.strip()) < 0.2


def test_module_entrypoint_fails_on_domain_error():
    with pytest.raises(subprocess.CalledProcessError) as ei:
        subprocess.run(
            _fincalc("xirr", "--cashflows", "100,50", "--dates", "2025-01-01,2025-07-01"),
            cwd=ROOT,
            check=True,
            capture_output=True,
            text=True,
        )
    assert ei.value.returncode == 1
    assert "Error:" in ei.value.stderr
