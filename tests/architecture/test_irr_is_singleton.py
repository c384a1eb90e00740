import re
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]  # repo root
IRR = ROOT / "fincalc" / "finance" / "irr.py"
SOLVER = ROOT / "fincalc" / "finance" / "solver.py"

EXCLUDE_DIRS = {
    ".venv", "venv", ".git", ".pytest_cache", "build",
    "dist", "__pycache__", ".mypy_cache", ".tox", ".eggs"
}


def _skip(p: Path) -> bool:
    parts = set(p.parts)
    if "site-packages" in parts or "dist-packages" in parts:
        return True
    if any(d in parts for d in EXCLUDE_DIRS):
        return True
    return False


def _sources():
    for p in (ROOT / "fincalc").rglob("*.py"):
        if not _skip(p):
            yield p


def test_only_irr_module_defines_irr_and_npv():
    hits = []
    for p in _sources():
        if p == IRR:
            continue
        text = p.read_text(encoding="utf-8", errors="ignore")
        if re.search(r"\bdef\s+x?irr\s*\(", text) or re.search(r"\bdef\s+x?npv\s*\(", text):
            hits.append(str(p))
    assert not hits, f"Found IRR/NPV defs outside finance/irr.py: {hits}"


def test_only_solver_module_bisects():
    # root finding is shared; no private Newton/bisection loops elsewhere
    hits = []
    for p in _sources():
        if p == SOLVER:
            continue
        text = p.read_text(encoding="utf-8", errors="ignore")
        if re.search(r"\bfor\s+_\s+in\s+range\(\s*200\s*\)", text) or "(lo + hi) / 2" in text:
            hits.append(str(p))
    assert not hits, f"Found root-finding loops outside finance/solver.py: {hits}"
