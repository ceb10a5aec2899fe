from __future__ import annotations

from typing import Any, Dict, List


def doctor_report() -> Dict[str, Any]:
    checks: List[Dict[str, Any]] = []

    # Core import
    try:
        import ghep  # noqa: F401
        checks.append({"name": "ghep import", "ok": True, "detail": f"version {ghep.__version__}"})
    except ImportError as e:
        checks.append({"name": "ghep import", "ok": False, "detail": str(e)})

    try:
        import particle

        checks.append({"name": "particle (pdg)", "ok": True, "detail": f"version {particle.__version__}"})
    except ImportError as e:
        checks.append({"name": "particle (pdg)", "ok": False, "detail": str(e)})

    # PDG table lookups used by the record printout
    try:
        from ghep import pdg

        ok = pdg.name(2212) == "p" and pdg.mass_gev(2212) is not None
        checks.append({"name": "pdg table", "ok": ok, "detail": "proton lookup" + ("" if ok else " failed")})
    except ImportError as e:
        checks.append({"name": "pdg table", "ok": False, "detail": str(e)})

    ok_all = all(c["ok"] for c in checks)
    summary = "ghep doctor: OK" if ok_all else "ghep doctor: FAIL"

    return {"summary": summary, "checks": checks}
