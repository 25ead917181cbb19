#!/usr/bin/env python3
"""
OSC preflight guard: connectivity checks for AbletonOSC before sending
batches.

Returns structured diagnostics so callers get actionable error messages
instead of silently dropped UDP datagrams.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional


def check_osc_bridge(query_client,
                     attempts: int = 4,
                     delay_s: float = 1.5) -> Dict[str, Any]:
    """Verify AbletonOSC is answering.

    Args:
        query_client: Object with ``test_connection() -> bool``
            (an AbletonQueryClient).
        attempts: Max retries.
        delay_s: Seconds between retries.

    Returns:
        ``{"ok": bool, "latency_ms": float|None, "attempts_used": int,
           "message": str}``
    """
    last_error = ""
    for i in range(1, attempts + 1):
        t0 = time.monotonic()
        try:
            ok = query_client.test_connection()
        except Exception as exc:
            ok = False
            last_error = str(exc)
        elapsed_ms = (time.monotonic() - t0) * 1000
        if ok:
            return {
                "ok": True,
                "latency_ms": round(elapsed_ms, 1),
                "attempts_used": i,
                "message": f"AbletonOSC responding ({elapsed_ms:.0f} ms, attempt {i}/{attempts})",
            }
        if i < attempts:
            time.sleep(delay_s)

    message = f"AbletonOSC unreachable after {attempts} attempts"
    if last_error:
        message += f" (last error: {last_error})"
    return {
        "ok": False,
        "latency_ms": None,
        "attempts_used": attempts,
        "message": message,
    }


def check_project_info(query_client) -> Dict[str, Any]:
    """Verify the Live set answers project queries.

    Returns:
        ``{"ok": bool, "track_count": int|None, "message": str}``
    """
    try:
        info = query_client.get_project_info()
    except Exception as exc:
        return {"ok": False, "track_count": None,
                "message": f"Project info query failed: {exc}"}
    return {
        "ok": True,
        "track_count": info.num_tracks,
        "message": (f"Live set reachable: {info.num_tracks} tracks, "
                    f"{info.tempo:g} BPM, {info.time_signature}"),
    }


def run_preflight(query_client,
                  require_project: bool = False,
                  osc_attempts: int = 4,
                  osc_delay_s: float = 1.5) -> Dict[str, Any]:
    """Run all preflight checks and return a combined report.

    Later checks are skipped once one fails so the caller gets the first
    actionable failure.

    Returns:
        ``{"ok": bool, "checks": [...], "failure_type": str|None,
           "message": str}``
    """
    checks: List[Dict[str, Any]] = []

    osc = check_osc_bridge(query_client, attempts=osc_attempts, delay_s=osc_delay_s)
    checks.append({"name": "osc_bridge", **osc})
    if not osc["ok"]:
        return _build_report(checks, "osc_unreachable_preflight")

    if require_project:
        project = check_project_info(query_client)
        checks.append({"name": "project_info", **project})
        if not project["ok"]:
            return _build_report(checks, "project_unreachable")

    return _build_report(checks, None)


def _build_report(checks: List[Dict[str, Any]],
                  failure_type: Optional[str]) -> Dict[str, Any]:
    ok = failure_type is None
    if ok:
        msg = f"All {len(checks)} preflight checks passed"
    else:
        failed = [c for c in checks if not c.get("ok")]
        msg = failed[0]["message"] if failed else "Unknown preflight failure"
    return {
        "ok": ok,
        "checks": checks,
        "failure_type": failure_type,
        "message": msg,
    }
