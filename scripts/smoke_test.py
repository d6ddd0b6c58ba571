#!/usr/bin/env python3
"""Smoke test for a running session manager service.

Walks one session through its lifecycle and reports pass/fail status.
Exits 0 if all pass, 1 otherwise.

Usage:
    uvicorn --factory sessionmanager.main:create_app --port 8000
    python scripts/smoke_test.py --base-url http://localhost:8000
"""

from __future__ import annotations

import argparse
import json
import sys
from urllib.request import Request, urlopen
from urllib.error import HTTPError, URLError


def _request(
    url: str,
    *,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    body: dict | None = None,
    cookies: str = "",
) -> tuple[int, dict, dict[str, str]]:
    """Make an HTTP request and return (status, body_dict, response_headers)."""
    headers = headers or {}
    if cookies:
        headers["Cookie"] = cookies

    data = None
    if body is not None:
        data = json.dumps(body).encode()
        headers["Content-Type"] = "application/json"

    req = Request(url, data=data, headers=headers, method=method)
    try:
        resp = urlopen(req)
        resp_body = json.loads(resp.read().decode())
        resp_headers = {k.lower(): v for k, v in resp.getheaders()}
        return resp.status, resp_body, resp_headers
    except HTTPError as e:
        try:
            resp_body = json.loads(e.read().decode())
        except ValueError:
            resp_body = {"error": str(e)}
        return e.code, resp_body, {}


def _extract_cookies(headers: dict[str, str]) -> str:
    """Extract the Set-Cookie name=value pair for reuse."""
    cookie = headers.get("set-cookie", "")
    if cookie:
        return cookie.split(";")[0]
    return ""


def main():
    parser = argparse.ArgumentParser(description="Smoke test for the session manager")
    parser.add_argument("--base-url", required=True, help="Base URL (e.g., http://localhost:8000)")
    args = parser.parse_args()

    base = args.base_url.rstrip("/")
    results: list[tuple[str, bool, str]] = []

    # 1. Health check
    try:
        status, body, _ = _request(f"{base}/health")
        ok = status == 200 and body.get("status") == "ok"
        detail = f"status={status} provider={body.get('provider', '?')}"
        results.append(("GET /health", ok, detail))
    except (URLError, ConnectionError) as e:
        results.append(("GET /health", False, f"Connection failed: {e}"))
        _print_results(results)
        sys.exit(1)

    # 2. New session issues a cookie
    status, body, headers = _request(f"{base}/session")
    cookies = _extract_cookies(headers)
    session_id = body.get("id", "")
    ok = status == 200 and bool(cookies)
    results.append(("GET /session (new)", ok, f"status={status} cookie={'yes' if cookies else 'no'}"))

    if ok:
        # 3. Store a value
        status, _, _ = _request(
            f"{base}/session/values/smoke",
            method="PUT",
            body={"value": "ok"},
            cookies=cookies,
        )
        results.append(("PUT /session/values/smoke", status == 200, f"status={status}"))

        # 4. Same session, value intact
        status, body, _ = _request(f"{base}/session/values/smoke", cookies=cookies)
        ok = status == 200 and body.get("value") == "ok"
        results.append(("GET /session/values/smoke", ok, f"status={status}"))

        status, body, _ = _request(f"{base}/session", cookies=cookies)
        ok = status == 200 and body.get("id") == session_id
        results.append(("GET /session (resumed)", ok, f"status={status}"))

        # 5. Logout
        status, _, _ = _request(f"{base}/session/logout", method="POST", cookies=cookies)
        results.append(("POST /session/logout", status == 200, f"status={status}"))

        # 6. Old cookie no longer carries the value
        status, _, _ = _request(f"{base}/session/values/smoke", cookies=cookies)
        ok = status in (401, 404)
        results.append(("GET /session/values/smoke (after logout)", ok, f"status={status}"))

    _print_results(results)
    sys.exit(0 if all(ok for _, ok, _ in results) else 1)


def _print_results(results: list[tuple[str, bool, str]]):
    print("\n--- Smoke Test Results ---\n")
    for name, ok, detail in results:
        icon = "PASS" if ok else "FAIL"
        print(f"  [{icon}] {name:<42} {detail}")

    passed = sum(1 for _, ok, _ in results if ok)
    total = len(results)
    print(f"\n  {passed}/{total} passed\n")


if __name__ == "__main__":
    main()
