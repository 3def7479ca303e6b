#!/usr/bin/env python3
import argparse
import dataclasses
import sys
import time

import httpx

ACCOUNTS = [
    {"id": "A1", "balance": 500, "currency": "USD"},
    {"id": "A2", "balance": 100, "currency": "USD"},
]


@dataclasses.dataclass
class Scenario:
    name: str
    instruction: str
    expected_code: str
    expected_http: int
    accounts: list[dict] = dataclasses.field(default_factory=lambda: ACCOUNTS)


@dataclasses.dataclass
class ScenarioResult:
    name: str
    passed: bool
    detail: str


SCENARIOS = [
    Scenario("Successful debit", "DEBIT 200 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT A2", "AP00", 200),
    Scenario("Insufficient funds", "DEBIT 900 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT A2", "AC01", 400),
    Scenario("Same account", "DEBIT 50 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT A1", "AC02", 400),
    Scenario("Unknown account", "DEBIT 50 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT ZZ", "AC03", 400),
    Scenario(
        "Unsupported currency",
        "DEBIT 50 XXX FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT A2",
        "CU02",
        400,
        accounts=[
            {"id": "A1", "balance": 500, "currency": "XXX"},
            {"id": "A2", "balance": 100, "currency": "XXX"},
        ],
    ),
    Scenario("Future dated", "DEBIT 50 USD FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT A2 ON 2999-01-01", "AP02", 200),
    Scenario("Credit form", "CREDIT 50 USD TO ACCOUNT A2 FOR DEBIT FROM ACCOUNT A1", "AP00", 200),
    Scenario("Malformed", "SEND 50 USD TO A2", "SY03", 400),
]


def run_health_check(client: httpx.Client, base_url: str) -> ScenarioResult:
    try:
        resp = client.get(f"{base_url}/health")
        if resp.status_code != 200:
            return ScenarioResult("Health Check", False, f"Expected 200, got {resp.status_code}")
        body = resp.json()
        if body.get("status") != "HEALTHY":
            return ScenarioResult("Health Check", False, f"Expected HEALTHY, got {body.get('status')!r}")
        return ScenarioResult("Health Check", True, "Health check endpoint working correctly")
    except httpx.HTTPError as exc:
        return ScenarioResult("Health Check", False, f"HTTP error: {exc}")


def run_scenario(client: httpx.Client, base_url: str, scenario: Scenario) -> ScenarioResult:
    payload = {"accounts": scenario.accounts, "instruction": scenario.instruction}
    try:
        resp = client.post(f"{base_url}/payment-instructions", json=payload)
    except httpx.HTTPError as exc:
        return ScenarioResult(scenario.name, False, f"HTTP error: {exc}")

    code = resp.json().get("status_code")
    if resp.status_code != scenario.expected_http or code != scenario.expected_code:
        return ScenarioResult(
            scenario.name,
            False,
            f"Expected HTTP {scenario.expected_http}/{scenario.expected_code}, got {resp.status_code}/{code}",
        )
    return ScenarioResult(scenario.name, True, f"HTTP {resp.status_code} with {code}")


def print_report(results: list[ScenarioResult], total_seconds: float) -> int:
    passed = sum(1 for r in results if r.passed)
    total = len(results)
    verdict = "PASS" if passed == total else "FAIL"
    print(f"RESULT: {verdict} ({passed} / {total} checks passed)\n")
    for res in results:
        state = "PASS" if res.passed else "FAIL"
        print(f"- {state} | {res.name}")
        print(f"  - {res.detail}")
    print(f"\nTotal time: {total_seconds:.1f}s")
    return 0 if passed == total else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Smoke-test a running payment instruction service")
    parser.add_argument("--base-url", default="http://localhost:8000", help="Base URL of API")
    parser.add_argument("--request-timeout-seconds", type=float, default=10.0, help="HTTP request timeout")
    args = parser.parse_args()

    started = time.perf_counter()
    with httpx.Client(timeout=args.request_timeout_seconds) as client:
        results = [run_health_check(client, args.base_url)]
        results.extend(run_scenario(client, args.base_url, scenario) for scenario in SCENARIOS)
    return print_report(results, time.perf_counter() - started)


if __name__ == "__main__":
    sys.exit(main())
