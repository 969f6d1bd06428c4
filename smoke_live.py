"""
LexMX live smoke check.

Sends one sample request per prompt template through the real handler and
model. Run locally before deploying:
    pip install -e .
    ANTHROPIC_API_KEY=sk-ant-... python smoke_live.py

Prints a pass/fail table and writes smoke_results.json.
"""

import json
import os
import sys
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "lexmx-proxy"))

import prompt
from ai_client import ModelClient
from handler import handle
from settings import Settings

# ---------------------------------------------------------------------------
# One case per template + expected rough outcomes for assertion
# ---------------------------------------------------------------------------
CASES = [
    {
        "id": "SC01",
        "label": "Jurisprudence lookup",
        "query": f"{prompt.JURISPRUDENCE_PREFIX} pensión alimenticia entre excónyuges",
        "context": "",
        "expect_kind": prompt.QueryKind.JURISPRUDENCE_LOOKUP,
        "expect_terms": ["registro", "criterio"],
    },
    {
        "id": "SC02",
        "label": "SWOT strategy analysis",
        "query": prompt.SWOT_PREFIX,
        "context": (
            "Trabajador despedido sin causa tras 6 años de antigüedad, salario diario de $850. "
            "El patrón no entregó aviso de rescisión. Han pasado 40 días desde el despido."
        ),
        "expect_kind": prompt.QueryKind.SWOT_ANALYSIS,
        "expect_terms": ["fortalezas", "amenazas"],
    },
    {
        "id": "SC03",
        "label": "Document drafting",
        "query": f"{prompt.DOCUMENT_PREFIX} contrato de arrendamiento de casa habitación",
        "context": "Renta mensual de $12,000, plazo de 12 meses, depósito de un mes.",
        "expect_kind": prompt.QueryKind.DOCUMENT_DRAFT,
        "expect_terms": ["cláusula"],
    },
    {
        "id": "SC04",
        "label": "Generic question",
        "query": "¿Cuál es el plazo para contestar una demanda civil en la Ciudad de México?",
        "context": "",
        "expect_kind": prompt.QueryKind.GENERIC,
        "expect_terms": ["días"],
    },
]

PASS = "\033[92mPASS\033[0m"
FAIL = "\033[91mFAIL\033[0m"


def check(status: int, body: dict, case: dict) -> list[str]:
    """Return list of failure reasons. Empty = pass."""
    if status != 200:
        return [f"status {status}: {body}"]

    failures = []
    if prompt.classify_query(case["query"]) is not case["expect_kind"]:
        failures.append(f"query classified as {prompt.classify_query(case['query']).value}")

    text = body["result"].lower()
    for term in case["expect_terms"]:
        if term not in text:
            failures.append(f"expected '{term}' in result")
    return failures


def run():
    settings = Settings.from_env()
    if not settings.api_key:
        sys.exit("ERROR: Set ANTHROPIC_API_KEY environment variable before running.")

    client = ModelClient.from_settings(settings)
    results_log = []
    passed = failed = 0

    print(f"\n{'='*80}")
    print(f"  LexMX live smoke check | model={settings.model}")
    print(f"{'='*80}\n")

    for case in CASES:
        print(f"[{case['id']}] {case['label']}")
        start = time.time()

        status, body = handle(
            method="POST",
            body={"query": case["query"], "context": case["context"]},
            settings=settings,
            generate=client.generate,
        )
        elapsed_ms = int((time.time() - start) * 1000)
        failures = check(status, body, case)

        print(f"  Status : {PASS if not failures else FAIL}")
        print(f"  chars  : {len(body.get('result', ''))}")
        print(f"  time   : {elapsed_ms}ms")
        for f in failures:
            print(f"  {FAIL}: {f}")
        print()

        if failures:
            failed += 1
        else:
            passed += 1
        results_log.append({
            "id": case["id"],
            "label": case["label"],
            "passed": not failures,
            "status": status,
            "body": body,
            "elapsed_ms": elapsed_ms,
            "failures": failures,
        })

    print(f"{'='*80}")
    print(f"  Results: {passed} passed / {failed} failed / {len(CASES)} total")
    print(f"{'='*80}\n")

    with open("smoke_results.json", "w", encoding="utf-8") as f:
        json.dump(results_log, f, indent=2, ensure_ascii=False)
    print("  Full results written to smoke_results.json\n")

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(run())
