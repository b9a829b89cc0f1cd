from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


def _load_json(path: Path):
    with path.open() as handle:
        return json.load(handle)


def parse_assignments(pairs: list[str]) -> dict[str, Any]:
    """Turn `key=value` pairs into context facts. Values stay strings."""
    facts: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise SystemExit(f"Invalid --set value '{pair}' (expected key=value).")
        facts[key.strip()] = value.strip()
    return facts


def build_context(context_path: Path | None, assignments: list[str]) -> dict[str, Any]:
    facts: dict[str, Any] = {}
    if context_path is not None:
        loaded = _load_json(context_path)
        if not isinstance(loaded, dict):
            raise SystemExit(f"Context file must contain a JSON object: {context_path}")
        facts.update(loaded)
    facts.update(parse_assignments(assignments))
    return facts


def render_markdown(report) -> str:
    result = report.result
    lines = [
        "# Rules Simulation",
        "",
        f"Generated at: {report.generated_at.isoformat()}",
        "",
        "## Context",
    ]
    for key, value in report.context.items():
        lines.append(f"- {key}: {value}")
    lines.append("")
    lines.append("## Outcome")
    lines.append(f"- Applied rules: {', '.join(result.applied_rule_names) or '(none)'}")
    lines.append(f"- Blocked: {result.blocked}")
    if result.blocked:
        lines.append(f"- Block message: {result.block_message}")
    lines.append(f"- Price multiplier: {result.price_multiplier}")
    lines.append(f"- Additional fees: {result.additional_fees}")
    lines.append(f"- Risk score: {result.risk_score}")
    if result.processing_time_days is not None:
        lines.append(f"- Processing time (days): {result.processing_time_days}")
    if result.recommended_banks:
        lines.append(f"- Recommended banks: {', '.join(result.recommended_banks)}")
    if result.next_step:
        lines.append(f"- Next step: {result.next_step}")
    if result.flags:
        lines.append("- Flags:")
        for name, value in result.flags.items():
            lines.append(f"  - {name}: {value}")
    if result.warnings:
        lines.append("- Warnings:")
        for warning in result.warnings:
            lines.append(f"  - {warning}")
    if result.required_documents:
        lines.append("- Required documents:")
        for doc in result.required_documents:
            lines.append(f"  - {doc.name} ({doc.category.value})")

    lines.append("")
    lines.append("## Trace")
    for trace in report.traces:
        lines.append("")
        if not trace.active:
            lines.append(f"### {trace.rule_name} (priority {trace.priority}) - inactive")
            continue
        state = "matched" if trace.matched else "not matched"
        lines.append(f"### {trace.rule_name} (priority {trace.priority}) - {state}")
        for index, cond in enumerate(trace.conditions):
            logic = f"{(cond.logic or 'AND').upper()} " if index else ""
            lines.append(
                f"- {logic}{cond.field} {cond.operator} {cond.expected!r}"
                f" -> resolved {cond.resolved!r}: {cond.outcome}"
            )
        if trace.applied_actions:
            lines.append(f"- Applied actions: {', '.join(trace.applied_actions)}")
        if trace.ignored_actions:
            lines.append(f"- Ignored actions: {', '.join(trace.ignored_actions)}")

    if report.diagnostics:
        lines.append("")
        lines.append("## Diagnostics")
        for diag in report.diagnostics:
            lines.append(f"- {diag.kind.value} [{diag.rule_id}] {diag.message}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    _ensure_backend_on_path()
    from common.decision_rules import RuleSetError, load_rules
    from common.decision_rules.config import configure_logging, get_engine_config
    from common.decision_rules.tester import RuleTester

    parser = argparse.ArgumentParser(
        description="Simulate a rule set against a context and print the outcome with a per-rule trace."
    )
    parser.add_argument(
        "--rules",
        default=None,
        help="Path to a rule-set JSON file (defaults to DECISION_RULES_PATH).",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Path to a JSON object with context facts.",
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        dest="assignments",
        metavar="KEY=VALUE",
        help="Context fact override (repeatable), e.g. --set locationType=freezone.",
    )
    parser.add_argument(
        "--format",
        choices=("markdown", "json"),
        default="markdown",
        help="Output format (default: markdown).",
    )
    args = parser.parse_args(argv)

    cfg = get_engine_config()
    configure_logging(cfg)

    rules_path = Path(args.rules).resolve() if args.rules else cfg.rules_path
    if rules_path is None:
        raise SystemExit("No rule set given; pass --rules or set DECISION_RULES_PATH.")
    try:
        rules = load_rules(rules_path)
    except RuleSetError as exc:
        raise SystemExit(f"{rules_path}: {exc}")

    facts = build_context(Path(args.context).resolve() if args.context else None, args.assignments)
    report = RuleTester().simulate(rules, facts)

    if args.format == "json":
        print(json.dumps(report.model_dump(mode="json", by_alias=True), indent=2))
    else:
        print(render_markdown(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
