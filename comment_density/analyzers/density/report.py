from typing import Any, Dict, List


def format_threshold(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def build_report(result) -> Dict[str, Any]:
    """JSON-ready summary of a DensityResult; totals only, no per-file rows."""
    report = {
        "root": result.root,
        "summary": result.aggregate.as_dict(),
        "languages": [],
        "thresholds": [],
        "duration_seconds": result.duration_seconds,
    }

    by_rule = result.aggregate.by_rule()
    for rule in result.rules:
        agg = by_rule.pop(rule.name, None)
        if agg is None:
            continue
        report["languages"].append({"name": rule.name, **agg.as_dict()})

    for t in result.thresholds:
        if t.rule.density_threshold is None:
            continue
        report["thresholds"].append({
            "name": t.rule.name,
            "threshold": t.rule.density_threshold,
            "exceeded": t.exceeded,
        })

    return report


def render_text(result) -> str:
    lines: List[str] = [f"Overall Comments Density Score: {result.density:.2f}%"]

    for t in result.exceeded:
        lines.append(
            f"Comments density for {t.rule.name} exceeds configured threshold "
            f"of {format_threshold(t.rule.density_threshold)}%."
        )

    return "\n".join(lines)
