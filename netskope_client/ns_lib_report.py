from .ns_lib_models import Counters

RULE = "-" * 60


def format_summary(tenant, counters: Counters) -> str:
    """Render the lookup summary; deletion counts are included once they exist."""
    rows = [
        ("Tenant", tenant),
        ("Total Users", counters.total_requested),
        ("Found", counters.found_count),
        ("Not Found", counters.not_found_count),
    ]
    if counters.has_deletions:
        rows.append(("Deleted", counters.deleted_count))
        rows.append(("Errors", counters.error_count))

    lines = [RULE, "Summary:"]
    lines.extend(f"  {label + ':':<22}{value}" for label, value in rows)
    lines.append(RULE)
    return "\n".join(lines)
