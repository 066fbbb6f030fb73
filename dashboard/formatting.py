"""Pure helpers for the dashboard (no Streamlit imports, unit-testable)."""


def format_price(price: float) -> str:
    """Dollar price with precision scaled to the magnitude of the price."""
    if price >= 1000:
        return f"${price:,.2f}"
    if price >= 1:
        return f"${price:.4f}"
    if price >= 0.0001:
        return f"${price:.6f}"
    return f"${price:.8f}"


def summarize(data: dict) -> dict:
    """Header stats for a /coins payload."""
    opportunities = data.get("firsatlar") or []
    all_coins = data.get("tum_coinler") or []

    if opportunities:
        avg = sum(c["fark_yuzde"] for c in opportunities) / len(opportunities)
        avg_spread = f"{avg:.2f}"
        max_spread = f"{opportunities[0]['fark_yuzde']:.2f}"
    else:
        avg_spread = "0"
        max_spread = "0"

    return {
        "total_opportunities": len(opportunities),
        "avg_spread": avg_spread,
        "max_spread": max_spread,
        "total_coins": len(all_coins),
    }


def filter_coins(data: dict, view: str = "all", search: str = "") -> list:
    """Rows for the table: every coin filtered by search, or the opportunities."""
    if view == "opportunities":
        return list(data.get("firsatlar") or [])
    term = search.strip().lower()
    return [c for c in data.get("tum_coinler") or [] if term in c["symbol"].lower()]
