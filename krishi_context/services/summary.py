from __future__ import annotations

from ..models.context import AggregatedContext

"""SUMMARY line rendering for a gathered context.

Format:
SUMMARY weather={city|none} records={n} top_crops={n}
market={available|unavailable} failures={n}
"""


def render_context_summary(context: AggregatedContext) -> str:
    """Render a SUMMARY line describing which context sources contributed.

    Examples:
        >>> render_context_summary(AggregatedContext())
        'SUMMARY weather=none records=0 top_crops=0 market=unavailable failures=0'
    """
    weather = "none"
    if context.weather is not None:
        # 空白を含む都市名は区切りと衝突するため '_' に置換
        weather = "_".join(str(context.weather.city).split()) or "unknown"
    top_crops = len(context.top_crops.crops) if context.top_crops is not None else 0
    market = "available" if context.market_data is not None else "unavailable"

    return (
        f"SUMMARY weather={weather} "
        f"records={len(context.records)} "
        f"top_crops={top_crops} "
        f"market={market} "
        f"failures={len(context.failures)}"
    )
