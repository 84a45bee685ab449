from __future__ import annotations

import math
from typing import Any

from ..models.context import AggregatedContext

"""Prompt composition for the advisory language model.

Section order is fixed and independent of which sources answered first:
    preamble
    CURRENT WEATHER CONDITIONS   (only with weather)
    USER'S FARMING RECORDS       (only with records, at most 5)
    TOP CROPS IN <REGION>        (only with a non-empty crop list, at most 5)
    MARKET DATA FOR <CROP>       (only with market data)
    USER QUERY
    INSTRUCTIONS / FORMATTING REQUIREMENTS
    closing line
A section without data is left out entirely, never rendered as a placeholder.
"""

__all__ = [
    "LANGUAGE_NAMES",
    "PROMPT_RECORDS_LIMIT",
    "PROMPT_CROPS_LIMIT",
    "language_name",
    "format_number",
    "compose_prompt",
]

LANGUAGE_NAMES = {
    "en": "English",
    "hi": "Hindi",
    "ml": "Malayalam",
}

PROMPT_RECORDS_LIMIT = 5
PROMPT_CROPS_LIMIT = 5

PREAMBLE = (
    "You are a Digital Krishi Officer, an advanced AI agricultural advisor for Indian farmers. "
    "Provide comprehensive, accurate, and practical farming advice in {language}.\n"
    "\n"
    "CONTEXT INFORMATION:\n"
    "\n"
)

INSTRUCTIONS = """INSTRUCTIONS:
1. Provide specific, actionable advice based on the context provided
2. Consider weather conditions for farming recommendations
3. Reference the user's farming history when relevant
4. Suggest crops from the top crops list when appropriate
5. Include market price considerations when discussing crops
6. Provide soil-specific advice when soil type is mentioned
7. Keep responses practical and relevant to Indian/{region} farming conditions
8. Include specific recommendations for pest control, fertilization, and crop management
9. Mention government schemes or subsidies when relevant
10. Provide seasonal and weather-based farming tips

FORMATTING REQUIREMENTS:
- Use **bold text** for important points and recommendations
- Use *italic text* for emphasis and technical terms
- Use bullet points (-) for lists of recommendations
- Use numbered lists (1.) for step-by-step instructions
- Use ### headings for different sections (e.g., ### Weather-Based Advice)
- Use > blockquotes for important warnings or tips
- Use `code` for specific measurements, temperatures, or technical terms
- Structure your response with clear sections for better readability

"""

CLOSING = (
    "Please provide comprehensive advice that considers all available context "
    "with proper Markdown formatting."
)


def language_name(tag: str | None) -> str:
    """Map a language tag to the language word used in the prompt (default English)."""
    return LANGUAGE_NAMES.get(tag or "en", "English")


def format_number(value: Any) -> str:
    """Render spreadsheet numbers the way they appear in the sheet.

    Integral floats lose their '.0' (1200.0 -> '1200'); other values use str().
    """
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _weather_section(context: AggregatedContext) -> str:
    w = context.weather
    if w is None:
        return ""
    return (
        "CURRENT WEATHER CONDITIONS:\n"
        f"- Location: {w.city}\n"
        f"- Temperature: {_round_half_up(w.temperature)}°C\n"
        f"- Humidity: {format_number(w.humidity)}%\n"
        f"- Weather: {w.description}\n"
        f"- Wind Speed: {format_number(w.wind_speed)} m/s\n"
        "\n"
    )


def _records_section(context: AggregatedContext) -> str:
    if not context.records:
        return ""
    lines = ["USER'S FARMING RECORDS (Recent crops grown):"]
    for i, record in enumerate(context.records[:PROMPT_RECORDS_LIMIT], start=1):
        line = f"{i}. {record.crop_name} - Planted: {record.planting_date}"
        if record.soil_type:
            line += f", Soil Type: {record.soil_type}"
        if record.notes:
            line += f", Notes: {record.notes}"
        lines.append(line)
    return "\n".join(lines) + "\n\n"


def _top_crops_section(context: AggregatedContext, region: str) -> str:
    if context.top_crops is None or not context.top_crops.crops:
        return ""
    lines = [f"TOP CROPS IN {region.upper()} (for reference):"]
    for i, crop in enumerate(context.top_crops.crops[:PROMPT_CROPS_LIMIT], start=1):
        lines.append(
            f"{i}. {format_number(crop.name)} - Area: {format_number(crop.area)}, "
            f"Production: {format_number(crop.production)}"
        )
    return "\n".join(lines) + "\n\n"


def _market_section(context: AggregatedContext) -> str:
    m = context.market_data
    if m is None:
        return ""
    return (
        f"MARKET DATA FOR {m.crop_name.upper()}:\n"
        f"- Current Month: {m.month}\n"
        f"- Average Price: ₹{m.avg_price:.2f} per unit\n"
        f"- Price Range: ₹{format_number(m.price_range.min)} - ₹{format_number(m.price_range.max)}\n"
        f"- Districts with data: {m.total_districts}\n"
        "\n"
    )


def compose_prompt(
    query: str,
    context: AggregatedContext,
    language: str = "en",
    region: str = "Kerala",
) -> str:
    """Compose the language model prompt for `query` with the gathered context."""
    parts = [
        PREAMBLE.format(language=language_name(language)),
        _weather_section(context),
        _records_section(context),
        _top_crops_section(context, region),
        _market_section(context),
        f"USER QUERY: {query}\n\n",
        INSTRUCTIONS.format(region=region),
        CLOSING,
    ]
    return "".join(parts)
