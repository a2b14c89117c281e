"""Rough token and cost estimates for stored messages."""

from __future__ import annotations

import math

from research_assistant.models.domain import TokenMetrics

CHARS_PER_TOKEN = 4


def calculate_token_metrics(text: str, cost_per_1k_tokens: float = 0.03) -> TokenMetrics:
    estimated_tokens = math.ceil(len(text) / CHARS_PER_TOKEN)
    return TokenMetrics(
        input_tokens=estimated_tokens,
        output_tokens=0,
        total_cost=(estimated_tokens / 1000) * cost_per_1k_tokens,
    )
