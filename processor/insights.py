"""
Insights Generator - AI market analysis for one instrument

One LLM call per request, bounded by its own timeout. Any timeout, API
error or unusable output is answered with deterministic fallback insights
built from the current price, so callers always get a complete result.
"""
import asyncio
from dataclasses import dataclass, fields
from typing import Any, Optional

from loguru import logger

from constants.enums import InsightsFailureKind
from llm import LLMClient, LLMError, set_llm_context
from prompts import PromptLoader
from .output_parser import as_finite_number, load_llm_json


# Fallback growth per horizon, applied to the current price
FALLBACK_GROWTH = {
    "three_months": 1.02,
    "six_months": 1.05,
    "twelve_months": 1.08,
    "twenty_four_months": 1.12,
}

# snake_case field -> key in the model's JSON
_ESTIMATE_KEYS = {
    "three_months": "threeMonths",
    "six_months": "sixMonths",
    "twelve_months": "twelveMonths",
    "twenty_four_months": "twentyFourMonths",
}

_TEXT_DEFAULTS = {
    "market_overview": ("marketOverview", "Market analysis unavailable"),
    "macro_analysis": ("macroAnalysis", "Macro analysis unavailable"),
    "regional_impact": ("regionalImpact", "Regional impact analysis unavailable"),
    "thailand_impact": ("thailandImpact", "Thailand impact analysis unavailable"),
    "future_outlook": ("futureOutlook", "Future outlook unavailable"),
}


@dataclass(frozen=True)
class PriceEstimates:
    """Projected prices per horizon."""
    three_months: float
    six_months: float
    twelve_months: float
    twenty_four_months: float

    @classmethod
    def from_growth(cls, current_price: float) -> "PriceEstimates":
        return cls(**{name: current_price * growth for name, growth in FALLBACK_GROWTH.items()})

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class MarketInsights:
    """
    AI market analysis for an instrument.

    `fallback_used` is true when the analysis was not produced by the model;
    `failure` then names the reason.
    """
    symbol: str
    instrument_name: str
    current_price: float
    market_overview: str
    price_estimates: PriceEstimates
    macro_analysis: str
    regional_impact: str
    thailand_impact: str
    future_outlook: str
    fallback_used: bool = False
    failure: Optional[str] = None

    @classmethod
    def fallback(
        cls,
        symbol: str,
        instrument_name: str,
        current_price: float,
        failure: InsightsFailureKind,
    ) -> "MarketInsights":
        return cls(
            symbol=symbol,
            instrument_name=instrument_name,
            current_price=current_price,
            market_overview=(
                f"Current market analysis for {instrument_name} is temporarily unavailable. "
                f"The instrument is trading at {current_price}."
            ),
            price_estimates=PriceEstimates.from_growth(current_price),
            macro_analysis="Detailed macro analysis is temporarily unavailable. Please try again later.",
            regional_impact="Regional impact analysis for Southeast Asia is temporarily unavailable.",
            thailand_impact="Thailand-specific impact analysis is temporarily unavailable.",
            future_outlook="Future outlook analysis is temporarily unavailable. Please try again later.",
            fallback_used=True,
            failure=failure.value,
        )

    def to_dict(self) -> dict:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["price_estimates"] = self.price_estimates.to_dict()
        return data


class InsightsGenerator:
    """Generates MarketInsights with the LLM, falling back deterministically."""

    def __init__(
        self,
        client: LLMClient,
        timeout: float = 20.0,
        prompt_loader: Optional[PromptLoader] = None,
    ):
        """
        Args:
            client: LLM client used for the analysis call
            timeout: Budget for the analysis call in seconds
            prompt_loader: Prompt template loader
        """
        self.client = client
        self.timeout = timeout
        self.prompt_loader = prompt_loader or PromptLoader()

    async def generate(
        self,
        symbol: str,
        current_price: float,
        instrument_name: Optional[str] = None,
    ) -> MarketInsights:
        """
        Generate insights for an instrument at its current price.

        Raises:
            ValueError: If the symbol is blank or the price is not a positive number
        """
        symbol = (symbol or "").strip()
        if not symbol:
            raise ValueError("symbol must not be empty")
        price = as_finite_number(current_price)
        if price is None or price <= 0:
            raise ValueError(f"current_price must be a positive number, got {str(current_price)[:20]}")
        current_price = price
        name = (instrument_name or "").strip() or symbol

        set_llm_context(task_type="market_insights")
        prompt = self.prompt_loader.format(
            "market_insights",
            symbol=symbol,
            instrument_name=name,
            current_price=current_price,
        )

        try:
            response = await asyncio.wait_for(
                self.client.generate(
                    prompt=prompt,
                    system=self.prompt_loader.get("market_insights_system"),
                    max_tokens=1500,
                    temperature=0.7,
                    json_mode=True,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            return self._fallback(symbol, name, current_price, InsightsFailureKind.TIMEOUT, f"exceeded {self.timeout}s")
        except LLMError as e:
            return self._fallback(symbol, name, current_price, InsightsFailureKind.API_ERROR, str(e))
        except Exception as e:
            return self._fallback(symbol, name, current_price, InsightsFailureKind.API_ERROR, f"{type(e).__name__}: {e}")

        try:
            data = load_llm_json(response.content)
        except ValueError as e:
            return self._fallback(symbol, name, current_price, InsightsFailureKind.MALFORMED_RESPONSE, str(e))
        if not isinstance(data, dict):
            return self._fallback(
                symbol, name, current_price, InsightsFailureKind.MALFORMED_RESPONSE,
                f"expected JSON object, got {type(data).__name__}",
            )

        insights = self._from_model(data, symbol, name, current_price)
        logger.info(f"[Insights] Generated insights for {symbol} at {current_price}")
        return insights

    @staticmethod
    def _from_model(data: dict, symbol: str, name: str, current_price: float) -> MarketInsights:
        """Fill every field, defaulting missing text and unusable estimates."""
        raw_estimates = data.get("priceEstimates")
        if not isinstance(raw_estimates, dict):
            raw_estimates = {}

        estimates = {}
        for field_name, key in _ESTIMATE_KEYS.items():
            value = _as_price(raw_estimates.get(key))
            estimates[field_name] = value if value is not None else current_price

        texts = {}
        for field_name, (key, default) in _TEXT_DEFAULTS.items():
            value = data.get(key)
            texts[field_name] = value.strip() if isinstance(value, str) and value.strip() else default

        return MarketInsights(
            symbol=symbol,
            instrument_name=name,
            current_price=current_price,
            price_estimates=PriceEstimates(**estimates),
            **texts,
        )

    @staticmethod
    def _fallback(symbol, name, current_price, kind: InsightsFailureKind, detail: str) -> MarketInsights:
        logger.warning(f"[Insights] AI insights unavailable for {symbol} ({kind.value}): {detail}")
        return MarketInsights.fallback(symbol, name, current_price, kind)


def _as_price(value: Any) -> Optional[float]:
    """A positive finite price from a JSON number or numeric string."""
    if isinstance(value, str):
        try:
            value = float(value.strip().replace(",", ""))
        except ValueError:
            return None
    number = as_finite_number(value)
    if number is None or number <= 0:
        return None
    return number
