"""Promotional bonus applied to payout previews (never to the charged amount)."""

import math
from dataclasses import dataclass

from karera.config import Settings

DEFAULT_PROMO_TEMPLATE = "BOOKIS +{percent}% PER BET"


def _percent_text(percent: float) -> str:
    return str(int(percent)) if float(percent).is_integer() else str(percent)


@dataclass(frozen=True)
class PromoConfig:
    """Bonus percent plus the banner text template (``{percent}`` placeholder)."""

    percent: float
    text_template: str = DEFAULT_PROMO_TEMPLATE

    @property
    def is_active(self) -> bool:
        return math.isfinite(self.percent) and self.percent > 0

    @property
    def factor(self) -> float:
        """Multiplier for previewed payouts; 1.0 when the promo is inactive."""
        return 1 + self.percent / 100 if self.is_active else 1.0

    @property
    def text(self) -> str:
        template = (self.text_template or "").strip() or DEFAULT_PROMO_TEMPLATE
        return template.replace("{percent}", _percent_text(self.percent))

    @classmethod
    def build(cls, percent, text_template: str | None = None) -> "PromoConfig | None":
        """PromoConfig from raw values, or None when there is no usable bonus."""
        try:
            pct = float(percent)
        except (TypeError, ValueError):
            return None
        promo = cls(percent=pct, text_template=text_template or DEFAULT_PROMO_TEMPLATE)
        return promo if promo.is_active else None

    @classmethod
    def from_settings(cls, settings: Settings) -> "PromoConfig | None":
        if not settings.promo_enabled:
            return None
        return cls.build(settings.promo_percent, settings.promo_banner_text)


def promo_factor(promo: PromoConfig | None) -> float:
    return promo.factor if promo else 1.0
