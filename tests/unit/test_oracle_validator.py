"""
Тесты для OracleValidator и CrossRateEngine

Проверяет:
1. Свежесть: граница age == max_age_sec, future publish_time
2. Торговый статус
3. Confidence в bps с округлением вверх
4. Кросс-курс: масштаб 10^18, экспонента, атрибуция
"""

import pytest

from src.core.domain import OracleKind, OraclePrice, OraclePriceStatus
from src.core.errors import ErrorKind, VaultEngineError
from src.oracle import (
    CROSS_RATE_SCALE,
    OracleValidationPolicy,
    OracleValidator,
    compute_cross_rate,
    confidence_bps,
    validate_oracle_price,
)


PUBLISH_TIME = 1_700_000_000


def make_price(
    price: int = 100_000_000,
    confidence: int = 50_000,
    exponent: int = -8,
    status: OraclePriceStatus = OraclePriceStatus.TRADING,
    feed: str = "usdc-usd",
) -> OraclePrice:
    return OraclePrice(
        kind=OracleKind.PYTH,
        feed=feed,
        price=price,
        confidence=confidence,
        exponent=exponent,
        publish_time=PUBLISH_TIME,
        publish_slot=1,
        status=status,
    )


# =============================================================================
# FRESHNESS
# =============================================================================


class TestFreshness:
    """Тесты проверки свежести"""

    def test_accepts_at_boundary(self) -> None:
        """age == max_age_sec допускается"""
        validate_oracle_price(make_price(), PUBLISH_TIME + 60, 60, 100)

    def test_rejects_one_second_past_boundary(self) -> None:
        with pytest.raises(VaultEngineError) as exc:
            validate_oracle_price(make_price(), PUBLISH_TIME + 61, 60, 100)
        assert exc.value.kind == ErrorKind.ORACLE_PRICE_STALE
        assert exc.value.details["age_sec"] == 61

    def test_future_publish_time_accepted(self) -> None:
        """Отрицательный age не отклоняется"""
        validate_oracle_price(make_price(), PUBLISH_TIME - 3_600, 60, 100)


# =============================================================================
# STATUS
# =============================================================================


class TestStatus:
    """Тесты торгового статуса"""

    def test_halted_rejected_when_trading_required(self) -> None:
        price = make_price(status=OraclePriceStatus.HALTED)
        with pytest.raises(VaultEngineError) as exc:
            validate_oracle_price(price, PUBLISH_TIME, 60, 100, require_trading=True)
        assert exc.value.kind == ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE

    def test_halted_accepted_when_not_required(self) -> None:
        price = make_price(status=OraclePriceStatus.HALTED)
        validate_oracle_price(price, PUBLISH_TIME, 60, 100, require_trading=False)

    def test_trading_accepted_when_required(self) -> None:
        validate_oracle_price(make_price(), PUBLISH_TIME, 60, 100, require_trading=True)


# =============================================================================
# CONFIDENCE
# =============================================================================


class TestConfidence:
    """Тесты confidence interval"""

    def test_confidence_bps_exact(self) -> None:
        """50_000 / 100_000_000 = 5 bps"""
        assert confidence_bps(make_price()) == 5

    def test_confidence_rounds_up(self) -> None:
        """1 / 30_000 = 0.33 bps → 1 bps"""
        price = make_price(price=30_000, confidence=1)
        assert confidence_bps(price) == 1

        with pytest.raises(VaultEngineError) as exc:
            validate_oracle_price(price, PUBLISH_TIME, 60, 0)
        assert exc.value.kind == ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE

        validate_oracle_price(price, PUBLISH_TIME, 60, 1)

    def test_too_wide_rejected(self) -> None:
        with pytest.raises(VaultEngineError) as exc:
            validate_oracle_price(make_price(), PUBLISH_TIME, 60, 4)
        assert exc.value.kind == ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE
        assert exc.value.details == {"confidence_bps": 5, "max_confidence_bps": 4}

    def test_zero_price_rejected(self) -> None:
        with pytest.raises(VaultEngineError) as exc:
            validate_oracle_price(make_price(price=0), PUBLISH_TIME, 60, 100)
        assert exc.value.kind == ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE

    def test_negative_price_uses_absolute_value(self) -> None:
        validate_oracle_price(make_price(price=-100_000_000), PUBLISH_TIME, 60, 5)


# =============================================================================
# VALIDATOR WITH POLICY
# =============================================================================


class TestOracleValidator:
    """Тесты для OracleValidator с политикой"""

    def test_default_policy(self) -> None:
        validator = OracleValidator()
        assert validator.policy.max_age_sec == 60
        validator.validate(make_price(), PUBLISH_TIME + 60)

    def test_policy_applied(self) -> None:
        validator = OracleValidator(
            OracleValidationPolicy(max_age_sec=10, max_confidence_bps=100, require_trading_status=True)
        )
        with pytest.raises(VaultEngineError) as exc:
            validator.validate(make_price(), PUBLISH_TIME + 11)
        assert exc.value.kind == ErrorKind.ORACLE_PRICE_STALE

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_age_sec": -1},
            {"max_confidence_bps": -1},
            {"max_confidence_bps": 10_001},
            {"max_confidence_bps": 20_000},
        ],
    )
    def test_invalid_policy_rejected(self, kwargs: dict) -> None:
        with pytest.raises(VaultEngineError) as exc:
            OracleValidationPolicy(**kwargs)
        assert exc.value.kind == ErrorKind.INVALID_ARGUMENT

    def test_policy_bps_bounds_accepted(self) -> None:
        assert OracleValidationPolicy(max_confidence_bps=0).max_confidence_bps == 0
        assert OracleValidationPolicy(max_confidence_bps=10_000).max_confidence_bps == 10_000


# =============================================================================
# CROSS RATE
# =============================================================================


class TestCrossRate:
    """Тесты для compute_cross_rate"""

    def test_basic_ratio(self) -> None:
        """to=$1, from=$20 → 0.05 = 5e16 * 10^-18"""
        from_usd = make_price(price=2_000_000_000, feed="sol-usd")
        to_usd = make_price(price=100_000_000, feed="usdc-usd")

        cross = compute_cross_rate(from_usd, to_usd)

        assert cross.scaled_ratio == 50_000_000_000_000_000
        assert cross.exponent == -18
        assert cross.source_price == to_usd

    def test_exponent_difference(self) -> None:
        from_usd = make_price(price=1_000_000, exponent=-6)
        to_usd = make_price(price=100_000_000, exponent=-8)

        cross = compute_cross_rate(from_usd, to_usd)

        assert cross.exponent == -8 - (-6) - 18
        assert cross.scaled_ratio == 100 * CROSS_RATE_SCALE

    def test_ratio_rounds_down(self) -> None:
        cross = compute_cross_rate(make_price(price=3), make_price(price=1))
        assert cross.scaled_ratio == 333_333_333_333_333_333

    def test_zero_from_price_rejected(self) -> None:
        with pytest.raises(VaultEngineError) as exc:
            compute_cross_rate(make_price(price=0), make_price())
        assert exc.value.kind == ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(VaultEngineError) as exc:
            compute_cross_rate(make_price(), make_price(price=-1))
        assert exc.value.kind == ErrorKind.ORACLE_CONFIDENCE_TOO_WIDE
