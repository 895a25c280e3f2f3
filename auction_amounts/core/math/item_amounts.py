"""
Item Amounts — Settlement сумм по items ордера

Применяет apply_fraction к каждому item ордера с направлением округления,
зависящим от стороны:
- offer items         → round_up=False (offerer отдаёт не больше floor)
- consideration items → round_up=True  (получатели получают не меньше ceiling)

Так остаток от округления всегда остаётся у offerer-а и никогда не
фабрикуется в пользу исполняющей стороны.

Ошибка любого item прерывает всё вычисление. В context ошибки
добавляются сторона ("offer"/"consideration") и индекс item.
"""

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from auction_amounts.core.domain.items import (
    ConsiderationItem,
    OfferItem,
    ReceivedItem,
    SpentItem,
)
from auction_amounts.core.math.amount_deriver import AmountDeriver
from auction_amounts.core.math.errors import AmountDerivationError, AmountDivisionByZero

logger = logging.getLogger(__name__)

# Сторона item (используется в context ошибок)
SIDE_OFFER = "offer"
SIDE_CONSIDERATION = "consideration"


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class OrderAmounts:
    """Суммы всех items ордера для исполняемой доли на текущий момент."""

    spent: tuple[SpentItem, ...]
    received: tuple[ReceivedItem, ...]


# =============================================================================
# ITEM-LEVEL DERIVATION
# =============================================================================


def derive_spent_item(
    offer_item: OfferItem,
    fraction_spec: Any,
    deriver: AmountDeriver | None = None,
) -> SpentItem:
    """
    Сумма offer item (округление вниз).

    Args:
        offer_item: Offer item ордера
        fraction_spec: FractionSpec (или совместимый объект)
        deriver: AmountDeriver (опционально, используется default)

    Returns:
        SpentItem с вычисленной суммой
    """
    deriver = deriver or AmountDeriver()
    amount = deriver.apply_fraction(
        offer_item.start_amount, offer_item.end_amount, fraction_spec, round_up=False
    )
    return SpentItem(
        item_type=offer_item.item_type,
        token=offer_item.token,
        identifier=offer_item.identifier,
        amount=amount,
    )


def derive_received_item(
    consideration_item: ConsiderationItem,
    fraction_spec: Any,
    deriver: AmountDeriver | None = None,
) -> ReceivedItem:
    """
    Сумма consideration item (округление вверх).

    Args:
        consideration_item: Consideration item ордера
        fraction_spec: FractionSpec (или совместимый объект)
        deriver: AmountDeriver (опционально, используется default)

    Returns:
        ReceivedItem с вычисленной суммой и получателем
    """
    deriver = deriver or AmountDeriver()
    amount = deriver.apply_fraction(
        consideration_item.start_amount,
        consideration_item.end_amount,
        fraction_spec,
        round_up=True,
    )
    return ReceivedItem(
        item_type=consideration_item.item_type,
        token=consideration_item.token,
        identifier=consideration_item.identifier,
        amount=amount,
        recipient=consideration_item.recipient,
    )


def _division_by_zero(side: str, index: int) -> AmountDivisionByZero:
    # Встроенный ZeroDivisionError (guard_zero_divisors=False) с контекстом item
    return AmountDivisionByZero(
        f"{side} item {index}: division by zero", context={"side": side, "index": index}
    )


def derive_spent_items(
    offer: Sequence[OfferItem],
    fraction_spec: Any,
    deriver: AmountDeriver | None = None,
) -> list[SpentItem]:
    """
    Суммы всех offer items в исходном порядке.

    Raises:
        AmountDerivationError: Первая ошибка (context содержит side/index)
    """
    deriver = deriver or AmountDeriver()
    spent: list[SpentItem] = []
    for index, item in enumerate(offer):
        try:
            spent.append(derive_spent_item(item, fraction_spec, deriver))
        except AmountDerivationError as e:
            logger.warning("Offer item %d amount derivation failed: %s", index, e)
            e.context.update({"side": SIDE_OFFER, "index": index})
            raise
        except ZeroDivisionError as e:
            logger.warning("Offer item %d amount derivation failed: %s", index, e)
            raise _division_by_zero(SIDE_OFFER, index) from e
    return spent


def derive_received_items(
    consideration: Sequence[ConsiderationItem],
    fraction_spec: Any,
    deriver: AmountDeriver | None = None,
) -> list[ReceivedItem]:
    """
    Суммы всех consideration items в исходном порядке.

    Raises:
        AmountDerivationError: Первая ошибка (context содержит side/index)
    """
    deriver = deriver or AmountDeriver()
    received: list[ReceivedItem] = []
    for index, item in enumerate(consideration):
        try:
            received.append(derive_received_item(item, fraction_spec, deriver))
        except AmountDerivationError as e:
            logger.warning("Consideration item %d amount derivation failed: %s", index, e)
            e.context.update({"side": SIDE_CONSIDERATION, "index": index})
            raise
        except ZeroDivisionError as e:
            logger.warning("Consideration item %d amount derivation failed: %s", index, e)
            raise _division_by_zero(SIDE_CONSIDERATION, index) from e
    return received


def derive_order_amounts(
    offer: Sequence[OfferItem],
    consideration: Sequence[ConsiderationItem],
    fraction_spec: Any,
    deriver: AmountDeriver | None = None,
) -> OrderAmounts:
    """
    Суммы всех items ордера для исполняемой доли.

    Args:
        offer: Offer items
        consideration: Consideration items
        fraction_spec: FractionSpec (или совместимый объект)
        deriver: AmountDeriver (опционально, используется default)

    Returns:
        OrderAmounts (spent, received)

    Raises:
        AmountDerivationError: Ошибка первого неудачного item
    """
    deriver = deriver or AmountDeriver()
    spent = derive_spent_items(offer, fraction_spec, deriver)
    received = derive_received_items(consideration, fraction_spec, deriver)

    logger.debug(
        "Derived order amounts: %d spent, %d received items", len(spent), len(received)
    )
    return OrderAmounts(spent=tuple(spent), received=tuple(received))
