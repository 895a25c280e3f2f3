"""
Items — Модели offer/consideration items ордера

Offer item — то, что отдаёт создатель ордера (offerer).
Consideration item — то, что должны получить получатели (recipients).

У каждого item сумма может меняться линейно от start_amount до
end_amount в окне действия ордера. После вычисления суммы на текущий
момент item превращается в SpentItem (offer) или ReceivedItem
(consideration) с единственным полем amount.
"""

from enum import Enum

from pydantic import BaseModel, Field

from auction_amounts.core.math.uint256 import UINT256_MAX


# =============================================================================
# ENUMS
# =============================================================================


class ItemType(str, Enum):
    """Тип актива item"""

    NATIVE = "native"
    ERC20 = "erc20"
    ERC721 = "erc721"
    ERC1155 = "erc1155"
    ERC721_WITH_CRITERIA = "erc721_with_criteria"
    ERC1155_WITH_CRITERIA = "erc1155_with_criteria"


# =============================================================================
# ORDER ITEMS
# =============================================================================


class OfferItem(BaseModel):
    """
    Offer item с диапазоном сумм.

    start_amount == end_amount → фиксированная сумма (без аукциона).
    """

    item_type: ItemType = Field(..., description="Тип актива")
    token: str = Field(..., min_length=1, description="Адрес/идентификатор токена")
    identifier: int = Field(
        default=0, ge=0, le=UINT256_MAX, description="Идентификатор токена (или criteria)"
    )
    start_amount: int = Field(..., ge=0, le=UINT256_MAX, description="Сумма в начале окна")
    end_amount: int = Field(..., ge=0, le=UINT256_MAX, description="Сумма в конце окна")

    model_config = {"frozen": True, "strict": True}

    @property
    def is_fixed_amount(self) -> bool:
        """Сумма не меняется во времени"""
        return self.start_amount == self.end_amount


class ConsiderationItem(OfferItem):
    """Consideration item: offer item с получателем."""

    recipient: str = Field(..., min_length=1, description="Получатель item")


# =============================================================================
# SETTLED ITEMS
# =============================================================================


class SpentItem(BaseModel):
    """Offer item с вычисленной суммой на текущий момент."""

    item_type: ItemType
    token: str = Field(..., min_length=1)
    identifier: int = Field(default=0, ge=0, le=UINT256_MAX)
    amount: int = Field(..., ge=0, le=UINT256_MAX)

    model_config = {"frozen": True, "strict": True}


class ReceivedItem(SpentItem):
    """Consideration item с вычисленной суммой и получателем."""

    recipient: str = Field(..., min_length=1)
