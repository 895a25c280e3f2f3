"""
FractionSpec — Доля исполнения и позиция во временном окне

Immutable Pydantic модель, которую вызывающая сторона собирает на каждый
вызов apply_fraction. Не сохраняется и не изменяется.

Инварианты жизненного цикла ордера (denominator > 0, duration > 0,
numerator <= denominator, elapsed + remaining == duration) обеспечиваются
внешним слоем и здесь НЕ проверяются. Модель гарантирует только, что
каждое поле является целым в диапазоне uint256.
"""

from pydantic import BaseModel, Field

from auction_amounts.core.math.uint256 import UINT256_MAX


class FractionSpec(BaseModel):
    """
    Доля ордера (numerator/denominator) и время (elapsed/remaining/duration).

    strict=True: bool и float не принимаются как целые.
    """

    # Доля исполнения
    numerator: int = Field(..., ge=0, le=UINT256_MAX, description="Числитель исполняемой доли")
    denominator: int = Field(
        ..., ge=0, le=UINT256_MAX, description="Знаменатель исполняемой доли"
    )

    # Позиция во временном окне
    elapsed: int = Field(..., ge=0, le=UINT256_MAX, description="Прошедшее время окна")
    remaining: int = Field(..., ge=0, le=UINT256_MAX, description="Оставшееся время окна")
    duration: int = Field(..., ge=0, le=UINT256_MAX, description="Длительность окна")

    model_config = {"frozen": True, "strict": True}  # Immutable

    @classmethod
    def full_fill(cls, elapsed: int, remaining: int, duration: int) -> "FractionSpec":
        """
        Спецификация полного исполнения (1/1).

        Args:
            elapsed: Прошедшее время окна
            remaining: Оставшееся время окна
            duration: Длительность окна

        Returns:
            FractionSpec с numerator == denominator == 1
        """
        return cls(
            numerator=1,
            denominator=1,
            elapsed=elapsed,
            remaining=remaining,
            duration=duration,
        )

    @property
    def is_full_fill(self) -> bool:
        """Доля целая: get_fraction вернёт значение без изменений."""
        return self.numerator == self.denominator
