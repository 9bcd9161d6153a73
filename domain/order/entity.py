"""
订单领域实体
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class Order:
    """订单实体 - id 由存储层分配，创建后不可变"""

    id: Optional[int]
    total: Decimal

    def __post_init__(self):
        if not isinstance(self.total, Decimal):
            self.total = Decimal(str(self.total))

    @staticmethod
    def validate_total(total: Decimal) -> None:
        """业务规则：订单金额必须为正数，且精确到分（最多两位小数）"""
        if total is None or Decimal(str(total)) <= 0:
            raise ValueError("total must be positive")
        if Decimal(str(total)).normalize().as_tuple().exponent < -2:
            raise ValueError("total must have at most 2 decimal places")
