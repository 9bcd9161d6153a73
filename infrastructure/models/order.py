"""
订单数据库模型 - SQLAlchemy ORM模型
注意：这是基础设施层的实现细节，不是领域模型
"""
from sqlalchemy import BigInteger, Column, Integer, Numeric

from .base import Base


class OrderModel(Base):
    """订单数据库模型"""
    __tablename__ = "orders"

    # sqlite 只有 INTEGER PRIMARY KEY 才是自增 rowid
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True, index=True)
    total = Column(Numeric(12, 2, asdecimal=True), nullable=False, comment="订单金额")

    def __repr__(self):
        return f"<OrderModel(id={self.id}, total={self.total})>"
