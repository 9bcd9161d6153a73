"""
用户数据库模型 - SQLAlchemy ORM模型
注意：这是基础设施层的实现细节，不是领域模型
"""
import uuid

from sqlalchemy import Column, String

from .base import Base


def _new_user_id() -> str:
    return str(uuid.uuid4())


class UserModel(Base):
    """
    用户数据库模型

    这是数据库表的映射，不包含业务逻辑
    所有业务规则都在 domain.user 中
    """
    __tablename__ = "users"

    # 主键：插入时生成，客户端不可指定
    id = Column(String(36), primary_key=True, default=_new_user_id)

    # 邮箱唯一约束是并发注册下的最终防线
    email = Column(String(255), unique=True, index=True, nullable=False, comment="邮箱")
    name = Column(String(100), nullable=False, default="", comment="显示名称")

    # 认证信息
    hashed_password = Column(String(255), nullable=False, comment="密码哈希")

    def __repr__(self):
        return f"<UserModel(id={self.id}, email='{self.email}')>"
