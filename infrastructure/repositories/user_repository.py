"""
用户仓储实现 - 使用SQLAlchemy实现数据访问
"""
from typing import Any, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError

from domain.user.entity import User
from domain.user.repository import UserRepository
from infrastructure.models.user import UserModel
from core.logging_config import get_logger
from domain.common.exceptions import (
    UserAlreadyExistsException,
    UserNotFoundException,
)


logger = get_logger(__name__)


class SQLAlchemyUserRepository(UserRepository):
    """用户仓储的SQLAlchemy实现"""

    PATCHABLE_FIELDS = frozenset({"name"})

    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, model: UserModel) -> User:
        """将数据库模型转换为领域实体"""
        return User(
            id=model.id,
            email=model.email,
            name=model.name,
            hashed_password=model.hashed_password,
        )

    def _to_model(self, entity: User) -> UserModel:
        """将领域实体转换为数据库模型（id 交由模型默认值生成）"""
        return UserModel(
            email=entity.email,
            name=entity.name,
            hashed_password=entity.hashed_password,
        )

    async def save(self, user: User) -> User:
        """创建用户"""
        try:
            db_user = self._to_model(user)
            self.session.add(db_user)
            await self.session.flush()
            await self.session.refresh(db_user)
            return self._to_entity(db_user)
        except IntegrityError as e:
            await self.session.rollback()
            if "email" in str(e).lower():
                logger.warning(
                    "create_user_conflict",
                    field="email",
                    email=user.email)
                raise UserAlreadyExistsException(user.email)
            raise

    async def find_all(self) -> List[User]:
        """获取用户列表"""
        result = await self.session.execute(select(UserModel).order_by(UserModel.email))
        return [self._to_entity(db_user) for db_user in result.scalars().all()]

    async def find_by_id(self, user_id: str) -> User:
        """根据ID获取用户"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        db_user = result.scalar_one_or_none()
        if db_user is None:
            raise UserNotFoundException(user_id)
        return self._to_entity(db_user)

    async def find_by_email(self, email: str) -> Optional[User]:
        """根据邮箱获取用户"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        db_user = result.scalar_one_or_none()
        return self._to_entity(db_user) if db_user else None

    async def patch(self, user_id: str, fields: dict[str, Any]) -> None:
        """部分更新用户"""
        unknown = set(fields) - self.PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"fields not patchable: {sorted(unknown)}")
        if not fields:
            await self.find_by_id(user_id)
            return

        result = await self.session.execute(
            update(UserModel).where(UserModel.id == user_id).values(**fields)
        )
        if result.rowcount == 0:
            raise UserNotFoundException(user_id)

    async def delete(self, user_id: str) -> None:
        """删除用户"""
        result = await self.session.execute(
            delete(UserModel).where(UserModel.id == user_id)
        )
        if result.rowcount == 0:
            raise UserNotFoundException(user_id)
