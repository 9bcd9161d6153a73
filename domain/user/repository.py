"""
用户仓储接口 - 定义数据访问的抽象接口
"""
from abc import ABC, abstractmethod
from typing import Any, Optional, List
from .entity import User


class UserRepository(ABC):
    """用户仓储抽象接口 - 只定义能做什么，不管怎么做"""

    @abstractmethod
    async def save(self, user: User) -> User:
        """保存用户；邮箱重复时抛出 UserAlreadyExistsException"""
        pass

    @abstractmethod
    async def find_all(self) -> List[User]:
        """获取用户列表"""
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> User:
        """根据ID获取用户，不存在时抛出 UserNotFoundException"""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """根据邮箱获取用户，不存在时返回 None"""
        pass

    @abstractmethod
    async def patch(self, user_id: str, fields: dict[str, Any]) -> None:
        """部分更新：仅写入 fields 中出现的字段"""
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """删除用户，不存在时抛出 UserNotFoundException"""
        pass
