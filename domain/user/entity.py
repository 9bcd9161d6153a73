"""
用户领域实体 - 包含核心业务规则
"""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class User:
    """用户实体 - 领域核心

    id 为存储层在插入时生成的 UUID 字符串，客户端不可指定。
    hashed_password 只保存单向哈希结果，永远不会出现在响应中。
    """

    id: Optional[str]
    email: str
    name: str
    hashed_password: str = field(repr=False)

    @staticmethod
    def validate_name(name: Optional[str]) -> None:
        """业务规则：名称不能为空"""
        if name is None or not name.strip():
            raise ValueError("name must not be empty")
