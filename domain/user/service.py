"""
用户领域服务 - 处理注册与认证的业务规则
"""
from typing import Optional
import asyncio
import hashlib
import hmac
import secrets

from domain.common.exceptions import (
    PasswordErrorException,
    UserAlreadyExistsException,
)
from .entity import User
from .repository import UserRepository


class PasswordService:
    """密码服务 - 加盐的 PBKDF2-HMAC-SHA256 慢哈希

    哈希格式: ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``。
    迭代次数随哈希一起保存，调高成本因子后旧哈希仍可校验。
    """

    ALGORITHM = "pbkdf2_sha256"

    def __init__(self, iterations: int):
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self.iterations = iterations
        # 未知邮箱登录时用来比对的占位哈希，使两条路径耗时一致
        self._dummy_hash = self.hash_password(secrets.token_urlsafe(16))

    def _derive(self, password: str, salt: str, iterations: int) -> str:
        return hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            salt.encode("utf-8"),
            iterations,
        ).hex()

    def hash_password(self, password: str) -> str:
        """密码哈希"""
        salt = secrets.token_hex(16)
        digest = self._derive(password, salt, self.iterations)
        return f"{self.ALGORITHM}${self.iterations}${salt}${digest}"

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """验证密码（常量时间比较）"""
        try:
            algorithm, iterations, salt, expected = hashed_password.split("$")
            rounds = int(iterations)
        except ValueError:
            return False
        if algorithm != self.ALGORITHM:
            return False
        candidate = self._derive(plain_password, salt, rounds)
        return hmac.compare_digest(candidate, expected)

    def burn_dummy_check(self, plain_password: str) -> None:
        """对占位哈希做一次校验，结果丢弃"""
        self.verify_password(plain_password, self._dummy_hash)


class UserDomainService:
    """用户领域服务 - 编排注册、认证业务流程"""

    def __init__(self, user_repository: UserRepository, password_service: PasswordService):
        self.user_repository = user_repository
        self.password_service = password_service

    async def register_user(self, email: str, password: str, name: str) -> User:
        """用户注册的业务流程"""
        # 业务规则1：邮箱预检查（尽力而为，唯一约束由存储层兜底）
        existing = await self.user_repository.find_by_email(email)
        if existing is not None:
            raise UserAlreadyExistsException(email)

        # 业务规则2：只保存哈希
        # PBKDF2 计算放到线程池，避免阻塞事件循环
        hashed = await asyncio.to_thread(self.password_service.hash_password, password)
        user = User(
            id=None,
            email=email,
            name=name,
            hashed_password=hashed,
        )
        return await self.user_repository.save(user)

    async def authenticate_user(self, email: str, password: str) -> User:
        """用户认证的业务流程"""
        user: Optional[User] = await self.user_repository.find_by_email(email)
        if user is None:
            await asyncio.to_thread(self.password_service.burn_dummy_check, password)
            raise PasswordErrorException()

        verified = await asyncio.to_thread(
            self.password_service.verify_password, password, user.hashed_password
        )
        if not verified:
            raise PasswordErrorException()

        return user
